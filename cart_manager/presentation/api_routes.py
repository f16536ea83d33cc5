from typing import Annotated, Final, Literal, assert_never

from fastapi import APIRouter, Depends, HTTPException, Path, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ..application.cart_manager import CartManager
from ..application.locks import ProductLocks
from ..domain.ports import CartRepository, ProductRepository
from ..infrastructure.database.database import get_async_session
from ..infrastructure.database.repositories import (
    SqlCartRepository,
    SqlProductRepository,
)
from .error_handlers import FAILURE_STATUS_CODES
from .ui_state import Error, Idle, ItemAdded
from .view_model import CartViewModel

api_router: Final = APIRouter(
    prefix="/api/v1",
    tags=["cart"],
    responses={
        404: {"description": "Not Found - Product does not exist"},
        409: {"description": "Conflict - Product out of stock or max quantity"},
        422: {"description": "Validation Error - Request body validation failed"},
    },
)

# Shared by every request so that adds for one product never interleave
product_locks: Final = ProductLocks()


# Request Models
class AddToCartRequest(BaseModel):
    """Request model for adding a product to the cart."""

    product_id: str = Field(
        ...,
        min_length=1,
        description="Id of the product to add",
        examples=["p1"],
    )
    quantity: int = Field(
        ...,
        description="Units to add to the quantity already in the cart",
        examples=[1, 3],
    )


# Response Models
class CartStateResponse(BaseModel):
    """UI state published after an add-to-cart request."""

    state: Literal["idle", "item_added", "error"] = Field(
        description="Kind of state"
    )
    total_items: int | None = Field(
        None, description="Total items in the cart (item_added only)"
    )
    message: str | None = Field(None, description="Error message (error only)")


class CartResponse(BaseModel):
    """Contents of the cart."""

    lines: dict[str, int] = Field(description="Quantity per product id")
    total_items: int = Field(description="Sum of all quantities")


class CartLineResponse(BaseModel):
    """Quantity of one product in the cart."""

    product_id: str = Field(description="Product id")
    quantity: int = Field(description="Quantity in the cart (0 when absent)")


class ProductResponse(BaseModel):
    """Product information as used by the cart."""

    id: str = Field(description="Product id")
    name: str = Field(description="Display name")
    in_stock: bool = Field(description="Whether the product can be added")
    max_quantity: int = Field(description="Maximum units allowed in one cart")


# Dependencies
async def get_cart_repository(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> CartRepository:
    return SqlCartRepository(session)


async def get_product_repository(
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ProductRepository:
    return SqlProductRepository(session)


def get_cart_manager(
    cart_repository: Annotated[CartRepository, Depends(get_cart_repository)],
    product_repository: Annotated[
        ProductRepository, Depends(get_product_repository)
    ],
) -> CartManager:
    return CartManager(cart_repository, product_repository, locks=product_locks)


@api_router.post(
    "/cart/items",
    response_model=CartStateResponse,
    summary="Add a product to the cart",
    responses={
        404: {"model": CartStateResponse},
        409: {"model": CartStateResponse},
    },
)
async def api_add_to_cart(
    payload: AddToCartRequest,
    cart_manager: Annotated[CartManager, Depends(get_cart_manager)],
):
    """Add units of a product to the cart and return the resulting UI state."""
    view_model = CartViewModel(cart_manager)
    state = await view_model.add_item(payload.product_id, payload.quantity)

    match state:
        case ItemAdded(total_items=total_items):
            return CartStateResponse(state="item_added", total_items=total_items)
        case Error(message=message, reason=reason):
            body = CartStateResponse(state="error", message=message)
            return JSONResponse(
                status_code=FAILURE_STATUS_CODES[reason],
                content=body.model_dump(),
            )
        case Idle():
            return CartStateResponse(state="idle")
        case _:
            assert_never(state)


@api_router.get("/cart", response_model=CartResponse, summary="Get cart contents")
async def api_get_cart(
    cart_repository: Annotated[CartRepository, Depends(get_cart_repository)],
):
    lines = await cart_repository.get_lines()
    total_items = await cart_repository.get_total_items()
    return CartResponse(lines=lines, total_items=total_items)


@api_router.get(
    "/cart/items/{product_id}",
    response_model=CartLineResponse,
    summary="Get quantity of one product in the cart",
)
async def api_get_cart_line(
    product_id: Annotated[str, Path(min_length=1)],
    cart_repository: Annotated[CartRepository, Depends(get_cart_repository)],
):
    quantity = await cart_repository.get_quantity(product_id)
    return CartLineResponse(product_id=product_id, quantity=quantity)


@api_router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    summary="Get a product",
)
async def api_get_product(
    product_id: Annotated[str, Path(min_length=1)],
    product_repository: Annotated[
        ProductRepository, Depends(get_product_repository)
    ],
):
    product = await product_repository.get_product(product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Product '{product_id}' not found",
        )
    return ProductResponse(
        id=product.id,
        name=product.name,
        in_stock=product.in_stock,
        max_quantity=product.max_quantity,
    )
