"""Application layer - cart business rules."""

from typing import Final

from ..domain.ports import CartRepository, ProductRepository
from ..domain.results import (
    CartFailure,
    CartFailureReason,
    CartOperationResult,
    CartSuccess,
)
from ..logging_config import cart_operation_context, get_logger
from .locks import ProductLocks

logger: Final = get_logger(__name__)


class CartManager:
    """Enforces the add-to-cart rules before the cart store is written.

    Checks run in a fixed order (product exists, product in stock, quantity
    within the product's maximum) and the first failing check decides the
    result. The store is written at most once per call and only when every
    check passes.
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        product_repository: ProductRepository,
        locks: ProductLocks | None = None,
    ):
        self.cart_repository = cart_repository
        self.product_repository = product_repository
        self.locks = locks if locks is not None else ProductLocks()

    async def add_to_cart(self, product_id: str, quantity: int) -> CartOperationResult:
        """Attempt to add ``quantity`` units of a product to the cart.

        Every log line emitted during the call carries ``product_id`` and
        ``quantity``.

        Args:
            product_id: Id of the requested product (treated as opaque)
            quantity: Units to add

        Returns:
            CartSuccess with the new total item count, or CartFailure
        """
        with cart_operation_context("add_to_cart", product_id, quantity):
            logger.debug("Adding to cart")

            if quantity <= 0:
                # Not rejected here; the sum is applied as requested
                logger.warning("Non-positive quantity requested")

            async with self.locks.hold(product_id):
                return await self._add_to_cart_locked(product_id, quantity)

    async def _add_to_cart_locked(
        self, product_id: str, quantity: int
    ) -> CartOperationResult:
        product = await self.product_repository.get_product(product_id)
        if product is None:
            logger.warning("Add to cart refused - product not found")
            return CartFailure(CartFailureReason.NOT_FOUND)

        if not product.in_stock:
            logger.warning("Add to cart refused - out of stock")
            return CartFailure(CartFailureReason.OUT_OF_STOCK)

        current_quantity = await self.cart_repository.get_quantity(product_id)
        new_quantity = current_quantity + quantity
        if not product.allows_total(new_quantity):
            logger.warning(
                "Add to cart refused - max quantity reached",
                current_quantity=current_quantity,
                max_quantity=product.max_quantity,
            )
            return CartFailure(CartFailureReason.MAX_QUANTITY_REACHED)

        await self.cart_repository.upsert_quantity(product_id, new_quantity)
        total_items = await self.cart_repository.get_total_items()

        logger.info(
            "Item added to cart", line_quantity=new_quantity, total_items=total_items
        )
        return CartSuccess(total_items)
