"""Infrastructure layer - SQL repository implementations."""

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ...domain.constants import EMPTY_LINE_QUANTITY
from ...domain.entities import Product as DomainProduct
from ...domain.ports import CartRepository, ProductRepository
from ...logging_utils import log_database_operation
from .models import CartLine as CartLineModel
from .models import Product as ProductModel


class SqlProductRepository(ProductRepository):
    """Repository for Product persistence operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, domain_product: DomainProduct) -> DomainProduct:
        """Insert or replace a product in the catalog."""
        product_model = await self.session.get(ProductModel, domain_product.id)
        if product_model is None:
            product_model = ProductModel.from_domain(domain_product)
        else:
            product_model.name = domain_product.name
            product_model.in_stock = domain_product.in_stock
            product_model.max_quantity = domain_product.max_quantity

        self.session.add(product_model)
        await self.session.commit()

        log_database_operation(
            operation="save", table="Product", product_id=domain_product.id
        )
        return product_model.to_domain()

    async def get_product(self, product_id: str) -> DomainProduct | None:
        product_model = await self.session.get(ProductModel, product_id)
        return product_model.to_domain() if product_model else None


class SqlCartRepository(CartRepository):
    """Repository for cart line persistence operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert_quantity(self, product_id: str, new_quantity: int) -> None:
        line = await self.session.get(CartLineModel, product_id)
        if line is None:
            line = CartLineModel(product_id=product_id, quantity=new_quantity)
        else:
            line.quantity = new_quantity

        self.session.add(line)
        await self.session.commit()

        log_database_operation(
            operation="upsert",
            table="CartLine",
            product_id=product_id,
            quantity=new_quantity,
        )

    async def get_quantity(self, product_id: str) -> int:
        line = await self.session.get(CartLineModel, product_id)
        return line.quantity if line else EMPTY_LINE_QUANTITY

    async def get_total_items(self) -> int:
        statement = select(func.coalesce(func.sum(CartLineModel.quantity), 0))
        result = await self.session.execute(statement)
        return int(result.scalar_one())

    async def get_lines(self) -> dict[str, int]:
        result = await self.session.execute(select(CartLineModel))
        lines = [model.to_domain() for model in result.scalars().all()]
        return {line.product_id: line.quantity for line in lines}
