from sqlmodel import Field, SQLModel

from ...domain.entities import CartLine as DomainCartLine
from ...domain.entities import Product as DomainProduct


class Product(SQLModel, table=True):  # type: ignore[call-arg]
    """A catalog product the cart can refer to."""

    id: str = Field(primary_key=True, min_length=1)
    name: str
    in_stock: bool = Field(default=True)
    max_quantity: int = Field(default=0, ge=0)

    @classmethod
    def from_domain(cls, domain_product: DomainProduct) -> "Product":
        """Convert domain entity to persistence model."""
        return cls(
            id=domain_product.id,
            name=domain_product.name,
            in_stock=domain_product.in_stock,
            max_quantity=domain_product.max_quantity,
        )

    def to_domain(self) -> DomainProduct:
        """Convert persistence model to domain entity."""
        return DomainProduct(
            id=self.id,
            name=self.name,
            in_stock=self.in_stock,
            max_quantity=self.max_quantity,
        )


class CartLine(SQLModel, table=True):  # type: ignore[call-arg]
    """Quantity of one product in the cart. One row per product."""

    product_id: str = Field(primary_key=True, foreign_key="product.id")
    quantity: int = Field(default=0)

    def to_domain(self) -> DomainCartLine:
        """Convert persistence model to domain entity."""
        return DomainCartLine(product_id=self.product_id, quantity=self.quantity)
