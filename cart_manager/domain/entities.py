"""Pure domain entities without infrastructure dependencies."""

from dataclasses import dataclass

from .exceptions import ValidationError


def validate_product_id(product_id: str) -> None:
    """Validate a product identifier used as a catalog or cart key.

    Args:
        product_id: The identifier to validate

    Raises:
        ValidationError: If the identifier is empty or whitespace only
    """
    if not product_id or not product_id.strip():
        raise ValidationError("Product id cannot be empty")


@dataclass(frozen=True)
class Product:
    """Catalog entry as seen by the cart. Owned by the product store."""

    id: str
    name: str
    in_stock: bool
    max_quantity: int

    def __post_init__(self):
        """Validate product data after initialization."""
        validate_product_id(self.id)

        if self.max_quantity < 0:
            raise ValidationError(
                f"Product max quantity cannot be negative (got {self.max_quantity})"
            )

    def allows_total(self, total_quantity: int) -> bool:
        """Check if a cart may hold ``total_quantity`` units of this product."""
        return total_quantity <= self.max_quantity


@dataclass
class CartLine:
    """Quantity of one product held in the cart."""

    product_id: str
    quantity: int = 0
