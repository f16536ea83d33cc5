"""Infrastructure layer - in-memory repository implementations."""

from collections.abc import Iterable

from ...domain.constants import EMPTY_LINE_QUANTITY
from ...domain.entities import CartLine, Product
from ...domain.ports import CartRepository, ProductRepository


class InMemoryProductRepository(ProductRepository):
    """Product catalog held in a dict."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: dict[str, Product] = {p.id: p for p in products}

    def add(self, product: Product) -> None:
        """Register or replace a product."""
        self._products[product.id] = product

    async def get_product(self, product_id: str) -> Product | None:
        return self._products.get(product_id)


class InMemoryCartRepository(CartRepository):
    """Cart lines held in a dict keyed by product id."""

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}

    async def upsert_quantity(self, product_id: str, new_quantity: int) -> None:
        line = self._lines.get(product_id)
        if line is None:
            self._lines[product_id] = CartLine(product_id, new_quantity)
        else:
            line.quantity = new_quantity

    async def get_quantity(self, product_id: str) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line else EMPTY_LINE_QUANTITY

    async def get_total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    async def get_lines(self) -> dict[str, int]:
        return {pid: line.quantity for pid, line in self._lines.items()}
