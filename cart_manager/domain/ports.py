"""Repository interfaces the cart manager depends on.

Production (SQL) and test (in-memory) stores are interchangeable
implementations of these contracts. Every method is a coroutine.
"""

from abc import ABC, abstractmethod

from .entities import Product


class ProductRepository(ABC):
    """Read-only product lookup."""

    @abstractmethod
    async def get_product(self, product_id: str) -> Product | None:
        """Return the product with this id, or None if it does not exist."""


class CartRepository(ABC):
    """Quantity per product id for one cart."""

    @abstractmethod
    async def upsert_quantity(self, product_id: str, new_quantity: int) -> None:
        """Set the stored quantity for ``product_id`` to exactly ``new_quantity``.

        Inserts the line when absent and overwrites it otherwise. This is not
        additive: callers pass the final, already summed quantity.
        """

    @abstractmethod
    async def get_quantity(self, product_id: str) -> int:
        """Return the stored quantity for ``product_id``, or 0 when absent."""

    @abstractmethod
    async def get_total_items(self) -> int:
        """Return the sum of quantities across all lines."""

    @abstractmethod
    async def get_lines(self) -> dict[str, int]:
        """Return a snapshot of every line as ``{product_id: quantity}``."""
