"""Per-product serialization for cart updates."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class ProductLocks:
    """Registry of ``asyncio.Lock`` objects keyed by product id.

    A lock exists only while some caller holds or waits for it, so the
    registry does not grow with the catalog. Serialization is process-local.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, product_id: str) -> AsyncIterator[None]:
        """Hold the lock for ``product_id`` for the duration of the block."""
        lock = self._locks.setdefault(product_id, asyncio.Lock())
        self._users[product_id] = self._users.get(product_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[product_id] -= 1
            if not self._users[product_id]:
                del self._users[product_id]
                del self._locks[product_id]

    def __len__(self) -> int:
        return len(self._locks)
