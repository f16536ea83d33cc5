"""Tests for the in-memory and SQL cart/product stores."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cart_manager.application.cart_manager import CartManager
from cart_manager.domain.entities import Product
from cart_manager.domain.ports import CartRepository
from cart_manager.domain.results import CartFailure, CartFailureReason, CartSuccess
from cart_manager.infrastructure.database.repositories import (
    SqlCartRepository,
    SqlProductRepository,
)
from cart_manager.infrastructure.memory.repositories import (
    InMemoryCartRepository,
    InMemoryProductRepository,
)


@pytest.fixture(name="sql_product_repository")
async def sql_product_repository_fixture(
    async_session: AsyncSession, products: list[Product]
) -> SqlProductRepository:
    repository = SqlProductRepository(async_session)
    for product in products:
        await repository.save(product)
    return repository


@pytest.fixture(name="sql_cart_repository")
async def sql_cart_repository_fixture(
    async_session: AsyncSession, sql_product_repository: SqlProductRepository
) -> SqlCartRepository:
    return SqlCartRepository(async_session)


@pytest.fixture(name="store", params=["memory", "sql"])
def store_fixture(
    request: pytest.FixtureRequest, sql_cart_repository: SqlCartRepository
) -> CartRepository:
    if request.param == "memory":
        return InMemoryCartRepository()
    return sql_cart_repository


@pytest.mark.asyncio
async def test_empty_cart(store: CartRepository):
    assert await store.get_quantity("p1") == 0
    assert await store.get_total_items() == 0
    assert await store.get_lines() == {}


@pytest.mark.asyncio
async def test_upsert_inserts_then_overwrites(store: CartRepository):
    """Upsert stores exactly the given quantity; it does not add to it."""
    await store.upsert_quantity("p1", 3)
    assert await store.get_quantity("p1") == 3

    await store.upsert_quantity("p1", 5)
    assert await store.get_quantity("p1") == 5
    assert await store.get_lines() == {"p1": 5}


@pytest.mark.asyncio
async def test_total_is_sum_of_quantities(store: CartRepository):
    await store.upsert_quantity("p1", 3)
    await store.upsert_quantity("p3", 4)

    assert await store.get_total_items() == 7
    assert await store.get_lines() == {"p1": 3, "p3": 4}


@pytest.mark.asyncio
async def test_reads_are_idempotent(store: CartRepository):
    await store.upsert_quantity("p1", 2)

    assert await store.get_quantity("p1") == await store.get_quantity("p1")
    assert await store.get_total_items() == await store.get_total_items()
    assert await store.get_quantity("p1") == 2


@pytest.mark.asyncio
async def test_in_memory_product_lookup(products: list[Product]):
    repository = InMemoryProductRepository(products)

    assert await repository.get_product("p1") == products[0]
    assert await repository.get_product("missing-id") is None


@pytest.mark.asyncio
async def test_sql_product_round_trip(sql_product_repository: SqlProductRepository):
    product = await sql_product_repository.get_product("p2")

    assert product == Product(id="p2", name="Grinder", in_stock=False, max_quantity=3)
    assert await sql_product_repository.get_product("missing-id") is None


@pytest.mark.asyncio
async def test_sql_product_save_replaces(sql_product_repository: SqlProductRepository):
    await sql_product_repository.save(
        Product(id="p2", name="Grinder", in_stock=True, max_quantity=1)
    )

    product = await sql_product_repository.get_product("p2")
    assert product is not None
    assert product.in_stock
    assert product.max_quantity == 1


@pytest.mark.asyncio
async def test_cart_manager_with_sql_stores(
    sql_cart_repository: SqlCartRepository,
    sql_product_repository: SqlProductRepository,
):
    manager = CartManager(sql_cart_repository, sql_product_repository)

    assert await manager.add_to_cart("p1", 3) == CartSuccess(total_items=3)
    assert await manager.add_to_cart("p1", 2) == CartSuccess(total_items=5)
    assert await manager.add_to_cart("p1", 1) == CartFailure(
        CartFailureReason.MAX_QUANTITY_REACHED
    )
    assert await manager.add_to_cart("p2", 1) == CartFailure(
        CartFailureReason.OUT_OF_STOCK
    )
    assert await manager.add_to_cart("missing-id", 1) == CartFailure(
        CartFailureReason.NOT_FOUND
    )
    assert await sql_cart_repository.get_total_items() == 5
