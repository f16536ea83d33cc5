import pytest

from cart_manager.config import Settings


@pytest.mark.parametrize(
    ("database_url", "expected"),
    [
        ("sqlite:///./cart.db", "sqlite+aiosqlite:///./cart.db"),
        (
            "postgresql://user:pw@db:5432/cart",
            "postgresql+asyncpg://user:pw@db:5432/cart",
        ),
        ("sqlite+aiosqlite:///:memory:", "sqlite+aiosqlite:///:memory:"),
    ],
)
def test_async_database_url(database_url: str, expected: str):
    settings = Settings(database_url=database_url)
    assert settings.async_database_url == expected


def test_unsupported_database_url():
    settings = Settings(database_url="mysql://user:pw@db/cart")
    with pytest.raises(ValueError, match="Unsupported database URL"):
        _ = settings.async_database_url


def test_debug_flags():
    settings = Settings(debug=False)
    assert settings.is_production
    assert not settings.is_development
