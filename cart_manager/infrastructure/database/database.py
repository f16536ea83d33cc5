from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel import SQLModel

from ...config import settings

# Table classes must be imported before metadata.create_all
from . import models  # noqa: F401


def _get_async_engine() -> AsyncEngine:
    """Create the async engine for the configured database."""
    database_url = settings.async_database_url

    engine_kwargs: dict[str, int | bool]
    if "sqlite" in database_url:
        engine_kwargs = {}
    else:
        engine_kwargs = {
            "pool_size": 10,
            "max_overflow": 20,
            "pool_recycle": 3600,  # Recycle connections every hour
            "pool_pre_ping": True,
        }

    return create_async_engine(database_url, **engine_kwargs)


_async_engine: AsyncEngine | None = None


def get_async_engine() -> AsyncEngine:
    """Get the async database engine with connection pooling."""
    global _async_engine
    if _async_engine is None:
        _async_engine = _get_async_engine()
    return _async_engine


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session with proper transaction management."""
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_async_db(engine: AsyncEngine) -> None:
    """Initialize database tables using async engine."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def dispose_async_engine() -> None:
    """Close pooled connections on shutdown."""
    global _async_engine
    if _async_engine is not None:
        await _async_engine.dispose()
        _async_engine = None
