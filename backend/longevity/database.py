"""Async SQLAlchemy engine, session factory, and FastAPI dependency.

Import ``db_models`` before calling ``create_tables()`` so that every ORM
model is registered with ``Base.metadata``.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from longevity.config import DATA_DIR, settings

engine = create_async_engine(settings.database_url, echo=False)
AsyncSessionLocal: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine, expire_on_commit=False
)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""

    pass


async def create_tables() -> None:
    """Create all database tables that do not yet exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields a scoped async database session.

    Usage::

        async def my_endpoint(db: AsyncSession = Depends(get_db)) -> ...:
    """
    async with AsyncSessionLocal() as session:
        yield session
