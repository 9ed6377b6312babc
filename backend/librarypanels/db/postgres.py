"""PostgreSQL database connection and session management."""

from collections.abc import AsyncGenerator
from functools import partial

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from librarypanels.config import get_settings
from librarypanels.db.migrations import run_migrations

settings = get_settings()

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
)

# Create async session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db() -> list[str]:
    """Initialize library panel tables."""
    async with engine.begin() as conn:
        return await conn.run_sync(partial(run_migrations, settings=settings))


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
