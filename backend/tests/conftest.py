"""Shared fixtures: settings and an in-memory SQLite reference store."""

from collections.abc import AsyncGenerator
from functools import partial

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from librarypanels.config import Settings
from librarypanels.db.migrations import run_migrations
from librarypanels.schemas import RequestContext


@pytest.fixture
def enabled_settings() -> Settings:
    return Settings(panel_library_enabled=True, database_url="sqlite+aiosqlite://")


@pytest.fixture
def disabled_settings() -> Settings:
    return Settings(panel_library_enabled=False, database_url="sqlite+aiosqlite://")


@pytest.fixture
async def engine(enabled_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        enabled_settings.database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(partial(run_migrations, settings=enabled_settings))
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def context() -> RequestContext:
    return RequestContext(user_id=7, org_id=1)
