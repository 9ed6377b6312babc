"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from librarypanels.config import get_settings
from librarypanels.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    settings = get_settings()
    setup_logging(settings)
    logger.info("Starting %s in %s mode", settings.app_name, settings.environment)

    from librarypanels.db.postgres import engine, init_db

    applied = await init_db()
    logger.info("Library panel migrations applied: %d", len(applied))

    yield

    # Shutdown
    logger.info("Shutting down...")
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Keeps dashboard JSON in sync with shared library panels",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health_check() -> dict[str, str | bool]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "panel_library_enabled": settings.panel_library_enabled,
        }

    return app


app = create_app()
