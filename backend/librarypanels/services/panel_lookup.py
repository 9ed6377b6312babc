"""Batched lookup of the library panels connected to a dashboard."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from librarypanels.errors import StoreFailureError
from librarypanels.models import LibraryPanel, LibraryPanelDashboard

logger = logging.getLogger(__name__)


async def fetch_linked_panels(session: AsyncSession, dashboard_id: int) -> dict[str, LibraryPanel]:
    """
    Get every library panel connected to a dashboard, keyed by panel uid.

    Issues a single query regardless of how many panels the dashboard uses.
    """
    query = (
        select(LibraryPanel)
        .join(LibraryPanelDashboard, LibraryPanelDashboard.librarypanel_id == LibraryPanel.id)
        .where(LibraryPanelDashboard.dashboard_id == dashboard_id)
    )
    try:
        result = await session.execute(query)
    except SQLAlchemyError as e:
        logger.warning("Failed to load library panels for dashboard %s: %s", dashboard_id, e)
        raise StoreFailureError(
            f"could not load library panels for dashboard {dashboard_id}"
        ) from e

    return {panel.uid: panel for panel in result.scalars().all()}
