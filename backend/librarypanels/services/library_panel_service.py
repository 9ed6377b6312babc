"""Library panel service - keeps dashboard JSON in sync with stored library panels."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from librarypanels.config import Settings
from librarypanels.errors import LibraryPanelError, StoreFailureError
from librarypanels.models import LibraryPanel
from librarypanels.schemas import Dashboard, RequestContext
from librarypanels.services.linker import connect_dashboard
from librarypanels.services.panel_lookup import fetch_linked_panels
from librarypanels.services.transform import (
    collapse_panels,
    count_library_panels,
    expand_panels,
)

logger = logging.getLogger(__name__)


class LibraryPanelService:
    """
    Service for the panel library feature.

    Every operation is a no-op while the feature is disabled, and then the
    session is never used.
    """

    def __init__(self, session: AsyncSession, settings: Settings | None = None):
        self.session = session
        self.settings = settings

    def is_enabled(self) -> bool:
        """Check if the panel library feature is enabled for this instance."""
        if self.settings is None:
            return False
        return self.settings.panel_library_enabled

    async def get_library_panels_for_dashboard(self, dashboard_id: int) -> dict[str, LibraryPanel]:
        """Get the library panels connected to a dashboard, keyed by uid."""
        return await fetch_linked_panels(self.session, dashboard_id)

    async def load_library_panels_for_dashboard(self, dashboard: Dashboard) -> Dashboard:
        """Load library panel models into a dashboard before it is served."""
        if not self.is_enabled():
            return dashboard

        panels = dashboard.data.get("panels")
        if not isinstance(panels, list):
            return dashboard

        library_panels = await self.get_library_panels_for_dashboard(dashboard.id)
        try:
            dashboard.data["panels"] = expand_panels(panels, library_panels)
        except LibraryPanelError as e:
            logger.warning("Could not load library panels for dashboard %s: %s", dashboard.uid, e)
            raise

        logger.debug(
            "Expanded %d library panels for dashboard %s",
            count_library_panels(panels),
            dashboard.uid,
        )
        return dashboard

    def clean_library_panels_for_dashboard(self, dashboard: Dashboard) -> Dashboard:
        """Strip library panel models from a dashboard before it is stored."""
        if not self.is_enabled():
            return dashboard

        panels = dashboard.data.get("panels")
        if not isinstance(panels, list):
            return dashboard

        try:
            dashboard.data["panels"] = collapse_panels(panels)
        except LibraryPanelError as e:
            logger.warning("Could not clean library panels for dashboard %s: %s", dashboard.uid, e)
            raise

        logger.debug(
            "Collapsed %d library panels for dashboard %s",
            count_library_panels(panels),
            dashboard.uid,
        )
        return dashboard

    async def connect_library_panels_for_dashboard(
        self, context: RequestContext, dashboard: Dashboard
    ) -> None:
        """Connect library panels to a newly saved dashboard."""
        if not self.is_enabled():
            return None

        try:
            uids = await connect_dashboard(self.session, context, dashboard)
            try:
                await self.session.commit()
            except SQLAlchemyError as e:
                raise StoreFailureError(
                    f"could not commit library panel connections for dashboard {dashboard.uid}"
                ) from e
        except LibraryPanelError as e:
            logger.warning(
                "Could not connect library panels to dashboard %s: %s", dashboard.uid, e
            )
            await self._rollback(dashboard)
            raise

        logger.debug("Connected %d library panels to dashboard %s", len(uids), dashboard.uid)
        return None

    async def _rollback(self, dashboard: Dashboard) -> None:
        # A failed rollback must not mask the error that triggered it
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            logger.error("Rollback failed for dashboard %s: %s", dashboard.uid, e)
