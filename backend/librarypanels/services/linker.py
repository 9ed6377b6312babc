"""Connect dashboards to the library panels they reference."""

import logging
from datetime import UTC, datetime

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from librarypanels.errors import (
    DanglingReferenceError,
    StoreFailureError,
    ValidationFailureError,
)
from librarypanels.models import LibraryPanel, LibraryPanelDashboard
from librarypanels.schemas import Dashboard, RequestContext
from librarypanels.services.transform import referenced_uids

logger = logging.getLogger(__name__)

LINK_COLUMNS = ["librarypanel_id", "dashboard_id"]

# Dialects with a native INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def upsert_link(
    session: AsyncSession,
    library_panel_id: int,
    dashboard_id: int,
    actor_id: int,
) -> None:
    """
    Insert a link row unless one already exists for the pair.

    The unique index on (librarypanel_id, dashboard_id) decides: a duplicate,
    including one racing in from a concurrent save, is silently skipped.
    """
    values = {
        "librarypanel_id": library_panel_id,
        "dashboard_id": dashboard_id,
        "created": datetime.now(UTC),
        "created_by": actor_id,
    }
    insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)

    try:
        if insert is not None:
            stmt = (
                insert(LibraryPanelDashboard.__table__)
                .values(**values)
                .on_conflict_do_nothing(index_elements=LINK_COLUMNS)
            )
            await session.execute(stmt)
            return

        try:
            async with session.begin_nested():
                session.add(LibraryPanelDashboard(**values))
        except IntegrityError:
            logger.debug(
                "Library panel %s already connected to dashboard %s",
                library_panel_id,
                dashboard_id,
            )
    except SQLAlchemyError as e:
        raise StoreFailureError(
            f"could not connect library panel {library_panel_id} to dashboard {dashboard_id}"
        ) from e


async def _resolve_library_panels(
    session: AsyncSession, org_id: int, uids: list[str]
) -> dict[str, LibraryPanel]:
    query = select(LibraryPanel).where(LibraryPanel.org_id == org_id, LibraryPanel.uid.in_(uids))
    try:
        result = await session.execute(query)
    except SQLAlchemyError as e:
        raise StoreFailureError("could not load library panels") from e
    return {panel.uid: panel for panel in result.scalars().all()}


async def connect_dashboard(
    session: AsyncSession, context: RequestContext, dashboard: Dashboard
) -> list[str]:
    """
    Record a link row for every library panel the dashboard references.

    Returns the uids that were connected. Nothing is written if any reference
    is malformed or points at an unknown library panel.
    """
    if not dashboard.is_saved:
        raise ValidationFailureError("dashboard is missing an ID or uid")

    panels = dashboard.data.get("panels")
    if not isinstance(panels, list):
        return []

    uids = referenced_uids(panels)
    if not uids:
        return []

    library_panels = await _resolve_library_panels(session, context.org_id, uids)
    missing = [uid for uid in uids if uid not in library_panels]
    if missing:
        raise DanglingReferenceError(f"library panel could not be found: {', '.join(missing)}")

    for uid in uids:
        await upsert_link(session, library_panels[uid].id, dashboard.id, context.user_id)

    return uids
