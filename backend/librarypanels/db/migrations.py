"""Schema migrations for the library panel tables.

Each step is named and idempotent so it can be re-run on every startup. No
steps are registered while the panel library feature is disabled.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import Connection, Index, Table, inspect
from sqlalchemy.schema import CreateTable

from librarypanels.config import Settings
from librarypanels.models import LibraryPanel, LibraryPanelDashboard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    """A single named schema change."""

    name: str
    apply: Callable[[Connection], None]


def _add_table(table: Table) -> Callable[[Connection], None]:
    def apply(conn: Connection) -> None:
        if inspect(conn).has_table(table.name):
            return
        # CreateTable leaves standalone indices to their own migration
        conn.execute(CreateTable(table))

    return apply


def _add_index(index: Index) -> Callable[[Connection], None]:
    def apply(conn: Connection) -> None:
        index.create(conn, checkfirst=True)

    return apply


def _index(table: Table) -> Index:
    return next(iter(table.indexes))


def add_migrations(settings: Settings) -> list[Migration]:
    """Return the ordered library panel migrations, or none if the feature is off."""
    if not settings.panel_library_enabled:
        return []

    library_panel_v1 = LibraryPanel.__table__
    library_panel_dashboard_v1 = LibraryPanelDashboard.__table__

    return [
        Migration("create library_panel table v1", _add_table(library_panel_v1)),
        Migration(
            "add index library_panel org_id & folder_id & name",
            _add_index(_index(library_panel_v1)),
        ),
        Migration(
            "create library_panel_dashboard table v1", _add_table(library_panel_dashboard_v1)
        ),
        Migration(
            "add index library_panel_dashboard librarypanel_id & dashboard_id",
            _add_index(_index(library_panel_dashboard_v1)),
        ),
    ]


def run_migrations(conn: Connection, settings: Settings) -> list[str]:
    """Apply all migrations on a sync connection. Returns the names that ran."""
    applied = []
    for migration in add_migrations(settings):
        logger.debug("Running migration: %s", migration.name)
        migration.apply(conn)
        applied.append(migration.name)
    return applied
