"""Schemas package - pydantic models for dashboard documents."""

from librarypanels.schemas.dashboard import Dashboard, RequestContext
from librarypanels.schemas.panel import (
    LibraryLinkedPanel,
    LibraryPanelRef,
    PanelEntry,
    PlainPanel,
    parse_panel,
)

__all__ = [
    "Dashboard",
    "RequestContext",
    "LibraryLinkedPanel",
    "LibraryPanelRef",
    "PanelEntry",
    "PlainPanel",
    "parse_panel",
]
