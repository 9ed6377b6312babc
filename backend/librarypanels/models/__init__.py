"""Models package - SQLModel database models."""

from librarypanels.models.library_panel import LibraryPanel
from librarypanels.models.library_panel_dashboard import LibraryPanelDashboard

__all__ = ["LibraryPanel", "LibraryPanelDashboard"]
