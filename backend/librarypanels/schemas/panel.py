"""Dashboard panel entry schemas.

A panel entry is either a plain panel or a library-linked panel. Library-linked
entries carry a `libraryPanel` reference and, once expanded, the content of the
referenced library panel as an overlay that is never persisted.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

LIBRARY_PANEL_KEY = "libraryPanel"


class LibraryPanelRef(BaseModel):
    """Reference from a dashboard panel to a library panel."""

    uid: str = ""
    name: str = ""


class PlainPanel(BaseModel):
    """Ordinary panel with no library reference, kept verbatim."""

    raw: Any


class LibraryLinkedPanel(BaseModel):
    """Panel entry pointing at a library panel."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    grid_pos: dict[str, Any] = Field(default_factory=dict, alias="gridPos")
    library_panel: LibraryPanelRef = Field(alias=LIBRARY_PANEL_KEY)
    overlay: dict[str, Any] = Field(default_factory=dict)

    def to_reference(self, index: int) -> dict[str, Any]:
        """Minimal persisted form. Falls back to the array index for a missing id."""
        return {
            "id": self.id if self.id is not None else index,
            "gridPos": self.grid_pos,
            LIBRARY_PANEL_KEY: {
                "uid": self.library_panel.uid,
                "name": self.library_panel.name,
            },
        }

    def to_expanded(self, index: int) -> dict[str, Any]:
        """Overlay content with the dashboard-local fields reapplied on top."""
        panel = dict(self.overlay)
        panel["gridPos"] = self.grid_pos
        panel["id"] = self.id if self.id is not None else index
        panel[LIBRARY_PANEL_KEY] = {
            "uid": self.library_panel.uid,
            "name": self.library_panel.name,
        }
        return panel


PanelEntry = PlainPanel | LibraryLinkedPanel


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_int(value: Any) -> int | None:
    # bool is an int subclass but never a valid panel id
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def parse_panel(raw: Any) -> PanelEntry:
    """Classify a raw panel entry from dashboard JSON."""
    if not isinstance(raw, dict) or raw.get(LIBRARY_PANEL_KEY) is None:
        return PlainPanel(raw=raw)

    ref = raw[LIBRARY_PANEL_KEY]
    if not isinstance(ref, dict):
        ref = {}
    grid_pos = raw.get("gridPos")

    return LibraryLinkedPanel(
        id=_as_int(raw.get("id")),
        grid_pos=grid_pos if isinstance(grid_pos, dict) else {},
        library_panel=LibraryPanelRef(
            uid=_as_str(ref.get("uid")),
            name=_as_str(ref.get("name")),
        ),
        overlay={
            k: v for k, v in raw.items() if k not in ("id", "gridPos", LIBRARY_PANEL_KEY)
        },
    )
