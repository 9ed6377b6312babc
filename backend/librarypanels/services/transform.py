"""Expand and collapse library panels inside a dashboard's panel array.

Both transforms are pure: they build a new panel list and never touch the
input entries, so a failure part-way leaves the caller's document intact.
"""

import copy
from collections.abc import Mapping
from typing import Any

from librarypanels.errors import DanglingReferenceError, MalformedReferenceError, StoreFailureError
from librarypanels.models import LibraryPanel
from librarypanels.schemas.panel import LibraryLinkedPanel, LibraryPanelRef, PlainPanel, parse_panel


def expand_panels(
    panels: list[Any], library_panels: Mapping[str, LibraryPanel]
) -> list[Any]:
    """
    Replace every library panel reference with the stored panel model.

    The dashboard keeps its own `id` (the array index when absent, as in
    collapse) and `gridPos`; the reference name is refreshed from the library
    panel so renames show up on the next load.
    """
    expanded = []
    for index, raw in enumerate(panels):
        entry = parse_panel(raw)
        if isinstance(entry, PlainPanel):
            expanded.append(raw)
            continue

        uid = entry.library_panel.uid
        if not uid:
            raise MalformedReferenceError("found a library panel without uid")

        library_panel = library_panels.get(uid)
        if library_panel is None:
            raise DanglingReferenceError(
                f"found a library panel that does not exist as a connection: {uid}"
            )
        if not isinstance(library_panel.model, dict):
            raise StoreFailureError(f"library panel {uid} has a model that is not a JSON object")

        entry = entry.model_copy(
            update={
                "overlay": copy.deepcopy(library_panel.model),
                "library_panel": LibraryPanelRef(uid=library_panel.uid, name=library_panel.name),
            }
        )
        expanded.append(entry.to_expanded(index))

    return expanded


def collapse_panels(panels: list[Any]) -> list[Any]:
    """Reduce every library panel entry to its id, gridPos and reference."""
    collapsed = []
    for index, raw in enumerate(panels):
        entry = parse_panel(raw)
        if isinstance(entry, PlainPanel):
            collapsed.append(raw)
            continue

        if not entry.library_panel.uid:
            raise MalformedReferenceError("found a library panel without uid")
        if not entry.library_panel.name:
            raise MalformedReferenceError("found a library panel without name")

        collapsed.append(entry.to_reference(index))

    return collapsed


def referenced_uids(panels: list[Any]) -> list[str]:
    """Distinct library panel uids in array order. Raises on an empty uid."""
    uids: list[str] = []
    for raw in panels:
        entry = parse_panel(raw)
        if isinstance(entry, PlainPanel):
            continue
        uid = entry.library_panel.uid
        if not uid:
            raise MalformedReferenceError("found a library panel without uid")
        if uid not in uids:
            uids.append(uid)
    return uids


def count_library_panels(panels: list[Any]) -> int:
    """Number of library-linked entries in a panel array."""
    return sum(1 for raw in panels if isinstance(parse_panel(raw), LibraryLinkedPanel))
