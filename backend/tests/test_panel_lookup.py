"""Tests for the batched library panel lookup."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from factories import GRAPH_MODEL, add_library_panel, add_link
from librarypanels.errors import StoreFailureError
from librarypanels.services.panel_lookup import fetch_linked_panels


class TestFetchLinkedPanels:
    async def test_no_linked_panels(self, session) -> None:
        await add_library_panel(session, "abc", "Requests")
        assert await fetch_linked_panels(session, 42) == {}

    async def test_returns_connected_panels_keyed_by_uid(self, session) -> None:
        requests = await add_library_panel(session, "abc", "Requests")
        errors = await add_library_panel(session, "def", "Errors", model={"type": "stat"})
        other = await add_library_panel(session, "ghi", "Latency")
        await add_link(session, requests, 42)
        await add_link(session, errors, 42)
        await add_link(session, other, 43)

        result = await fetch_linked_panels(session, 42)

        assert set(result) == {"abc", "def"}
        assert result["abc"].name == "Requests"
        assert result["abc"].model == GRAPH_MODEL
        assert result["def"].model == {"type": "stat"}

    async def test_single_query(self, session) -> None:
        spy = AsyncMock(wraps=session.execute)
        session.execute = spy
        for uid in ("a", "b", "c"):
            panel = await add_library_panel(session, uid, f"Panel {uid}")
            await add_link(session, panel, 42)

        spy.reset_mock()
        result = await fetch_linked_panels(session, 42)

        assert len(result) == 3
        assert spy.await_count == 1

    async def test_store_failure(self) -> None:
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))

        with pytest.raises(StoreFailureError) as exc_info:
            await fetch_linked_panels(session, 42)

        assert isinstance(exc_info.value.__cause__, OperationalError)
