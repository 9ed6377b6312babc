"""Dashboard document schemas."""

from typing import Any

from pydantic import BaseModel, Field


class Dashboard(BaseModel):
    """
    A dashboard as handed over by the dashboard store.

    `id` and `uid` stay empty until the store persists the dashboard for the
    first time. `data` is the full dashboard JSON; its `panels` key holds the
    ordered panel entries.
    """

    id: int = 0
    uid: str = ""
    org_id: int = 0
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_saved(self) -> bool:
        return self.id != 0 and self.uid != ""


class RequestContext(BaseModel):
    """The signed-in actor a dashboard operation runs on behalf of."""

    user_id: int
    org_id: int
