"""LibraryPanelDashboard link table for the library panel <-> dashboard relationship."""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, Column, DateTime, Index
from sqlmodel import Field, SQLModel

from librarypanels.models.library_panel import BigIntPK


class LibraryPanelDashboard(SQLModel, table=True):
    """
    Link table recording which dashboards reference which library panels.
    A dashboard is connected to a given library panel at most once, no matter
    how many of its panels point at it.
    """

    __tablename__ = "library_panel_dashboard"
    __table_args__ = (
        Index(
            "UQE_library_panel_dashboard_librarypanel_id_dashboard_id",
            "librarypanel_id",
            "dashboard_id",
            unique=True,
        ),
    )

    id: int | None = Field(
        default=None,
        sa_column=Column(BigIntPK, primary_key=True, autoincrement=True),
    )
    librarypanel_id: int = Field(sa_column=Column(BigInteger, nullable=False))
    dashboard_id: int = Field(sa_column=Column(BigInteger, nullable=False))

    # When and by whom the connection was made
    created: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    created_by: int = Field(sa_column=Column(BigInteger, nullable=False))
