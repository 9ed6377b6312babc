"""LibraryPanel model - centrally stored, reusable panel definitions."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, BigInteger, Column, DateTime, Index, Integer
from sqlmodel import Field, SQLModel

# SQLite only autoincrements INTEGER primary keys
BigIntPK = BigInteger().with_variant(Integer, "sqlite")


class LibraryPanel(SQLModel, table=True):
    """
    Library panel definition.
    Referenced (never copied) by any number of dashboards through LibraryPanelDashboard.
    """

    __tablename__ = "library_panel"
    __table_args__ = (
        Index(
            "UQE_library_panel_org_id_folder_id_name", "org_id", "folder_id", "name", unique=True
        ),
    )

    id: int | None = Field(
        default=None,
        sa_column=Column(BigIntPK, primary_key=True, autoincrement=True),
    )
    org_id: int = Field(sa_column=Column(BigInteger, nullable=False))
    folder_id: int = Field(sa_column=Column(BigInteger, nullable=False))

    # External identifier, immutable once assigned
    uid: str = Field(max_length=40, nullable=False)
    name: str = Field(max_length=255, nullable=False)

    # Full panel model as stored in dashboard JSON
    model: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    # Audit
    created: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    created_by: int = Field(sa_column=Column(BigInteger, nullable=False))
    updated: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_by: int = Field(sa_column=Column(BigInteger, nullable=False))
