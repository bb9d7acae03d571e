"""SQLModel definitions for ledger entries."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class LedgerEntry(SQLModel, table=True):
    """A single dated money entry logged by a household member."""

    __tablename__: ClassVar[str] = "ledger_entry"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(nullable=False, index=True, max_length=128)
    amount: Optional[float] = Field(default=None, description="Positive for income, negative for expense")
    category: Optional[str] = Field(default=None, index=True, max_length=32)
    note: str = Field(default="", max_length=255)
    occurred_on: date = Field(nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
