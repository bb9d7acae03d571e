"""Shared monthly budget."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

BUDGET_SINGLETON_ID = 1


class Budget(SQLModel, table=True):
    """The household budget; at most one row exists, keyed by ``BUDGET_SINGLETON_ID``."""

    __tablename__: ClassVar[str] = "budget"

    id: int = Field(default=BUDGET_SINGLETON_ID, primary_key=True)
    amount: float = Field(default=0.0, nullable=False)
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
