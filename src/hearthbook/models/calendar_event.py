"""Shared calendar events."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class CalendarEvent(SQLModel, table=True):
    """A date-bound reminder shown on the shared calendar."""

    __tablename__: ClassVar[str] = "calendar_event"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(nullable=False, index=True, max_length=128)
    occurred_on: date = Field(nullable=False, index=True)
    starts_at: Optional[time] = Field(default=None)
    title: str = Field(default="", max_length=255)
    is_private: bool = Field(default=False, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
