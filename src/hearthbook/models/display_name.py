"""Author id to display name mapping."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class DisplayName(SQLModel, table=True):
    """Friendly name shown instead of an opaque author id."""

    __tablename__: ClassVar[str] = "display_name"

    user_id: str = Field(primary_key=True, max_length=128)
    display_name: str = Field(nullable=False, max_length=64)
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
