"""Display name repository for author id lookups."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from sqlmodel import Session, select

from ...models.display_name import DisplayName


class SQLModelDisplayNameRepository:
    """SQLModel-based display name repository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def all(self) -> dict[str, str]:
        with self.session_factory() as session:
            rows = session.exec(select(DisplayName)).all()
            return {row.user_id: row.display_name for row in rows}

    def set(self, user_id: str, display_name: str) -> DisplayName:
        with self.session_factory() as session:
            row = session.get(DisplayName, user_id)
            if row:
                row.display_name = display_name
                row.updated_at = datetime.now(timezone.utc)
            else:
                row = DisplayName(user_id=user_id, display_name=display_name)
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row


__all__ = ["SQLModelDisplayNameRepository"]
