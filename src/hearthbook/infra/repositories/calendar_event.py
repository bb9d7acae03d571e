"""SQLModel implementation of the calendar event repository."""

from __future__ import annotations

from typing import Any, Callable, Optional

from sqlmodel import Session, select

from ...models.calendar_event import CalendarEvent

_IMMUTABLE_FIELDS = {"id", "created_at"}


class SQLModelCalendarEventRepository:
    """SQLModel-based calendar event repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        with self.session_factory() as session:
            obj = session.get(CalendarEvent, event_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_public(self) -> list[CalendarEvent]:
        """Shared events; private ones never leave the store."""
        with self.session_factory() as session:
            statement = (
                select(CalendarEvent)
                .where(CalendarEvent.is_private == False)  # noqa: E712
                .order_by(CalendarEvent.occurred_on, CalendarEvent.starts_at)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, event: CalendarEvent) -> CalendarEvent:
        with self.session_factory() as session:
            session.add(event)
            session.commit()
            session.refresh(event)
            session.expunge(event)
            return event

    def update(self, event_id: int, **changes: Any) -> int:
        with self.session_factory() as session:
            event = session.get(CalendarEvent, event_id)
            if event is None:
                return 0
            for field, value in changes.items():
                if field in _IMMUTABLE_FIELDS:
                    continue
                setattr(event, field, value)
            session.add(event)
            session.commit()
            return 1

    def delete(self, event_id: int) -> int:
        with self.session_factory() as session:
            event = session.get(CalendarEvent, event_id)
            if event is None:
                return 0
            session.delete(event)
            session.commit()
            return 1
