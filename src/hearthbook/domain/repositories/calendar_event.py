"""Calendar event repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.calendar_event import CalendarEvent


class CalendarEventRepository(Protocol):
    """Repository for managing shared calendar events."""

    def get_by_id(self, event_id: int) -> Optional[CalendarEvent]:
        ...

    def list_public(self) -> list[CalendarEvent]:
        """Non-private events ordered by date then time."""
        ...

    def create(self, event: CalendarEvent) -> CalendarEvent:
        ...

    def update(self, event_id: int, **changes: Any) -> int:
        ...

    def delete(self, event_id: int) -> int:
        ...
