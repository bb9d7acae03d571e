"""Ledger and calendar reads/writes with user-facing failure semantics.

Reads never raise: a store failure yields an empty :class:`LoadResult`
carrying the error for notification. Writes return a :class:`WriteOutcome`
that separates a store failure from a zero-row "denied" result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Generic, Iterable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from ..domain.repositories import CalendarEventRepository, LedgerEntryRepository
from ..errors import DataAccessFailure, InvalidDate
from ..logging_config import get_logger
from ..models.calendar_event import CalendarEvent
from ..models.entry import LedgerEntry
from .dates import DateLike, parse_date

logger = get_logger(__name__)

T = TypeVar("T")

WRITE_OK = "ok"
WRITE_DENIED = "denied"
WRITE_FAILED = "failed"
WRITE_INVALID = "invalid"

DENIED_MESSAGE = "Nothing was changed: the record is missing or you lack permission."
FAILED_MESSAGE = "Write failed"


@dataclass
class LoadResult(Generic[T]):
    items: list[T] = field(default_factory=list)
    error: Optional[DataAccessFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class WriteOutcome:
    status: str
    affected: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == WRITE_OK

    @property
    def denied(self) -> bool:
        return self.status == WRITE_DENIED

    @classmethod
    def from_count(cls, affected: int, action: str) -> "WriteOutcome":
        if affected == 0:
            return cls(WRITE_DENIED, 0, f"{action}: {DENIED_MESSAGE}")
        return cls(WRITE_OK, affected, f"{action}: done")

    @classmethod
    def failed(cls, action: str, error: BaseException) -> "WriteOutcome":
        return cls(WRITE_FAILED, 0, f"{action}: {FAILED_MESSAGE} ({error})")

    @classmethod
    def invalid(cls, action: str, reason: str) -> "WriteOutcome":
        return cls(WRITE_INVALID, 0, f"{action}: {reason}")


@dataclass(frozen=True)
class EventRow:
    """A calendar event decorated for the chronological list."""

    event: CalendarEvent
    date: str
    display_time: str
    author: str
    is_today: bool
    is_past: bool


def _parse_amount(value: Any) -> Optional[float]:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if amount != amount or amount in (float("inf"), float("-inf")):
        return None
    return amount


def _parse_time(value: Any) -> Optional[time]:
    if value in (None, ""):
        return None
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


class LedgerService:
    """Facade over the entry and event repositories."""

    def __init__(
        self,
        entries: LedgerEntryRepository,
        events: CalendarEventRepository,
    ) -> None:
        self.entries = entries
        self.events = events

    # Reads -----------------------------------------------------------------

    def entries_for_dates(self, dates: Iterable[DateLike]) -> LoadResult[LedgerEntry]:
        wanted = [parse_date(d) for d in dates]
        try:
            return LoadResult(self.entries.list_for_dates(wanted))
        except SQLAlchemyError as exc:
            failure = DataAccessFailure("list entries", exc)
            logger.warning("Entry read degraded to empty", extra={"error": str(exc)})
            return LoadResult([], failure)

    def entries_between(self, start: DateLike, end: DateLike) -> LoadResult[LedgerEntry]:
        try:
            return LoadResult(self.entries.list_between(parse_date(start), parse_date(end)))
        except SQLAlchemyError as exc:
            logger.warning("Entry read degraded to empty", extra={"error": str(exc)})
            return LoadResult([], DataAccessFailure("list entries", exc))

    def entries_for_category(
        self, category: str, start: date, end: date
    ) -> LoadResult[LedgerEntry]:
        try:
            return LoadResult(self.entries.list_for_category(category, start, end))
        except SQLAlchemyError as exc:
            logger.warning("Trend read degraded to empty", extra={"error": str(exc)})
            return LoadResult([], DataAccessFailure("list entries", exc))

    def public_events(self) -> LoadResult[CalendarEvent]:
        try:
            return LoadResult(self.events.list_public())
        except SQLAlchemyError as exc:
            logger.warning("Event read degraded to empty", extra={"error": str(exc)})
            return LoadResult([], DataAccessFailure("list events", exc))

    # Writes ----------------------------------------------------------------

    def add_entry(
        self,
        *,
        user_id: str,
        amount: Any,
        occurred_on: DateLike,
        category: Optional[str] = None,
        note: str = "",
    ) -> WriteOutcome:
        action = "Add entry"
        parsed = _parse_amount(amount)
        if parsed is None:
            return WriteOutcome.invalid(action, "amount must be a number")
        try:
            day = parse_date(occurred_on)
        except InvalidDate as exc:
            return WriteOutcome.invalid(action, str(exc))
        entry = LedgerEntry(
            user_id=user_id,
            amount=parsed,
            occurred_on=day,
            category=category or None,
            note=note,
            created_at=datetime.now(timezone.utc),
        )
        try:
            self.entries.create(entry)
        except SQLAlchemyError as exc:
            logger.exception("Entry create failed")
            return WriteOutcome.failed(action, exc)
        return WriteOutcome.from_count(1, action)

    def update_entry(
        self,
        entry_id: int,
        *,
        amount: Any,
        occurred_on: DateLike,
        category: Optional[str] = None,
        note: str = "",
    ) -> WriteOutcome:
        action = "Update entry"
        parsed = _parse_amount(amount)
        if parsed is None:
            return WriteOutcome.invalid(action, "amount must be a number")
        try:
            day = parse_date(occurred_on)
        except InvalidDate as exc:
            return WriteOutcome.invalid(action, str(exc))
        try:
            affected = self.entries.update(
                entry_id, amount=parsed, occurred_on=day, category=category or None, note=note
            )
        except SQLAlchemyError as exc:
            logger.exception("Entry update failed", extra={"entry_id": entry_id})
            return WriteOutcome.failed(action, exc)
        return self._report(WriteOutcome.from_count(affected, action), entry_id)

    def delete_entry(self, entry_id: int) -> WriteOutcome:
        action = "Delete entry"
        try:
            affected = self.entries.delete(entry_id)
        except SQLAlchemyError as exc:
            logger.exception("Entry delete failed", extra={"entry_id": entry_id})
            return WriteOutcome.failed(action, exc)
        return self._report(WriteOutcome.from_count(affected, action), entry_id)

    def add_event(
        self,
        *,
        user_id: str,
        occurred_on: DateLike,
        title: str,
        starts_at: Any = None,
        is_private: bool = False,
    ) -> WriteOutcome:
        action = "Add event"
        try:
            event = CalendarEvent(
                user_id=user_id,
                occurred_on=parse_date(occurred_on),
                starts_at=_parse_time(starts_at),
                title=title,
                is_private=is_private,
                created_at=datetime.now(timezone.utc),
            )
        except ValueError as exc:
            return WriteOutcome.invalid(action, str(exc))
        if not title.strip():
            return WriteOutcome.invalid(action, "date and title are required")
        try:
            self.events.create(event)
        except SQLAlchemyError as exc:
            logger.exception("Event create failed")
            return WriteOutcome.failed(action, exc)
        return WriteOutcome.from_count(1, action)

    def update_event(
        self,
        event_id: int,
        *,
        occurred_on: Optional[DateLike],
        title: str,
        starts_at: Any = None,
    ) -> WriteOutcome:
        action = "Update event"
        if not occurred_on or not title or not title.strip():
            return WriteOutcome.invalid(action, "date and title are required")
        try:
            changes = {
                "occurred_on": parse_date(occurred_on),
                "starts_at": _parse_time(starts_at),
                "title": title,
            }
        except ValueError as exc:
            return WriteOutcome.invalid(action, str(exc))
        try:
            affected = self.events.update(event_id, **changes)
        except SQLAlchemyError as exc:
            logger.exception("Event update failed", extra={"event_id": event_id})
            return WriteOutcome.failed(action, exc)
        return self._report(WriteOutcome.from_count(affected, action), event_id)

    def delete_event(self, event_id: int) -> WriteOutcome:
        action = "Delete event"
        try:
            affected = self.events.delete(event_id)
        except SQLAlchemyError as exc:
            logger.exception("Event delete failed", extra={"event_id": event_id})
            return WriteOutcome.failed(action, exc)
        return self._report(WriteOutcome.from_count(affected, action), event_id)

    @staticmethod
    def _report(outcome: WriteOutcome, record_id: int) -> WriteOutcome:
        if outcome.denied:
            logger.warning("Write affected no rows", extra={"record_id": record_id})
        return outcome


def event_rows(
    events: Iterable[CalendarEvent],
    *,
    today: str,
    names: Optional[dict[str, str]] = None,
    unknown_author: str = "未知",
    all_day_label: str = "全天",
) -> list[EventRow]:
    """Decorate events for the list view, preserving input order."""

    names = names or {}
    rows = []
    for event in events:
        day = parse_date(event.occurred_on).isoformat()
        rows.append(
            EventRow(
                event=event,
                date=day,
                display_time=event.starts_at.strftime("%H:%M") if event.starts_at else all_day_label,
                author=names.get(event.user_id, unknown_author),
                is_today=day == today,
                is_past=day < today,
            )
        )
    return rows


__all__ = [
    "DENIED_MESSAGE",
    "EventRow",
    "FAILED_MESSAGE",
    "LedgerService",
    "LoadResult",
    "WRITE_DENIED",
    "WRITE_FAILED",
    "WRITE_INVALID",
    "WRITE_OK",
    "WriteOutcome",
    "event_rows",
]
