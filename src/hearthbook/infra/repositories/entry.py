"""SQLModel implementation of the ledger entry repository."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Iterable, Optional

from sqlalchemy import or_
from sqlmodel import Session, select

from ...constants.categories import UNCATEGORIZED
from ...models.entry import LedgerEntry

_IMMUTABLE_FIELDS = {"id", "created_at"}


class SQLModelLedgerEntryRepository:
    """SQLModel-based ledger entry repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, entry_id: int) -> Optional[LedgerEntry]:
        """Retrieve an entry by ID."""
        with self.session_factory() as session:
            obj = session.get(LedgerEntry, entry_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_for_dates(self, dates: Iterable[date]) -> list[LedgerEntry]:
        """Entries whose date is one of ``dates``, newest first."""
        wanted = list(dates)
        if not wanted:
            return []
        with self.session_factory() as session:
            statement = (
                select(LedgerEntry)
                .where(LedgerEntry.occurred_on.in_(wanted))  # type: ignore[attr-defined]
                .order_by(LedgerEntry.created_at.desc())  # type: ignore[attr-defined]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_between(self, start: date, end: date) -> list[LedgerEntry]:
        """Entries dated within the inclusive window."""
        with self.session_factory() as session:
            statement = (
                select(LedgerEntry)
                .where(LedgerEntry.occurred_on >= start)
                .where(LedgerEntry.occurred_on <= end)
                .order_by(LedgerEntry.occurred_on, LedgerEntry.created_at)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_category(self, category: str, start: date, end: date) -> list[LedgerEntry]:
        """Entries of one category dated within the inclusive window.

        ``UNCATEGORIZED`` also selects entries stored without a category.
        """
        if category == UNCATEGORIZED:
            matches_category = or_(
                LedgerEntry.category == None,  # noqa: E711
                LedgerEntry.category == "",
                LedgerEntry.category == UNCATEGORIZED,
            )
        else:
            matches_category = LedgerEntry.category == category
        with self.session_factory() as session:
            statement = (
                select(LedgerEntry)
                .where(matches_category)
                .where(LedgerEntry.occurred_on >= start)
                .where(LedgerEntry.occurred_on <= end)
                .order_by(LedgerEntry.occurred_on)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry."""
        with self.session_factory() as session:
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def update(self, entry_id: int, **changes: Any) -> int:
        """Apply field changes; no version check, last write wins."""
        with self.session_factory() as session:
            entry = session.get(LedgerEntry, entry_id)
            if entry is None:
                return 0
            for field, value in changes.items():
                if field in _IMMUTABLE_FIELDS:
                    continue
                setattr(entry, field, value)
            session.add(entry)
            session.commit()
            return 1

    def delete(self, entry_id: int) -> int:
        """Delete an entry by ID."""
        with self.session_factory() as session:
            entry = session.get(LedgerEntry, entry_id)
            if entry is None:
                return 0
            session.delete(entry)
            session.commit()
            return 1
