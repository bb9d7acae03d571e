"""Ledger entry repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional, Protocol

from ...models.entry import LedgerEntry


class LedgerEntryRepository(Protocol):
    """Repository for managing ledger entries."""

    def get_by_id(self, entry_id: int) -> Optional[LedgerEntry]:
        """Retrieve an entry by ID."""
        ...

    def list_for_dates(self, dates: Iterable[date]) -> list[LedgerEntry]:
        """Entries whose date is one of ``dates``, newest first."""
        ...

    def list_between(self, start: date, end: date) -> list[LedgerEntry]:
        """Entries dated within the inclusive window."""
        ...

    def list_for_category(self, category: str, start: date, end: date) -> list[LedgerEntry]:
        """Entries of one category dated within the inclusive window."""
        ...

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Persist a new entry."""
        ...

    def update(self, entry_id: int, **changes: Any) -> int:
        """Apply ``changes``; returns the affected row count (0 when missing)."""
        ...

    def delete(self, entry_id: int) -> int:
        """Delete by ID; returns the affected row count (0 when missing)."""
        ...
