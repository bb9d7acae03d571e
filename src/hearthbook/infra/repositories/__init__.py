"""Concrete repository implementations using SQLModel."""

from .budget import SQLModelBudgetRepository
from .calendar_event import SQLModelCalendarEventRepository
from .display_name import SQLModelDisplayNameRepository
from .entry import SQLModelLedgerEntryRepository

__all__ = [
    "SQLModelBudgetRepository",
    "SQLModelCalendarEventRepository",
    "SQLModelDisplayNameRepository",
    "SQLModelLedgerEntryRepository",
]
