"""Repository protocol definitions for domain layer."""

from .budget import BudgetRepository
from .calendar_event import CalendarEventRepository
from .display_name import DisplayNameRepository
from .entry import LedgerEntryRepository

__all__ = [
    "BudgetRepository",
    "CalendarEventRepository",
    "DisplayNameRepository",
    "LedgerEntryRepository",
]
