"""SQLModel table exports."""

from .budget import BUDGET_SINGLETON_ID, Budget
from .calendar_event import CalendarEvent
from .display_name import DisplayName
from .entry import LedgerEntry

__all__ = [
    "BUDGET_SINGLETON_ID",
    "Budget",
    "CalendarEvent",
    "DisplayName",
    "LedgerEntry",
]
