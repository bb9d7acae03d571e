"""Service module exports."""

from . import (
    aggregation,
    budgeting,
    calendar_grid,
    dates,
    display_names,
    holidays,
    ledger_service,
    view_sync,
)

__all__ = [
    "aggregation",
    "budgeting",
    "calendar_grid",
    "dates",
    "display_names",
    "holidays",
    "ledger_service",
    "view_sync",
]
