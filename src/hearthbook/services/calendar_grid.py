"""Month grid cells decorated with holidays, today marker and entry counts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from .aggregation import entry_amount, entry_date
from .dates import month_grid_cells
from .holidays import Holiday, HolidayCalendar

HolidaySource = Union[HolidayCalendar, Mapping[str, Holiday]]


@dataclass(frozen=True)
class GridCell:
    """A renderable month grid slot. Blank cells only pad the first row."""

    day: Optional[int] = None
    date: Optional[str] = None
    is_holiday: bool = False
    holiday_name: str = ""
    is_today: bool = False
    entry_count: int = 0
    day_total: float = 0.0

    @property
    def is_blank(self) -> bool:
        return self.day is None


def _holiday_for(holidays: Optional[HolidaySource], day: str) -> Optional[Holiday]:
    if holidays is None:
        return None
    if isinstance(holidays, HolidayCalendar):
        found = holidays.lookup(day)
        return found if found.is_holiday else None
    return holidays.get(day)


def build_grid(
    year: int,
    month: int,
    entries: Iterable[Any],
    holidays: Optional[HolidaySource],
    today: str,
    *,
    week_start: str = "sunday",
) -> list[GridCell]:
    """Lay out ``year``/``month`` and annotate each day cell.

    ``entries`` may be ledger entries or calendar events; anything with an
    ``occurred_on`` date is counted, and ``amount`` (when present) feeds the
    per-day total. ``today`` is compared by exact canonical string.
    """

    counts: dict[str, int] = {}
    totals: dict[str, float] = {}
    for entry in entries:
        key = entry_date(entry)
        counts[key] = counts.get(key, 0) + 1
        totals[key] = totals.get(key, 0.0) + entry_amount(entry)

    cells: list[GridCell] = []
    for slot in month_grid_cells(year, month, week_start):
        if slot.is_blank:
            cells.append(GridCell())
            continue
        holiday = _holiday_for(holidays, slot.date)
        cells.append(
            GridCell(
                day=slot.day,
                date=slot.date,
                is_holiday=holiday is not None,
                holiday_name=holiday.name if holiday else "",
                is_today=slot.date == today,
                entry_count=counts.get(slot.date, 0),
                day_total=totals.get(slot.date, 0.0),
            )
        )
    return cells


def grid_rows(cells: list[GridCell]) -> list[list[GridCell]]:
    """Split cells into weeks of seven, padding the last row with blanks."""

    padded = cells + [GridCell()] * (-len(cells) % 7)
    return [padded[i : i + 7] for i in range(0, len(padded), 7)]


__all__ = ["GridCell", "build_grid", "grid_rows"]
