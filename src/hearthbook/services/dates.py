"""Date arithmetic for day/week/month windows and month grid layout.

All public helpers speak canonical ``YYYY-MM-DD`` strings (``YYYY-MM`` for
month keys) and accept either such a string or a ``date``. Malformed input
raises :class:`~hearthbook.errors.InvalidDate`; nothing is clamped silently.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Literal, Union
from zoneinfo import ZoneInfo

from ..errors import InvalidDate, InvalidRange

DateLike = Union[str, date]
Granularity = Literal["day", "week", "month"]
WeekStart = Literal["monday", "sunday"]

GRANULARITIES: tuple[str, ...] = ("day", "week", "month")
WEEK_STARTS: tuple[str, ...] = ("monday", "sunday")
DEFAULT_TIMEZONE = "Asia/Taipei"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")

# Indexed by Python's weekday(): Monday == 0
WEEKDAY_LABELS: dict[str, tuple[str, ...]] = {
    "zh-TW": ("週一", "週二", "週三", "週四", "週五", "週六", "週日"),
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
}


@dataclass(frozen=True)
class MonthCell:
    """One slot of a month grid; blanks pad the first week."""

    day: int | None = None
    date: str | None = None

    @property
    def is_blank(self) -> bool:
        return self.day is None


def parse_date(value: DateLike) -> date:
    """Return a ``date`` for a canonical string or date-like value."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidDate(value)
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDate(value) from exc


def format_date(value: date) -> str:
    return value.isoformat()


def canonical(value: DateLike) -> str:
    """Validate and normalize to ``YYYY-MM-DD``."""

    return format_date(parse_date(value))


def parse_month(value: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` key into (year, month)."""

    match = _MONTH_RE.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidDate(value, expected="YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidDate(value, expected="YYYY-MM")
    return year, month


def month_key(value: DateLike) -> str:
    d = parse_date(value)
    return f"{d.year:04d}-{d.month:02d}"


def _check_year_month(year: int, month: int) -> None:
    if not 1 <= month <= 12 or not date.min.year <= year <= date.max.year:
        raise InvalidDate(f"{year}-{month}", expected="year and month 1-12")


def today(tz: str = DEFAULT_TIMEZONE, *, now: datetime | None = None) -> str:
    """Current date in ``tz``, independent of the host's local zone.

    ``now`` may be supplied for deterministic callers; naive values are
    interpreted as UTC.
    """

    zone = ZoneInfo(tz)
    if now is None:
        instant = datetime.now(zone)
    else:
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        instant = now.astimezone(zone)
    return format_date(instant.date())


def shift_date(value: DateLike, offset_days: int) -> str:
    """Move by whole days across month and year boundaries."""

    return format_date(parse_date(value) + timedelta(days=offset_days))


def shift_month(value: DateLike, offset_months: int) -> str:
    """Move by whole months, clamping the day to the target month's length."""

    d = parse_date(value)
    index = d.year * 12 + (d.month - 1) + offset_months
    year, month = divmod(index, 12)
    month += 1
    _check_year_month(year, month)
    day = min(d.day, calendar.monthrange(year, month)[1])
    return format_date(date(year, month, day))


def week_range(value: DateLike) -> list[str]:
    """The seven dates of the ISO week (Monday through Sunday) containing ``value``."""

    d = parse_date(value)
    monday = d - timedelta(days=d.weekday())
    return [format_date(monday + timedelta(days=i)) for i in range(7)]


def month_range(value: DateLike) -> list[str]:
    """Every date of the month containing ``value``, ascending."""

    d = parse_date(value)
    days = calendar.monthrange(d.year, d.month)[1]
    return [format_date(date(d.year, d.month, day)) for day in range(1, days + 1)]


def range_for(value: DateLike, granularity: str) -> list[str]:
    """Dates covered by the window of ``granularity`` around ``value``."""

    if granularity == "day":
        return [canonical(value)]
    if granularity == "week":
        return week_range(value)
    if granularity == "month":
        return month_range(value)
    raise ValueError(f"Unknown granularity: {granularity!r}")


def leading_blanks(year: int, month: int, week_start: str = "sunday") -> int:
    """Number of empty slots before the 1st in a grid whose rows begin on ``week_start``."""

    _check_year_month(year, month)
    first_weekday = date(year, month, 1).weekday()  # Monday == 0
    if week_start == "monday":
        return first_weekday
    if week_start == "sunday":
        return (first_weekday + 1) % 7
    raise ValueError(f"Unknown week start: {week_start!r}")


def month_grid_cells(year: int, month: int, week_start: str = "sunday") -> list[MonthCell]:
    """Blank placeholders followed by one cell per day of the month."""

    blanks = leading_blanks(year, month, week_start)
    days = calendar.monthrange(year, month)[1]
    cells = [MonthCell() for _ in range(blanks)]
    cells.extend(
        MonthCell(day=day, date=format_date(date(year, month, day))) for day in range(1, days + 1)
    )
    return cells


def weekday_label(value: DateLike, locale: str = "zh-TW") -> str:
    labels = WEEKDAY_LABELS.get(locale, WEEKDAY_LABELS["zh-TW"])
    return labels[parse_date(value).weekday()]


def weekday_headers(week_start: str = "sunday", locale: str = "zh-TW") -> list[str]:
    """Column headings for a month grid."""

    labels = list(WEEKDAY_LABELS.get(locale, WEEKDAY_LABELS["zh-TW"]))
    if week_start == "sunday":
        return labels[-1:] + labels[:-1]
    return labels


def months_between(start: str, end: str) -> int:
    """Whole months from ``start`` to ``end`` (``YYYY-MM`` keys); negative when reversed."""

    start_year, start_month = parse_month(start)
    end_year, end_month = parse_month(end)
    return (end_year - start_year) * 12 + (end_month - start_month)


def shift_month_key(key: str, offset_months: int) -> str:
    year, month = parse_month(key)
    index = year * 12 + (month - 1) + offset_months
    year, month = divmod(index, 12)
    return f"{year:04d}-{month + 1:02d}"


def month_sequence(start: str, end: str) -> list[str]:
    """Every month key from ``start`` through ``end`` inclusive."""

    span = months_between(start, end)
    if span < 0:
        raise InvalidRange(start, end)
    return [shift_month_key(start, i) for i in range(span + 1)]


def default_trend_window(current: DateLike, months: int = 6) -> tuple[str, str]:
    """The ``months``-long window ending in ``current``'s month."""

    end = month_key(current)
    return shift_month_key(end, -(months - 1)), end


def clamp_month_window(
    start: str, end: str, *, edited: str = "start", max_months: int = 12
) -> tuple[str, str]:
    """Shrink a window longer than ``max_months`` by moving the end the user did not edit."""

    if months_between(start, end) <= max_months - 1:
        return start, end
    if edited == "start":
        return start, shift_month_key(start, max_months - 1)
    return shift_month_key(end, -(max_months - 1)), end


def month_bounds(key: str) -> tuple[date, date]:
    """First and last date of a ``YYYY-MM`` month."""

    year, month = parse_month(key)
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def period_label(anchor: DateLike, granularity: str, locale: str = "zh-TW") -> str:
    """Header text for the active window."""

    if granularity == "day":
        d = canonical(anchor)
        if locale == "zh-TW":
            return f"{d}（{weekday_label(d, locale)}）"
        return f"{d} ({weekday_label(d, locale)})"
    if granularity == "week":
        days = week_range(anchor)
        return f"{days[0]} ~ {days[-1]}"
    if granularity == "month":
        return month_key(anchor)
    raise ValueError(f"Unknown granularity: {granularity!r}")


__all__ = [
    "DEFAULT_TIMEZONE",
    "GRANULARITIES",
    "MonthCell",
    "WEEK_STARTS",
    "canonical",
    "clamp_month_window",
    "default_trend_window",
    "format_date",
    "leading_blanks",
    "month_bounds",
    "month_grid_cells",
    "month_key",
    "month_range",
    "month_sequence",
    "months_between",
    "parse_date",
    "parse_month",
    "period_label",
    "range_for",
    "shift_date",
    "shift_month",
    "shift_month_key",
    "today",
    "week_range",
    "weekday_headers",
    "weekday_label",
]
