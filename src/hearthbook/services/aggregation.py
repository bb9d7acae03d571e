"""Roll raw ledger entries up into per-day, per-category and per-month sums.

Entries are read duck-typed (``occurred_on``, ``amount``, ``category``,
``created_at``) so both :class:`~hearthbook.models.LedgerEntry` rows and
lightweight test doubles aggregate the same way. Amount signs are never
interpreted here; totals are plain signed sums.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from ..constants.categories import UNCATEGORIZED, category_color
from .dates import canonical, month_bounds, month_key, month_sequence

SORT_KEYS: tuple[str, ...] = ("time-desc", "time-asc", "amount-desc", "amount-asc")


@dataclass(frozen=True)
class CategoryStat:
    """Derived per-category share of a period total."""

    category: str
    total: float
    percentage: float
    color: str


@dataclass(frozen=True)
class TrendPoint:
    month: str
    total: float


@dataclass
class PeriodSummary:
    """Everything a list view needs for one window of entries."""

    total: float = 0.0
    count: int = 0
    by_day: dict[str, float] = field(default_factory=dict)
    categories: list[CategoryStat] = field(default_factory=list)

    @property
    def tone(self) -> str:
        return amount_tone(self.total)


def entry_amount(entry: Any) -> float:
    """Signed amount of an entry; a missing amount counts as 0."""

    value = getattr(entry, "amount", None)
    if value is None:
        return 0.0
    return float(value)


def entry_date(entry: Any) -> str:
    return canonical(getattr(entry, "occurred_on"))


def entry_category(entry: Any) -> str:
    return getattr(entry, "category", None) or UNCATEGORIZED


def sum_by_day(entries: Iterable[Any]) -> dict[str, float]:
    """Map each date to the sum of that date's amounts, keys ascending."""

    totals: dict[str, float] = {}
    for entry in entries:
        key = entry_date(entry)
        totals[key] = totals.get(key, 0.0) + entry_amount(entry)
    return dict(sorted(totals.items()))


def sum_by_category(entries: Iterable[Any]) -> dict[str, float]:
    """Map each category (unset ones under ``UNCATEGORIZED``) to its summed amount."""

    totals: dict[str, float] = {}
    for entry in entries:
        key = entry_category(entry)
        totals[key] = totals.get(key, 0.0) + entry_amount(entry)
    return totals


def category_stats(totals: dict[str, float]) -> list[CategoryStat]:
    """Attach percentage-of-total and colour to each category total.

    When the period total is 0 every percentage is 0.
    """

    grand_total = sum(totals.values())
    stats = []
    for category, total in totals.items():
        percentage = 0.0 if grand_total == 0 else total / grand_total * 100
        stats.append(
            CategoryStat(
                category=category,
                total=total,
                percentage=percentage,
                color=category_color(category),
            )
        )
    return stats


def rank(stats: Iterable[CategoryStat]) -> list[CategoryStat]:
    """Largest absolute total first; equal totals ordered by category name."""

    return sorted(stats, key=lambda stat: (-abs(stat.total), stat.category))


def trend_series(
    entries: Iterable[Any], category: str, start_month: str, end_month: str
) -> list[TrendPoint]:
    """One point per month in ``[start_month, end_month]``, zero-filled.

    Entries of other categories or outside the window are ignored. Raises
    :class:`~hearthbook.errors.InvalidRange` when start is after end.
    """

    months = month_sequence(start_month, end_month)
    totals = {month: 0.0 for month in months}
    for entry in entries:
        if entry_category(entry) != category:
            continue
        key = month_key(getattr(entry, "occurred_on"))
        if key in totals:
            totals[key] += entry_amount(entry)
    return [TrendPoint(month=month, total=totals[month]) for month in months]


def trend_bounds(start_month: str, end_month: str):
    """Inclusive date window covering a month range, for store queries."""

    month_sequence(start_month, end_month)  # validates order
    return month_bounds(start_month)[0], month_bounds(end_month)[1]


_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _created_key(entry: Any) -> datetime:
    # Stores without timezone support hand back naive UTC values
    value = getattr(entry, "created_at", None)
    if value is None:
        return _EARLIEST
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def sort_entries(entries: Iterable[Any], key: str = "time-desc") -> list[Any]:
    """Stable sort by creation time or amount, ascending or descending."""

    items = list(entries)
    if key == "time-desc":
        return sorted(items, key=_created_key, reverse=True)
    if key == "time-asc":
        return sorted(items, key=_created_key)
    if key == "amount-desc":
        return sorted(items, key=entry_amount, reverse=True)
    if key == "amount-asc":
        return sorted(items, key=entry_amount)
    raise ValueError(f"Unknown sort key: {key!r}")


def summarize(entries: Sequence[Any]) -> PeriodSummary:
    by_category = sum_by_category(entries)
    return PeriodSummary(
        total=sum(entry_amount(e) for e in entries),
        count=len(entries),
        by_day=sum_by_day(entries),
        categories=rank(category_stats(by_category)),
    )


def amount_tone(value: float) -> str:
    """``positive``, ``negative`` or ``neutral`` for colouring amounts."""

    if value > 0:
        return "positive"
    if value < 0:
        return "negative"
    return "neutral"


def format_amount(value: float) -> str:
    """Thousands-separated amount; whole numbers drop the decimals."""

    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


__all__ = [
    "CategoryStat",
    "PeriodSummary",
    "SORT_KEYS",
    "TrendPoint",
    "amount_tone",
    "category_stats",
    "entry_amount",
    "entry_date",
    "format_amount",
    "rank",
    "sort_entries",
    "sum_by_category",
    "sum_by_day",
    "summarize",
    "trend_bounds",
    "trend_series",
]
