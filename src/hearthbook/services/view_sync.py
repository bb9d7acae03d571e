"""Cross-view navigation state for the chronological list and the month grid.

The controller owns the anchor date, granularity and active view. Every
change that alters the visible window issues a :class:`RangeRequest` with a
fresh token; only the response to the latest token is applied, so a slow
reply for an old window can never overwrite newer state.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from ..logging_config import get_logger
from . import dates
from .aggregation import SORT_KEYS, PeriodSummary, entry_date, sort_entries, summarize
from .calendar_grid import GridCell, HolidaySource, build_grid

logger = get_logger(__name__)

VIEWS: tuple[str, ...] = ("list", "grid")


@dataclass(frozen=True)
class RangeRequest:
    """A fetch issued for one window; ``token`` orders requests."""

    token: int
    view: str
    granularity: str
    anchor: str
    dates: tuple[str, ...]

    @property
    def start(self) -> str:
        return self.dates[0]

    @property
    def end(self) -> str:
        return self.dates[-1]


def scroll_target_for(day: dates.DateLike, entries: Sequence[Any]) -> Optional[str]:
    """Earliest entry date on or after ``day``; None when nothing qualifies."""

    wanted = dates.canonical(day)
    candidates = [d for d in map(entry_date, entries) if d >= wanted]
    return min(candidates) if candidates else None


class ViewSyncController:
    """Session-long state machine over ``{list, grid} x {day, week, month}``."""

    def __init__(
        self,
        *,
        timezone: str = dates.DEFAULT_TIMEZONE,
        today: Optional[str] = None,
        sort_key: str = "time-desc",
        locale: str = "zh-TW",
    ) -> None:
        if sort_key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort_key!r}")
        self.timezone = timezone
        self.locale = locale
        self._pinned_today = dates.canonical(today) if today else None
        self.view = "list"
        self.granularity = "day"
        self.anchor = self.today
        self.grid_month = dates.month_key(self.today)
        self.sort_key = sort_key
        self.list_entries: list[Any] = []
        self.grid_entries: list[Any] = []
        self.summary = PeriodSummary()
        self.scroll_target: Optional[str] = None
        self._pending_scroll: Optional[str] = None
        self.last_error: Optional[Exception] = None
        self._token = 0

    # Window --------------------------------------------------------------

    @property
    def today(self) -> str:
        """Current date in the configured zone, unless pinned at construction."""

        return self._pinned_today or dates.today(self.timezone)

    @property
    def active_range(self) -> list[str]:
        if self.view == "grid":
            return dates.month_range(f"{self.grid_month}-01")
        return dates.range_for(self.anchor, self.granularity)

    @property
    def header(self) -> str:
        if self.view == "grid":
            return self.grid_month
        return dates.period_label(self.anchor, self.granularity, self.locale)

    @property
    def latest_token(self) -> int:
        return self._token

    def begin_request(self) -> RangeRequest:
        self._token += 1
        self._pending_scroll = None
        return RangeRequest(
            token=self._token,
            view=self.view,
            granularity=self.granularity if self.view == "list" else "month",
            anchor=self.anchor if self.view == "list" else f"{self.grid_month}-01",
            dates=tuple(self.active_range),
        )

    def is_current(self, request: RangeRequest) -> bool:
        return request.token == self._token

    def deliver(self, request: RangeRequest, entries: Sequence[Any], error: Optional[Exception] = None) -> bool:
        """Apply a response; stale tokens are discarded and return False."""

        if not self.is_current(request):
            logger.debug(
                "Discarding stale response",
                extra={"token": request.token, "latest": self._token},
            )
            return False
        self.last_error = error
        if request.view == "grid":
            self.grid_entries = list(entries)
        else:
            self.list_entries = sort_entries(entries, self.sort_key)
            self.summary = summarize(self.list_entries)
            if self._pending_scroll is not None:
                self.scroll_target = scroll_target_for(self._pending_scroll, self.list_entries)
                self._pending_scroll = None
        return True

    async def refresh(self, loader: Callable[[RangeRequest], Any]) -> bool:
        """Issue a request for the current window, await ``loader`` and deliver.

        ``loader`` may be a coroutine function or a blocking callable (run in a
        worker thread). It returns a list of entries or an object with
        ``items`` and ``error`` attributes.
        """

        request = self.begin_request()
        if inspect.iscoroutinefunction(loader):
            result = await loader(request)
        else:
            result = await asyncio.to_thread(loader, request)
        if hasattr(result, "items") and not isinstance(result, dict):
            return self.deliver(request, result.items, getattr(result, "error", None))
        return self.deliver(request, result)

    # Transitions ---------------------------------------------------------

    def change_granularity(self, granularity: str) -> RangeRequest:
        """Switch the list window around the unchanged anchor."""

        if granularity not in dates.GRANULARITIES:
            raise ValueError(f"Unknown granularity: {granularity!r}")
        self.granularity = granularity
        self.view = "list"
        return self.begin_request()

    def navigate(self, step: int) -> RangeRequest:
        """Move one unit of the current granularity (the grid always moves by month)."""

        if self.view == "grid":
            self.grid_month = dates.shift_month_key(self.grid_month, step)
        elif self.granularity == "day":
            self.anchor = dates.shift_date(self.anchor, step)
        elif self.granularity == "week":
            self.anchor = dates.shift_date(self.anchor, 7 * step)
        else:
            self.anchor = dates.shift_month(self.anchor, step)
        return self.begin_request()

    def jump_to(self, day: dates.DateLike) -> RangeRequest:
        self.anchor = dates.canonical(day)
        return self.begin_request()

    def show_grid(self, month: Optional[str] = None) -> RangeRequest:
        if month is not None:
            dates.parse_month(month)
            self.grid_month = month
        self.view = "grid"
        return self.begin_request()

    def show_list(self) -> RangeRequest:
        self.view = "list"
        return self.begin_request()

    def toggle_view(self) -> RangeRequest:
        return self.show_list() if self.view == "grid" else self.show_grid()

    def select_grid_cell(self, day: dates.DateLike) -> Optional[RangeRequest]:
        """Switch to the list and position it at ``day`` or the next date with entries.

        When ``day`` lies inside the list's current window the loaded entries are
        searched at once and None is returned. Otherwise the anchor moves to
        ``day`` and the returned request must be delivered; the scroll target is
        resolved from that response. A None target means nothing to scroll to.
        """

        wanted = dates.canonical(day)
        self.view = "list"
        if wanted in self.active_range:
            self._pending_scroll = None
            self.scroll_target = scroll_target_for(wanted, self.list_entries)
            return None
        self.anchor = wanted
        self.scroll_target = None
        request = self.begin_request()
        self._pending_scroll = wanted
        return request

    def focus_today(self) -> Optional[str]:
        self.scroll_target = scroll_target_for(self.today, self.list_entries)
        return self.scroll_target

    def set_sort(self, sort_key: str) -> None:
        """Re-order the loaded list locally; no refetch needed."""

        if sort_key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort_key!r}")
        self.sort_key = sort_key
        self.list_entries = sort_entries(self.list_entries, sort_key)

    def grid(self, holidays: Optional[HolidaySource], *, week_start: str = "sunday") -> list[GridCell]:
        year, month = dates.parse_month(self.grid_month)
        return build_grid(year, month, self.grid_entries, holidays, self.today, week_start=week_start)


__all__ = ["RangeRequest", "VIEWS", "ViewSyncController", "scroll_target_for"]
