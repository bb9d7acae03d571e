"""Public holiday overlay backed by a yearly JSON feed.

The overlay is a session-scoped cache keyed by canonical date. Loading a
year replaces only that year's dates; other years stay cached. Feed
failures are logged and swallowed so the calendar still renders.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol

import requests

from ..errors import HolidayFeedFailure, InvalidDate
from ..logging_config import get_logger
from .dates import DateLike, canonical

logger = get_logger(__name__)

DEFAULT_HOLIDAY_NAME = "國定假日"
_COMPACT_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


@dataclass(frozen=True)
class Holiday:
    date: str
    name: str
    is_holiday: bool = True


class HolidayFeed(Protocol):
    """Source of raw holiday records for one year."""

    def fetch(self, year: int) -> list[dict[str, Any]]:  # pragma: no cover - interface
        ...


class RequestsHolidayFeed:
    """Fetch ``{year}.json`` documents over HTTP."""

    def __init__(
        self,
        url_template: str,
        *,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url_template = url_template
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, year: int) -> list[dict[str, Any]]:
        url = self.url_template.format(year=year)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise HolidayFeedFailure(year, str(exc)) from exc
        except ValueError as exc:
            raise HolidayFeedFailure(year, f"invalid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise HolidayFeedFailure(year, f"expected a list, got {type(payload).__name__}")
        return payload


def normalize_date(raw: DateLike) -> str:
    """Turn ``YYYYMMDD`` or ``YYYY-MM-DD`` into the canonical hyphenated form."""

    if isinstance(raw, str):
        match = _COMPACT_RE.match(raw.strip())
        if match:
            raw = "-".join(match.groups())
        else:
            raw = raw.strip()
    return canonical(raw)


def parse_records(records: Iterable[Any]) -> dict[str, Holiday]:
    """Keep only records flagged as holidays, keyed by canonical date."""

    parsed: dict[str, Holiday] = {}
    for record in records:
        if not isinstance(record, dict) or not record.get("isHoliday"):
            continue
        try:
            day = normalize_date(record.get("date"))
        except InvalidDate:
            logger.debug("Skipping holiday record with bad date", extra={"record": record})
            continue
        name = record.get("description") or record.get("name") or DEFAULT_HOLIDAY_NAME
        parsed[day] = Holiday(date=day, name=str(name))
    return parsed


class HolidayCalendar:
    """Additive, per-year cache of holidays."""

    def __init__(self, feed: HolidayFeed) -> None:
        self.feed = feed
        self._holidays: dict[str, Holiday] = {}
        self._dates_by_year: dict[int, set[str]] = {}

    def load(self, year: int) -> bool:
        """Fetch and merge one year; returns False when the feed failed."""

        try:
            records = self.feed.fetch(year)
            parsed = parse_records(records)
        except (HolidayFeedFailure, TypeError) as exc:
            logger.warning("Holiday feed unavailable", extra={"year": year, "error": str(exc)})
            return False

        for day in self._dates_by_year.pop(year, set()):
            self._holidays.pop(day, None)
        self._holidays.update(parsed)
        self._dates_by_year[year] = set(parsed)
        logger.info("Holidays loaded", extra={"year": year, "count": len(parsed)})
        return True

    def load_years(self, years: Iterable[int]) -> dict[int, bool]:
        return {year: self.load(year) for year in years}

    def lookup(self, day: DateLike) -> Holiday:
        key = canonical(day)
        holiday = self._holidays.get(key)
        if holiday is None:
            return Holiday(date=key, name="", is_holiday=False)
        return holiday

    @property
    def loaded_years(self) -> list[int]:
        return sorted(self._dates_by_year)

    def as_dict(self) -> dict[str, Holiday]:
        return dict(self._holidays)

    def __contains__(self, day: object) -> bool:
        return day in self._holidays

    def __len__(self) -> int:
        return len(self._holidays)


__all__ = [
    "DEFAULT_HOLIDAY_NAME",
    "Holiday",
    "HolidayCalendar",
    "HolidayFeed",
    "RequestsHolidayFeed",
    "normalize_date",
    "parse_records",
]
