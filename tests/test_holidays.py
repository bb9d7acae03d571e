"""Holiday overlay tests."""

from __future__ import annotations

import pytest
import requests

from hearthbook.errors import HolidayFeedFailure, InvalidDate
from hearthbook.services.holidays import (
    DEFAULT_HOLIDAY_NAME,
    HolidayCalendar,
    RequestsHolidayFeed,
    normalize_date,
    parse_records,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, raise_json=False):
        self.payload = payload
        self.status_code = status_code
        self.raise_json = raise_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.raise_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.mark.parametrize(
    "raw, expected",
    [("20250101", "2025-01-01"), ("2025-01-01", "2025-01-01"), (" 20251010 ", "2025-10-10")],
)
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["2025/01/01", "250101", "20251301", ""])
def test_normalize_date_rejects_garbage(raw):
    with pytest.raises(InvalidDate):
        normalize_date(raw)


def test_parse_records_keeps_only_holidays():
    parsed = parse_records(
        [
            {"date": "20250101", "description": "開國紀念日", "isHoliday": True},
            {"date": "20250102", "description": "", "isHoliday": False},
            {"date": "20250103", "isHoliday": True},
            {"date": "bogus", "isHoliday": True},
            "not-a-record",
        ]
    )

    assert sorted(parsed) == ["2025-01-01", "2025-01-03"]
    assert parsed["2025-01-01"].name == "開國紀念日"
    assert parsed["2025-01-03"].name == DEFAULT_HOLIDAY_NAME


def test_load_years_is_additive(holiday_feed):
    calendar = HolidayCalendar(holiday_feed)

    assert calendar.load(2025) is True
    assert calendar.load(2026) is True

    assert "2025-01-01" in calendar
    assert "2026-01-01" in calendar
    assert "2025-01-02" not in calendar
    assert calendar.loaded_years == [2025, 2026]
    assert len(calendar) == 3


def test_failed_year_leaves_cache_untouched(holiday_feed):
    calendar = HolidayCalendar(holiday_feed)
    calendar.load(2025)
    holiday_feed.failing.add(2026)

    assert calendar.load(2026) is False

    assert calendar.as_dict().keys() == {"2025-01-01", "2025-06-09"}
    assert calendar.loaded_years == [2025]


def test_failed_reload_keeps_previous_data(holiday_feed):
    calendar = HolidayCalendar(holiday_feed)
    calendar.load(2025)
    holiday_feed.failing.add(2025)

    assert calendar.load(2025) is False
    assert calendar.lookup("2025-06-09").name == "端午節"


def test_reload_replaces_only_that_year(holiday_feed):
    calendar = HolidayCalendar(holiday_feed)
    calendar.load_years([2025, 2026])
    holiday_feed.payloads[2025] = [{"date": "20250228", "description": "和平紀念日", "isHoliday": True}]

    calendar.load(2025)

    assert "2025-06-09" not in calendar
    assert "2025-02-28" in calendar
    assert "2026-01-01" in calendar


def test_lookup_absent_date_is_not_holiday(holiday_feed):
    calendar = HolidayCalendar(holiday_feed)
    calendar.load(2025)

    found = calendar.lookup("2025-01-01")
    missing = calendar.lookup("2025-01-02")

    assert found.is_holiday and found.name == "開國紀念日"
    assert missing.is_holiday is False
    assert missing.date == "2025-01-02"


def test_load_years_reports_each_year(holiday_feed):
    calendar = HolidayCalendar(holiday_feed)

    assert calendar.load_years([2025, 2030]) == {2025: True, 2030: False}
    assert holiday_feed.calls == [2025, 2030]


def test_requests_feed_formats_url_and_passes_timeout():
    session = FakeSession(FakeResponse([{"date": "20250101", "isHoliday": True}]))
    feed = RequestsHolidayFeed("https://example.test/{year}.json", timeout=3.5, session=session)

    assert feed.fetch(2025) == [{"date": "20250101", "isHoliday": True}]
    assert session.requested == [("https://example.test/2025.json", 3.5)]


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("offline")),
        FakeSession(FakeResponse(status_code=404)),
        FakeSession(FakeResponse(raise_json=True)),
        FakeSession(FakeResponse({"holidays": []})),
    ],
    ids=["network", "http-error", "bad-json", "not-a-list"],
)
def test_requests_feed_failures_become_feed_errors(session):
    feed = RequestsHolidayFeed("https://example.test/{year}.json", session=session)

    with pytest.raises(HolidayFeedFailure) as exc_info:
        feed.fetch(2025)

    assert exc_info.value.year == 2025


def test_calendar_survives_network_failure():
    feed = RequestsHolidayFeed(
        "https://example.test/{year}.json",
        session=FakeSession(error=requests.Timeout("slow")),
    )
    calendar = HolidayCalendar(feed)

    assert calendar.load(2025) is False
    assert len(calendar) == 0
