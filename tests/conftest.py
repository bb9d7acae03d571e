"""Pytest configuration and shared fixtures for HearthBook tests.

Provides an isolated SQLite database per test, repository instances, entry and
event factories, and a scripted holiday feed so no test touches the network.
"""

from __future__ import annotations

import tempfile
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any

import pytest
from sqlmodel import SQLModel, create_engine

from hearthbook import models  # noqa: F401  # register tables with SQLModel metadata
from hearthbook.config import BaseConfig
from hearthbook.context import create_app_context
from hearthbook.errors import HolidayFeedFailure
from hearthbook.infra.database import create_session_factory
from hearthbook.infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelCalendarEventRepository,
    SQLModelDisplayNameRepository,
    SQLModelLedgerEntryRepository,
)
from hearthbook.models import CalendarEvent, LedgerEntry

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive in production."""
    return create_session_factory(db_engine)


@pytest.fixture
def entry_repo(session_factory):
    return SQLModelLedgerEntryRepository(session_factory)


@pytest.fixture
def event_repo(session_factory):
    return SQLModelCalendarEventRepository(session_factory)


@pytest.fixture
def budget_repo(session_factory):
    return SQLModelBudgetRepository(session_factory)


@pytest.fixture
def name_repo(session_factory):
    return SQLModelDisplayNameRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def make_entry(
    occurred_on: str | date,
    amount: float | None,
    category: str | None = None,
    *,
    note: str = "",
    user_id: str = "u-1",
    created_at: datetime | None = None,
    entry_id: int | None = None,
) -> LedgerEntry:
    """Build an unsaved ledger entry."""
    if isinstance(occurred_on, str):
        occurred_on = date.fromisoformat(occurred_on)
    return LedgerEntry(
        id=entry_id,
        user_id=user_id,
        amount=amount,
        category=category,
        note=note,
        occurred_on=occurred_on,
        created_at=_aware(created_at or datetime(2025, 1, 1, 12, 0)),
    )


@pytest.fixture
def entry_factory(entry_repo):
    """Factory for persisted ledger entries."""

    def _create(occurred_on: str | date, amount: float | None, category: str | None = None, **kwargs) -> LedgerEntry:
        return entry_repo.create(make_entry(occurred_on, amount, category, **kwargs))

    return _create


@pytest.fixture
def event_factory(event_repo):
    """Factory for persisted calendar events."""

    def _create(
        occurred_on: str,
        title: str = "Dentist",
        *,
        starts_at: time | None = None,
        is_private: bool = False,
        user_id: str = "u-1",
    ) -> CalendarEvent:
        return event_repo.create(
            CalendarEvent(
                user_id=user_id,
                occurred_on=date.fromisoformat(occurred_on),
                starts_at=starts_at,
                title=title,
                is_private=is_private,
            )
        )

    return _create


# =============================================================================
# Holiday feed doubles
# =============================================================================


class ScriptedHolidayFeed:
    """Holiday feed returning canned payloads per year, or failing on demand."""

    def __init__(self, payloads: dict[int, Any] | None = None):
        self.payloads = dict(payloads or {})
        self.failing: set[int] = set()
        self.calls: list[int] = []

    def fetch(self, year: int) -> list[dict[str, Any]]:
        self.calls.append(year)
        if year in self.failing or year not in self.payloads:
            raise HolidayFeedFailure(year, "scripted failure")
        return self.payloads[year]


@pytest.fixture
def holiday_feed():
    return ScriptedHolidayFeed(
        {
            2025: [
                {"date": "20250101", "description": "開國紀念日", "isHoliday": True},
                {"date": "20250102", "description": "", "isHoliday": False},
                {"date": "20250609", "description": "端午節", "isHoliday": True},
            ],
            2026: [
                {"date": "2026-01-01", "description": "開國紀念日", "isHoliday": True},
            ],
        }
    )


# =============================================================================
# Application fixtures
# =============================================================================


@pytest.fixture
def app_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> BaseConfig:
    monkeypatch.setenv("HEARTHBOOK_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("HEARTHBOOK_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    return BaseConfig()


@pytest.fixture
def app_context(app_config, holiday_feed):
    return create_app_context(app_config, holiday_feed=holiday_feed)


def assert_float_equal(actual: float, expected: float, tolerance: float = 1e-6):
    """Assert that two floats are equal within a tolerance."""
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
