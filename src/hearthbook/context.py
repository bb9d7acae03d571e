"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelCalendarEventRepository,
    SQLModelDisplayNameRepository,
    SQLModelLedgerEntryRepository,
)
from .services import dates
from .services.budgeting import BudgetTracker
from .services.display_names import DisplayNameDirectory, NameSnapshot
from .services.holidays import HolidayCalendar, HolidayFeed, RequestsHolidayFeed
from .services.ledger_service import LedgerService
from .services.view_sync import ViewSyncController


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    session_factory: Callable[[], Session]

    # Repositories
    entry_repo: SQLModelLedgerEntryRepository
    event_repo: SQLModelCalendarEventRepository
    budget_repo: SQLModelBudgetRepository
    name_repo: SQLModelDisplayNameRepository

    # Services
    ledger: LedgerService
    budget: BudgetTracker
    names: DisplayNameDirectory
    holidays: HolidayCalendar

    def today(self) -> str:
        return dates.today(self.config.TIMEZONE)

    def new_controller(self, **kwargs) -> ViewSyncController:
        """A fresh view controller bound to the configured zone and locale."""

        kwargs.setdefault("timezone", self.config.TIMEZONE)
        kwargs.setdefault("locale", self.config.LOCALE)
        return ViewSyncController(**kwargs)

    def load_default_holidays(self) -> dict[int, bool]:
        """Load the current and next year, as the calendar does on start."""

        year = int(self.today()[:4])
        return self.holidays.load_years([year, year + 1])


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    holiday_feed: Optional[HolidayFeed] = None,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    entry_repo = SQLModelLedgerEntryRepository(session_factory)
    event_repo = SQLModelCalendarEventRepository(session_factory)
    budget_repo = SQLModelBudgetRepository(session_factory)
    name_repo = SQLModelDisplayNameRepository(session_factory)

    if holiday_feed is None:
        holiday_feed = RequestsHolidayFeed(config.HOLIDAY_FEED_URL, timeout=config.HOLIDAY_FEED_TIMEOUT)

    names = DisplayNameDirectory(name_repo, NameSnapshot(config.name_cache_path))
    names.refresh()

    return AppContext(
        config=config,
        session_factory=session_factory,
        entry_repo=entry_repo,
        event_repo=event_repo,
        budget_repo=budget_repo,
        name_repo=name_repo,
        ledger=LedgerService(entry_repo, event_repo),
        budget=BudgetTracker(budget_repo),
        names=names,
        holidays=HolidayCalendar(holiday_feed),
    )
