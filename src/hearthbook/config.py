"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

DEFAULT_HOLIDAY_FEED_URL = "https://cdn.jsdelivr.net/gh/ruyut/TaiwanCalendar/data/{year}.json"
_WEEK_STARTS = {"monday", "sunday"}


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_week_start(name: str, default: str) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in _WEEK_STARTS:
        raise ValueError(f"{name} must be one of {sorted(_WEEK_STARTS)}, got {value!r}")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HearthBook"
    DB_FILENAME = "hearthbook.db"
    NAME_CACHE_FILENAME = "display_names.json"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("HEARTHBOOK_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("HEARTHBOOK_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("HEARTHBOOK_TIMEZONE", "Asia/Taipei")
        self.LOCALE = os.getenv("HEARTHBOOK_LOCALE", "zh-TW")
        self.HOLIDAY_FEED_URL = os.getenv("HEARTHBOOK_HOLIDAY_FEED_URL", DEFAULT_HOLIDAY_FEED_URL)
        self.HOLIDAY_FEED_TIMEOUT = float(os.getenv("HEARTHBOOK_HOLIDAY_FEED_TIMEOUT", "10"))
        self.EVENT_GRID_WEEK_START = _env_week_start("HEARTHBOOK_EVENT_GRID_WEEK_START", "sunday")
        self.LEDGER_GRID_WEEK_START = _env_week_start("HEARTHBOOK_LEDGER_GRID_WEEK_START", "monday")
        self._ensure_timezone()

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file, logs and name cache live."""

        data_root = os.getenv("HEARTHBOOK_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            local_app_data = os.getenv("LOCALAPPDATA") or (Path.home() / ".local" / "share")
            fallback_path = Path(local_app_data).expanduser() / self.APP_NAME
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    def _ensure_timezone(self) -> None:
        try:
            ZoneInfo(self.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"HEARTHBOOK_TIMEZONE is not a known zone: {self.TIMEZONE!r}") from exc

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    @property
    def name_cache_path(self) -> Path:
        return Path(self.DATA_DIR) / self.NAME_CACHE_FILENAME

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        connect_args: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        return {"connect_args": connect_args}
