"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers

import pytest

from hearthbook.logging_config import ROOT_LOGGER_NAME, JSONFormatter, get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_hearthbook_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _record(msg="Test message", level=logging.INFO, exc_info=None):
    record = logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """JSONFormatter emits the core fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        import sys

        exc_info = sys.exc_info()

    log_data = json.loads(JSONFormatter().format(_record("Error occurred", logging.ERROR, exc_info)))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"] is not None


def test_json_formatter_keeps_extras_and_unicode():
    record = _record("Holidays loaded")
    record.year = 2025
    record.name_hint = "端午節"

    formatted = JSONFormatter().format(record)
    log_data = json.loads(formatted)

    assert log_data["extra"] == {"year": 2025, "name_hint": "端午節"}
    assert "端午節" in formatted


def test_setup_logging(app_config):
    """Console + rotating JSON file, with one JSON object per line."""
    app_config.DEV_MODE = True

    logger = setup_logging(app_config)

    assert logger.name == "hearthbook"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    log_file = app_config.DATA_DIR / "logs" / "hearthbook.log"
    assert log_file.exists()

    logger.info("Test info message")
    logger.warning("Test warning message")
    for handler in logger.handlers:
        handler.flush()

    lines = [line for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert len(lines) >= 3
    for line in lines:
        log_entry = json.loads(line)
        assert {"timestamp", "level", "message"} <= log_entry.keys()


def test_setup_logging_twice_does_not_stack_handlers(app_config):
    setup_logging(app_config)
    logger = setup_logging(app_config)

    assert len(logger.handlers) == 2


def test_get_logger():
    assert get_logger("module1").name == "hearthbook.module1"
    assert get_logger("hearthbook.services.dates").name == "hearthbook.services.dates"
    assert get_logger("module1") is not get_logger("module2")


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(app_config, dev_mode):
    app_config.DEV_MODE = dev_mode

    logger = setup_logging(app_config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    assert console_handler.level == (logging.INFO if dev_mode else logging.WARNING)
    assert logger.level == (logging.DEBUG if dev_mode else logging.INFO)
