"""Application context wiring tests."""

from __future__ import annotations

from hearthbook.context import AppContext, create_app_context


def test_create_app_context_wires_services(app_context):
    assert isinstance(app_context, AppContext)
    assert app_context.budget.current() == 0
    assert app_context.ledger.public_events().items == []


def test_context_persists_across_instances(app_config, holiday_feed):
    first = create_app_context(app_config, holiday_feed=holiday_feed)
    first.names.set("u-1", "Mom")
    first.budget.set(3000)

    second = create_app_context(app_config, holiday_feed=holiday_feed)

    assert second.names.resolve("u-1") == "Mom"
    assert second.budget.current() == 3000


def test_new_controller_uses_configured_locale(app_context):
    app_context.config.LOCALE = "en"
    controller = app_context.new_controller(today="2025-06-01")

    assert controller.header == "2025-06-01 (Sun)"


def test_load_default_holidays_fetches_current_and_next_year(app_context, holiday_feed, monkeypatch):
    monkeypatch.setattr(app_context, "today", lambda: "2025-08-01")

    assert app_context.load_default_holidays() == {2025: True, 2026: True}
    assert holiday_feed.calls == [2025, 2026]
    assert app_context.holidays.lookup("2026-01-01").is_holiday
