"""Command line interface tests."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from hearthbook.cli import cli


@pytest.fixture
def run(app_context):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, list(args), obj=app_context)

    return _run


def test_add_entry_then_list_day(run):
    added = run("entry", "add", "--user", "u-1", "--amount", "-120", "--date", "2025-06-01", "--category", "交通")
    assert added.exit_code == 0, added.output
    assert "Add entry: done" in added.output

    listed = run("ledger", "--date", "2025-06-01")

    assert listed.exit_code == 0, listed.output
    assert "2025-06-01（週日）  $ -120" in listed.output
    assert "交通" in listed.output


def test_ledger_week_window(run):
    run("entry", "add", "--user", "u-1", "--amount", "-10", "--date", "2025-06-02")
    run("entry", "add", "--user", "u-1", "--amount", "-20", "--date", "2025-06-08")
    run("entry", "add", "--user", "u-1", "--amount", "-40", "--date", "2025-06-09")

    result = run("ledger", "--date", "2025-06-04", "--granularity", "week")

    assert "2025-06-02 ~ 2025-06-08  $ -30" in result.output


def test_empty_ledger(run):
    result = run("ledger", "--date", "2025-06-01")
    assert "No entries" in result.output


def test_invalid_amount_is_rejected(run):
    result = run("entry", "add", "--user", "u-1", "--amount", "lots", "--date", "2025-06-01")

    assert result.exit_code != 0
    assert "amount must be a number" in result.output


def test_delete_missing_entry_reports_denied(run):
    result = run("entry", "delete", "999")

    assert result.exit_code != 0
    assert "Nothing was changed" in result.output


def test_budget_over_spend(run):
    run("entry", "add", "--user", "u-1", "--amount", "-12500", "--date", "2025-06-05", "--category", "住房")
    assert run("budget", "set", "10000").exit_code == 0

    result = run("budget", "show", "--month", "2025-06")

    assert "Budget 10,000" in result.output
    assert "Remaining -2,500 (over budget)" in result.output


def test_grid_renders_month(run):
    run("entry", "add", "--user", "u-1", "--amount", "-30", "--date", "2025-06-09")

    result = run("grid", "--month", "2025-06")

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "2025-06"
    assert lines[1].split()[0] == "週一"
    assert " 9 H  -30" in result.output


def test_event_grid_starts_on_sunday(run):
    result = run("grid", "--month", "2025-06", "--events", "--no-holidays")

    assert result.output.splitlines()[1].split()[0] == "週日"


def test_holidays_command(run):
    result = run("holidays", "2025")

    assert "2025-06-09 端午節" in result.output
    assert "2025-01-02" not in result.output


def test_holidays_feed_unavailable(run):
    result = run("holidays", "2031")

    assert result.exit_code == 0
    assert "2031" in result.output


def test_stats_and_trend(run):
    run("entry", "add", "--user", "u-1", "--amount", "-100", "--date", "2025-01-03", "--category", "交通")
    run("entry", "add", "--user", "u-1", "--amount", "-50", "--date", "2025-01-04", "--category", "餐飲食品")
    run("entry", "add", "--user", "u-1", "--amount", "-25", "--date", "2025-03-04", "--category", "交通")

    stats = run("stats", "--month", "2025-01")
    assert stats.output.splitlines()[1].startswith("交通")

    trend = run("trend", "交通", "--start", "2025-01", "--end", "2025-03")
    assert trend.output.splitlines() == ["2025-01       -100", "2025-02          0", "2025-03        -25"]


def test_events_and_names(run):
    assert run("names", "set", "u-1", "Mom").exit_code == 0
    run("event", "add", "--user", "u-1", "--date", "2025-06-10", "--title", "Dinner", "--time", "19:00")
    run("event", "add", "--user", "u-1", "--date", "2025-06-11", "--title", "Secret", "--private")

    result = run("event", "list")

    assert "Dinner  @Mom" in result.output
    assert "19:00" in result.output
    assert "Secret" not in result.output


def test_names_set_rejects_blank(run):
    result = run("names", "set", "u-1", " ")
    assert result.exit_code != 0


def test_trend_for_uncategorized_entries(run):
    run("entry", "add", "--user", "u-1", "--amount", "-40", "--date", "2025-02-10")

    result = run("trend", "未分類", "--start", "2025-01", "--end", "2025-02")

    assert result.output.splitlines() == ["2025-01          0", "2025-02        -40"]


@pytest.mark.parametrize(
    "args, fragment",
    [
        (("ledger", "--date", "2025-13-01"), "Invalid date '2025-13-01'"),
        (("grid", "--month", "2025-13"), "Invalid date '2025-13'"),
        (("stats", "--month", "June"), "Invalid date 'June'"),
        (("trend", "交通", "--start", "2025-09", "--end", "2025-01"), "Invalid range"),
    ],
    ids=["bad-date", "bad-grid-month", "bad-stats-month", "reversed-trend"],
)
def test_bad_dates_are_reported_without_traceback(run, args, fragment):
    result = run(*args)

    assert result.exit_code == 1
    assert fragment in result.output
    assert "Traceback" not in result.output
    assert isinstance(result.exception, SystemExit)
