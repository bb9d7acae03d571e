"""Command line interface for HearthBook."""

from __future__ import annotations

import asyncio
from typing import Optional

import click
from sqlalchemy.exc import SQLAlchemyError

from .constants.categories import CATEGORIES, UNCATEGORIZED
from .context import AppContext, create_app_context
from .errors import DataAccessFailure, HearthBookError
from .logging_config import setup_logging
from .services import aggregation, dates
from .services.budgeting import BudgetStatus
from .services.calendar_grid import GridCell, build_grid, grid_rows
from .services.ledger_service import WriteOutcome, event_rows

pass_app = click.make_pass_decorator(AppContext)


def _report(outcome: WriteOutcome) -> None:
    if not outcome.ok:
        raise click.ClickException(outcome.message)
    click.echo(outcome.message)


def _warn_if_degraded(result) -> None:
    if result.error is not None:
        click.echo(f"warning: {result.error}", err=True)


def _cell_text(cell: GridCell, *, show_totals: bool) -> str:
    if cell.is_blank:
        return " " * 9
    mark = "*" if cell.is_today else " "
    holiday = "H" if cell.is_holiday else " "
    if show_totals:
        value = aggregation.format_amount(cell.day_total) if cell.day_total else ""
    else:
        value = "•" * min(cell.entry_count, 3)
    return f"{cell.day:>2}{mark}{holiday}{value:>5}"


class HearthBookGroup(click.Group):
    """Reports bad dates and ranges as command errors instead of tracebacks."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except HearthBookError as exc:
            raise click.ClickException(str(exc)) from exc


@click.group(cls=HearthBookGroup)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Household ledger, shared calendar and budget."""

    if ctx.obj is None:
        app = create_app_context()
        setup_logging(app.config)
        ctx.obj = app


@cli.command("ledger")
@click.option("--date", "anchor", default=None, help="Anchor date (YYYY-MM-DD), default today")
@click.option("--granularity", type=click.Choice(dates.GRANULARITIES), default="day", show_default=True)
@click.option("--sort", "sort_key", type=click.Choice(aggregation.SORT_KEYS), default="time-desc", show_default=True)
@pass_app
def ledger(app: AppContext, anchor: Optional[str], granularity: str, sort_key: str) -> None:
    """List entries for a day, week or month."""

    controller = app.new_controller(sort_key=sort_key)
    if anchor:
        controller.jump_to(anchor)
    controller.change_granularity(granularity)

    asyncio.run(controller.refresh(lambda request: app.ledger.entries_for_dates(request.dates)))
    if controller.last_error is not None:
        click.echo(f"warning: {controller.last_error}", err=True)

    summary = controller.summary
    click.echo(f"{controller.header}  $ {aggregation.format_amount(summary.total)}")
    if not controller.list_entries:
        click.echo("No entries")
        return
    for entry in controller.list_entries:
        amount = aggregation.entry_amount(entry)
        day = aggregation.entry_date(entry)
        click.echo(
            f"[{entry.id}] {day}（{dates.weekday_label(day, app.config.LOCALE)}） "
            f"{entry.category or UNCATEGORIZED:<6} "
            f"{aggregation.format_amount(amount) if amount else '-':>10}  "
            f"{entry.note}  @{app.names.resolve(entry.user_id)}"
        )


@cli.command("grid")
@click.option("--month", default=None, help="Month (YYYY-MM), default current month")
@click.option("--events", is_flag=True, default=False, help="Show calendar events instead of ledger totals")
@click.option("--holidays/--no-holidays", default=True, show_default=True)
@pass_app
def grid(app: AppContext, month: Optional[str], events: bool, holidays: bool) -> None:
    """Render a month grid."""

    today = app.today()
    key = month or dates.month_key(today)
    year, month_number = dates.parse_month(key)
    if holidays:
        app.holidays.load(year)

    if events:
        result = app.ledger.public_events()
        week_start = app.config.EVENT_GRID_WEEK_START
    else:
        start, end = dates.month_bounds(key)
        result = app.ledger.entries_between(start, end)
        week_start = app.config.LEDGER_GRID_WEEK_START
    _warn_if_degraded(result)

    cells = build_grid(year, month_number, result.items, app.holidays, today, week_start=week_start)
    click.echo(key)
    click.echo(" ".join(f"{label:^9}" for label in dates.weekday_headers(week_start, app.config.LOCALE)))
    for row in grid_rows(cells):
        click.echo(" ".join(_cell_text(cell, show_totals=not events) for cell in row))

    if not events:
        status = app.budget.status(result.items)
        _echo_budget(status, month_total=sum(map(aggregation.entry_amount, result.items)))


def _echo_budget(status: BudgetStatus, *, month_total: float) -> None:
    flag = " (over budget)" if status.over_budget else ""
    click.echo(
        f"Total {aggregation.format_amount(month_total)} | "
        f"Budget {aggregation.format_amount(status.budget)} | "
        f"Remaining {aggregation.format_amount(status.remaining)}{flag}"
    )


@cli.command("stats")
@click.option("--month", default=None, help="Month (YYYY-MM), default current month")
@pass_app
def stats(app: AppContext, month: Optional[str]) -> None:
    """Per-category totals and shares for a month."""

    key = month or dates.month_key(app.today())
    start, end = dates.month_bounds(key)
    result = app.ledger.entries_between(start, end)
    _warn_if_degraded(result)
    summary = aggregation.summarize(result.items)
    click.echo(f"{key}  $ {aggregation.format_amount(summary.total)}")
    for stat in summary.categories:
        click.echo(f"{stat.category:<6} {aggregation.format_amount(stat.total):>10} {stat.percentage:6.1f}%")


@cli.command("trend")
@click.argument("category")
@click.option("--start", default=None, help="First month (YYYY-MM)")
@click.option("--end", default=None, help="Last month (YYYY-MM)")
@pass_app
def trend(app: AppContext, category: str, start: Optional[str], end: Optional[str]) -> None:
    """Monthly totals of one category over at most twelve months."""

    default_start, default_end = dates.default_trend_window(app.today())
    start = start or default_start
    end = end or default_end
    start, end = dates.clamp_month_window(start, end, edited="end" if end != default_end else "start")
    first, last = aggregation.trend_bounds(start, end)
    result = app.ledger.entries_for_category(category, first, last)
    _warn_if_degraded(result)
    for point in aggregation.trend_series(result.items, category, start, end):
        click.echo(f"{point.month} {aggregation.format_amount(point.total):>10}")


@cli.group("budget")
def budget() -> None:
    """Show or change the shared budget."""


@budget.command("show")
@click.option("--month", default=None, help="Month (YYYY-MM), default current month")
@pass_app
def budget_show(app: AppContext, month: Optional[str]) -> None:
    key = month or dates.month_key(app.today())
    start, end = dates.month_bounds(key)
    result = app.ledger.entries_between(start, end)
    _warn_if_degraded(result)
    _echo_budget(app.budget.status(result.items), month_total=sum(map(aggregation.entry_amount, result.items)))


@budget.command("set")
@click.argument("amount", type=float)
@pass_app
def budget_set(app: AppContext, amount: float) -> None:
    try:
        saved = app.budget.set(amount)
    except SQLAlchemyError as exc:
        raise click.ClickException(str(DataAccessFailure("set budget", exc))) from exc
    click.echo(f"Budget saved: {aggregation.format_amount(saved)}")


@cli.group("names")
def names() -> None:
    """Manage author display names."""


@names.command("set")
@click.argument("user_id")
@click.argument("display_name")
@pass_app
def names_set(app: AppContext, user_id: str, display_name: str) -> None:
    try:
        app.names.set(user_id, display_name)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    except SQLAlchemyError as exc:
        raise click.ClickException(str(DataAccessFailure("set display name", exc))) from exc
    click.echo(f"{user_id} -> {display_name}")


@cli.command("holidays")
@click.argument("year", type=int)
@pass_app
def holidays(app: AppContext, year: int) -> None:
    """Fetch and list a year's public holidays."""

    if not app.holidays.load(year):
        click.echo(f"Holiday feed for {year} unavailable", err=True)
        return
    for day, holiday in sorted(app.holidays.as_dict().items()):
        if day.startswith(str(year)):
            click.echo(f"{day} {holiday.name}")


@cli.group("entry")
def entry() -> None:
    """Add or remove ledger entries."""


@entry.command("add")
@click.option("--user", "user_id", required=True)
@click.option("--amount", required=True)
@click.option("--date", "occurred_on", default=None, help="YYYY-MM-DD, default today")
@click.option("--category", type=click.Choice(CATEGORIES), default=None)
@click.option("--note", default="")
@pass_app
def entry_add(app: AppContext, user_id: str, amount: str, occurred_on: Optional[str], category: Optional[str], note: str) -> None:
    _report(
        app.ledger.add_entry(
            user_id=user_id,
            amount=amount,
            occurred_on=occurred_on or app.today(),
            category=category,
            note=note,
        )
    )


@entry.command("delete")
@click.argument("entry_id", type=int)
@pass_app
def entry_delete(app: AppContext, entry_id: int) -> None:
    _report(app.ledger.delete_entry(entry_id))


@cli.group("event")
def event() -> None:
    """Add, remove or list calendar events."""


@event.command("add")
@click.option("--user", "user_id", required=True)
@click.option("--date", "occurred_on", required=True)
@click.option("--title", required=True)
@click.option("--time", "starts_at", default=None, help="HH:MM")
@click.option("--private", is_flag=True, default=False)
@pass_app
def event_add(app: AppContext, user_id: str, occurred_on: str, title: str, starts_at: Optional[str], private: bool) -> None:
    _report(
        app.ledger.add_event(
            user_id=user_id, occurred_on=occurred_on, title=title, starts_at=starts_at, is_private=private
        )
    )


@event.command("delete")
@click.argument("event_id", type=int)
@pass_app
def event_delete(app: AppContext, event_id: int) -> None:
    _report(app.ledger.delete_event(event_id))


@event.command("list")
@pass_app
def event_list(app: AppContext) -> None:
    today = app.today()
    result = app.ledger.public_events()
    _warn_if_degraded(result)
    rows = event_rows(result.items, today=today, names=app.names.names)
    todays = sum(1 for row in rows if row.is_today)
    click.echo(f"Today is {today}: {todays} event(s)")
    for row in rows:
        marker = ">" if row.is_today else ("-" if row.is_past else " ")
        click.echo(f"{marker} [{row.event.id}] {row.date} {row.display_time:>5} {row.event.title or '(untitled)'}  @{row.author}")


def main() -> None:
    cli(obj=None)


if __name__ == "__main__":  # pragma: no cover
    main()
