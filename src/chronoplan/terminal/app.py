# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich import print

from chronoplan.clock import ClockProvider, FixedClockProvider, SystemClockProvider
from chronoplan.model.user import User
from chronoplan.repository.badge import BADGE_REPO, BadgeNotFoundError
from chronoplan.repository.configuration import CONFIGURATION_REPO
from chronoplan.repository.event import EVENT_REPO
from chronoplan.repository.label_time_bucket import LABEL_TIME_BUCKET_REPO
from chronoplan.repository.recurring_event import (
    RECURRING_EVENT_REPO,
    RecurringEventNotFoundError,
)
from chronoplan.service.badge_stats import compute_stats_for_badge
from chronoplan.service.calendar_view import generate_day_view, generate_week_view
from chronoplan.service.context import PlannerContext
from chronoplan.service.monthly_calendar import (
    get_dates_by_label,
    get_dates_with_events_by_month,
    get_monthly_bucket_stats,
)
from chronoplan.terminal import configuration
from chronoplan.terminal.custom_typer import OrderedAliasedTyperGroup
from chronoplan.terminal.parse import parse_instant, resolve_date, resolve_month
from chronoplan.view import state as view_state
from chronoplan.view.calendar import day_view, week_view
from chronoplan.view.month import month_view
from chronoplan.view.recurring import recurring_events_view
from chronoplan.view.stats import badge_stats_view

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="chronoplan - recurring events and label time tracking in the CLI",
    no_args_is_help=True,
)
app.add_typer(configuration.app, name="config, c")

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"
NOW_HELP = "pretend the current instant is this ISO-8601 instant"
MONTH_HELP = "valid inputs: YYYY-MM, or month offset like 1, -1"


def _current_user() -> User:
    config = CONFIGURATION_REPO.get_config()
    return {"id": config["user_id"], "timezone": config["timezone"]}


def _planner_context(now: Optional[pendulum.DateTime]) -> PlannerContext:
    clock_provider: ClockProvider = (
        FixedClockProvider(now) if now is not None else SystemClockProvider()
    )
    return PlannerContext(
        user=_current_user(),
        clock_provider=clock_provider,
        events=EVENT_REPO,
        recurring_events=RECURRING_EVENT_REPO,
        buckets=LABEL_TIME_BUCKET_REPO,
    )


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    chronoplan - recurring events and label time tracking in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


@app.command("day, d")
def day(
    date: Annotated[Optional[str], typer.Argument(help=DATE_HELP)] = None,
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--now", parser=parse_instant, help=NOW_HELP),
    ] = None,
) -> None:
    """Show the events of one day, solidifying occurrences that are over."""
    ctx = _planner_context(now)
    today = ctx.now().in_tz(ctx.zone).date()
    day_view(ctx.user["id"], generate_day_view(ctx, resolve_date(date, today)), ctx.zone)


@app.command("week, w")
def week(
    date: Annotated[Optional[str], typer.Argument(help=DATE_HELP)] = None,
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--now", parser=parse_instant, help=NOW_HELP),
    ] = None,
) -> None:
    """Show the Monday-start week containing DATE."""
    ctx = _planner_context(now)
    today = ctx.now().in_tz(ctx.zone).date()
    week_view(
        ctx.user["id"], generate_week_view(ctx, resolve_date(date, today)), ctx.zone
    )


@app.command("month, m")
def month(
    month: Annotated[Optional[str], typer.Argument(help=MONTH_HELP)] = None,
    label: Annotated[
        Optional[str],
        typer.Option("--label", "-l", help="only days and totals of this label"),
    ] = None,
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--now", parser=parse_instant, help=NOW_HELP),
    ] = None,
) -> None:
    """Show the days of a month that have events."""
    ctx = _planner_context(now)
    today = ctx.now().in_tz(ctx.zone).date()
    year, month_number = resolve_month(month, today)

    if label is None:
        dates = get_dates_with_events_by_month(ctx, year, month_number)
        month_view(ctx.user["id"], year, month_number, dates)
        return

    month_view(
        ctx.user["id"],
        year,
        month_number,
        get_dates_by_label(ctx, label, year, month_number),
        get_monthly_bucket_stats(ctx, label, year, month_number),
    )


@app.command("stats, s")
def stats(
    badge_id: Annotated[str, typer.Argument(help="badge id")],
    now: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--now", parser=parse_instant, help=NOW_HELP),
    ] = None,
) -> None:
    """Show time spent on a badge's labels per period."""
    ctx = _planner_context(now)
    try:
        badge = BADGE_REPO.get_badge(badge_id)
    except BadgeNotFoundError as e:
        raise typer.BadParameter(str(e))
    if badge["owner_id"] != ctx.user["id"]:
        raise typer.BadParameter(f"Badge {badge_id} belongs to another user")

    badge_stats_view(
        ctx.user["id"], badge, compute_stats_for_badge(ctx, badge, ctx.user["id"])
    )


@app.command("recurring, r")
def recurring(
    recurring_event_id: Annotated[
        Optional[str], typer.Argument(help="show only this recurring event")
    ] = None,
) -> None:
    """List your recurring events."""
    user = _current_user()
    if recurring_event_id is None:
        recurring_events_view(
            RECURRING_EVENT_REPO.get_recurring_events_for_owner(user["id"])
        )
        return

    try:
        recurring_event = RECURRING_EVENT_REPO.get_recurring_event(recurring_event_id)
    except RecurringEventNotFoundError as e:
        print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    if recurring_event["owner_id"] != user["id"]:
        print(
            f"[red]Recurring event {recurring_event_id} belongs to another user[/red]"
        )
        raise typer.Exit(1)
    recurring_events_view([recurring_event])


def run() -> None:
    app()
