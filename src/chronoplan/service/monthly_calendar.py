# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from chronoplan.model.entity_id import EntityId
from chronoplan.model.event import Event
from chronoplan.model.label_time_bucket import LabelMonthStats
from chronoplan.service.context import PlannerContext
from chronoplan.service.recurrence import occurs_on
from chronoplan.time import local_date, start_of_local_day

logger = logging.getLogger(__name__)


def month_window(
    year: int, month: int, zone: str
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """UTC bounds ``[start, end)`` of a calendar month in ``zone``."""
    first_day = pendulum.date(year, month, 1)
    return (
        start_of_local_day(first_day, zone),
        start_of_local_day(first_day.add(months=1), zone),
    )


def _completed_label_events(
    ctx: PlannerContext, label_id: EntityId, year: int, month: int
) -> list[Event]:
    window_start, window_end = month_window(year, month, ctx.zone)
    now = ctx.now()
    return [
        event
        for event in ctx.events.get_confirmed_events_in_range(
            ctx.user["id"], window_start, window_end
        )
        if event["label_id"] == label_id
        and (event["end"] if event["end"] is not None else event["start"]) < now
    ]


def get_monthly_bucket_stats(
    ctx: PlannerContext, label_id: EntityId, year: int, month: int
) -> LabelMonthStats:
    """
    Time spent on a label in one month, with the number of completed events.

    Minutes come from the label's MONTH bucket (0 when there is none). Events
    are counted when they start in the month, in the user's timezone, and are
    over at the user's "now".
    """
    bucket = ctx.buckets.find_bucket(ctx.user["id"], label_id, "MONTH", year, month)
    stats: LabelMonthStats = {
        "label_id": label_id,
        "year": year,
        "month": month,
        "total_events": len(_completed_label_events(ctx, label_id, year, month)),
        "total_minutes": bucket["duration_minutes"] if bucket is not None else 0,
    }
    logger.info(
        "Label %s in %d-%02d: %d events, %d minutes",
        label_id,
        year,
        month,
        stats["total_events"],
        stats["total_minutes"],
    )
    return stats


def _month_days(year: int, month: int) -> tuple[pendulum.Date, pendulum.Date]:
    first_day = pendulum.date(year, month, 1)
    return first_day, first_day.add(months=1).subtract(days=1)


def get_dates_by_label(
    ctx: PlannerContext, label_id: EntityId, year: int, month: int
) -> list[pendulum.Date]:
    """Dates in the month on which a completed event of ``label_id`` starts or ends."""
    first_day, last_day = _month_days(year, month)
    dates: set[pendulum.Date] = set()
    for event in _completed_label_events(ctx, label_id, year, month):
        dates.add(local_date(event["start"], ctx.zone))
        if event["end"] is not None:
            dates.add(local_date(event["end"], ctx.zone))
    return sorted(date for date in dates if first_day <= date <= last_day)


def get_dates_with_events_by_month(
    ctx: PlannerContext, year: Optional[int] = None, month: Optional[int] = None
) -> list[pendulum.Date]:
    """
    Dates of a month that have at least one event, persisted or recurring.

    A missing year or month is taken from the user's current local date.
    Recurring events contribute every date of their validity window on which
    their rule occurs and that is not a skip day; nothing is solidified.
    """
    if year is None or month is None:
        today = local_date(ctx.now(), ctx.zone)
        year = today.year if year is None else year
        month = today.month if month is None else month

    owner_id = ctx.user["id"]
    first_day, last_day = _month_days(year, month)
    window_start, window_end = month_window(year, month, ctx.zone)

    dates: set[pendulum.Date] = set()
    for event in ctx.events.get_confirmed_events_in_range(
        owner_id, window_start, window_end
    ):
        dates.add(local_date(event["start"], ctx.zone))
        if event["end"] is not None:
            dates.add(local_date(event["end"], ctx.zone))

    for recurring_event in ctx.recurring_events.get_confirmed_recurring_events_in_range(
        owner_id, first_day, last_day
    ):
        if not recurring_event["slots"]:
            continue
        skip_days = set(recurring_event["skip_days"])
        day = max(first_day, recurring_event["valid_from"])
        stop = last_day
        if recurring_event["valid_to"] is not None:
            stop = min(stop, recurring_event["valid_to"])
        while day <= stop:
            if day not in skip_days and occurs_on(
                recurring_event["rule"], day, recurring_event["valid_from"]
            ):
                dates.add(day)
            day = day.add(days=1)

    month_dates = sorted(date for date in dates if first_day <= date <= last_day)
    logger.debug("%d dates with events in %d-%02d", len(month_dates), year, month)
    return month_dates
