# SPDX-License-Identifier: MIT

import logging
from typing import Literal, TypedDict, Union

import pendulum

from chronoplan.model.event import Event
from chronoplan.model.event_view import DayView, EventView, WeekView
from chronoplan.service.context import PlannerContext
from chronoplan.service.solidify import solidify_past_occurrences
from chronoplan.service.virtual import project_virtual_occurrences
from chronoplan.time import local_date, start_of_local_day

logger = logging.getLogger(__name__)


class FullyPast(TypedDict):
    kind: Literal["fully_past"]


class FullyFuture(TypedDict):
    kind: Literal["fully_future"]


class Straddling(TypedDict):
    kind: Literal["straddling"]
    now: pendulum.DateTime


WindowPhase = Union[FullyPast, FullyFuture, Straddling]


def classify_window(
    window_start: pendulum.DateTime,
    window_end: pendulum.DateTime,
    now: pendulum.DateTime,
) -> WindowPhase:
    if window_end <= now:
        return {"kind": "fully_past"}
    if window_start >= now:
        return {"kind": "fully_future"}
    return {"kind": "straddling", "now": now}


def event_to_view(event: Event) -> EventView:
    return {
        "id": event["id"],
        "name": event["name"],
        "label_id": event["label_id"],
        "start": event["start"],
        "end": event["end"],
        "duration_minutes": event["duration_minutes"],
        "recurring_event_id": event["recurring_event_id"],
        "virtual": False,
        "unconfirmed": event["unconfirmed"],
    }


def _view_sort_key(view: EventView) -> tuple[pendulum.DateTime, bool]:
    return (view["start"], view["end"] is not None)


def _compose_window(
    ctx: PlannerContext,
    window_start: pendulum.DateTime,
    window_end: pendulum.DateTime,
) -> list[EventView]:
    now = ctx.now()
    phase = classify_window(window_start, window_end, now)
    owner_id = ctx.user["id"]

    # Recurring events keep their own zone, so their local dates can be a day off ours
    recurring_events = ctx.recurring_events.get_confirmed_recurring_events_in_range(
        owner_id,
        local_date(window_start, ctx.zone).subtract(days=1),
        local_date(window_end, ctx.zone).add(days=1),
    )

    persisted: list[Event] = []
    virtual: list[EventView] = []

    match phase["kind"]:
        case "fully_past":
            for recurring_event in recurring_events:
                solidify_past_occurrences(
                    recurring_event, window_start, window_end, now, ctx.events, ctx.buckets
                )
            persisted = ctx.events.get_confirmed_events_in_range(
                owner_id, window_start, window_end
            )
            # An occurrence starting in the window can still end after now
            for recurring_event in recurring_events:
                virtual.extend(
                    project_virtual_occurrences(
                        recurring_event, window_start, window_end, now
                    )
                )
        case "fully_future":
            for recurring_event in recurring_events:
                virtual.extend(
                    project_virtual_occurrences(
                        recurring_event, window_start, window_end, now
                    )
                )
        case "straddling":
            for recurring_event in recurring_events:
                solidify_past_occurrences(
                    recurring_event, window_start, now, now, ctx.events, ctx.buckets
                )
            persisted = ctx.events.get_confirmed_events_in_range(
                owner_id, window_start, window_end
            )
            # Occurrences still running at now started before it and stay virtual
            for recurring_event in recurring_events:
                virtual.extend(
                    project_virtual_occurrences(
                        recurring_event, window_start, window_end, now
                    )
                )

    views = [event_to_view(event) for event in persisted] + virtual
    views.sort(key=_view_sort_key)

    logger.debug(
        "Composed %d events (%d virtual) for %s window %s - %s",
        len(views),
        len(virtual),
        phase["kind"],
        window_start,
        window_end,
    )
    return views


def _partition_by_day(
    views: list[EventView], days: list[pendulum.Date], zone: str
) -> list[DayView]:
    by_day: dict[pendulum.Date, list[EventView]] = {day: [] for day in days}
    for view in views:
        day = local_date(view["start"], zone)
        if day in by_day:
            by_day[day].append(view)
    return [{"date": day, "events": by_day[day]} for day in days]


def generate_day_view(ctx: PlannerContext, date: pendulum.Date) -> DayView:
    """
    Events of one local calendar day in the user's timezone.

    Past occurrences of recurring events are solidified into persisted events
    on the way; occurrences that are not over yet come back as virtual views.
    """
    window_start = start_of_local_day(date, ctx.zone)
    window_end = start_of_local_day(date.add(days=1), ctx.zone)
    views = _compose_window(ctx, window_start, window_end)
    return _partition_by_day(views, [date], ctx.zone)[0]


def generate_week_view(ctx: PlannerContext, anchor_date: pendulum.Date) -> WeekView:
    """Events of the Monday-start week containing ``anchor_date``, per day and combined."""
    monday = anchor_date.start_of("week")
    days = [monday.add(days=offset) for offset in range(7)]
    window_start = start_of_local_day(monday, ctx.zone)
    window_end = start_of_local_day(monday.add(days=7), ctx.zone)
    views = _compose_window(ctx, window_start, window_end)
    return {"days": _partition_by_day(views, days, ctx.zone), "events": views}
