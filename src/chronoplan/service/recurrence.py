# SPDX-License-Identifier: MIT

import logging
from typing import Optional, assert_never

import pendulum

from chronoplan.model.occurrence import Occurrence
from chronoplan.model.recurrence import RecurrenceRule, Weekday
from chronoplan.model.recurring_event import RecurringEvent, TimeSlot
from chronoplan.time import WEEKDAYS, at_local_time, local_date

logger = logging.getLogger(__name__)

ORDINAL_NAMES = {1: "first", 2: "second", 3: "third", 4: "fourth", -1: "last"}


def weekday_of(date: pendulum.Date) -> Weekday:
    return WEEKDAYS[date.isoweekday() - 1]  # type: ignore[return-value]


def reference_instant(occurrence: Occurrence) -> pendulum.DateTime:
    """The instant that decides whether an occurrence is over: its end, or its start when untimed."""
    if occurrence["end"] is not None:
        return occurrence["end"]
    return occurrence["start"]


def occurs_on(
    rule: RecurrenceRule, date: pendulum.Date, valid_from: pendulum.Date
) -> bool:
    """
    Check whether ``rule`` produces an occurrence on ``date``.

    Intervals are counted from ``valid_from``: days for daily rules, ISO weeks
    (Monday-start) for weekly rules and calendar months for monthly rules.
    Validity bounds themselves are not checked here.
    """
    if rule["frequency"] == "daily":
        return (date.toordinal() - valid_from.toordinal()) % rule["interval"] == 0
    elif rule["frequency"] == "weekly":
        if weekday_of(date) not in rule["days"]:
            return False
        monday = date.toordinal() - (date.isoweekday() - 1)
        anchor_monday = valid_from.toordinal() - (valid_from.isoweekday() - 1)
        return ((monday - anchor_monday) // 7) % rule["interval"] == 0
    elif rule["frequency"] == "monthly":
        if weekday_of(date) not in rule["days"]:
            return False
        months = (date.year - valid_from.year) * 12 + (date.month - valid_from.month)
        if months % rule["interval"] != 0:
            return False
        return _is_nth_weekday_of_month(date, rule["ordinal"])
    else:
        assert_never(rule)


def _is_nth_weekday_of_month(date: pendulum.Date, ordinal: int) -> bool:
    if ordinal == -1:
        return date.day + 7 > date.days_in_month
    return (date.day - 1) // 7 + 1 == ordinal


def _occurrence_for_slot(
    date: pendulum.Date, slot: TimeSlot, zone: str
) -> Occurrence:
    start_time = slot["start"]
    end_time = slot["end"]

    start = at_local_time(date, start_time, zone).in_tz("UTC")
    end: Optional[pendulum.DateTime] = None
    if start_time is not None and end_time is not None:
        end_date = date.add(days=1) if end_time < start_time else date
        end = at_local_time(end_date, end_time, zone).in_tz("UTC")

    return {"start": start, "end": end}


def _occurrence_sort_key(
    occurrence: Occurrence,
) -> tuple[pendulum.DateTime, bool, pendulum.DateTime]:
    end = occurrence["end"]
    return (occurrence["start"], end is not None, end if end is not None else occurrence["start"])


def expand_occurrences(
    recurring_event: RecurringEvent,
    window_start: pendulum.DateTime,
    window_end: pendulum.DateTime,
) -> list[Occurrence]:
    """
    Expand a recurring event into candidate occurrences starting in ``[window_start, window_end)``.

    Days are walked in the recurring event's own timezone and clipped to its
    validity window (``valid_to`` inclusive); skip days yield nothing. Every
    time slot of a matching day gives one candidate. The result is sorted by
    start instant, untimed occurrences first on ties, and occurrences sharing
    a start instant are collapsed into the first one.

    Args:
        recurring_event: The recurring event to expand
        window_start: Inclusive start of the window of interest
        window_end: Exclusive end of the window of interest

    Returns:
        Candidate occurrences with UTC start and end instants
    """
    if window_start >= window_end:
        return []

    zone = recurring_event["timezone"]
    valid_from = recurring_event["valid_from"]
    valid_to = recurring_event["valid_to"]

    first_day = max(local_date(window_start, zone), valid_from)
    last_day = local_date(window_end, zone)
    if valid_to is not None:
        last_day = min(last_day, valid_to)

    skip_days = set(recurring_event["skip_days"])
    candidates: list[Occurrence] = []

    day = first_day
    while day <= last_day:
        if day in skip_days:
            logger.debug("Skipping %s for recurring event %s", day, recurring_event["id"])
        elif occurs_on(recurring_event["rule"], day, valid_from):
            for slot in recurring_event["slots"]:
                occurrence = _occurrence_for_slot(day, slot, zone)
                if window_start <= occurrence["start"] < window_end:
                    candidates.append(occurrence)
        day = day.add(days=1)

    candidates.sort(key=_occurrence_sort_key)

    occurrences: list[Occurrence] = []
    for candidate in candidates:
        if occurrences and occurrences[-1]["start"] == candidate["start"]:
            continue
        occurrences.append(candidate)

    logger.debug(
        "Expanded recurring event %s into %d occurrences between %s and %s",
        recurring_event["id"],
        len(occurrences),
        window_start,
        window_end,
    )
    return occurrences


def build_summary(
    rule: RecurrenceRule,
    valid_from: pendulum.Date,
    valid_to: Optional[pendulum.Date],
) -> str:
    """Human-readable description, e.g. "Every Monday and Friday from January 6, 2025 forever"."""
    until = (
        f"until {valid_to.format('MMMM D, YYYY')}" if valid_to is not None else "forever"
    )
    since = f"from {valid_from.format('MMMM D, YYYY')}"

    if rule["frequency"] == "daily":
        every = "Every day" if rule["interval"] == 1 else f"Every {rule['interval']} days"
    elif rule["frequency"] == "weekly":
        days = _format_days(rule["days"])
        every = (
            f"Every {days}"
            if rule["interval"] == 1
            else f"Every {rule['interval']} weeks on {days}"
        )
    elif rule["frequency"] == "monthly":
        ordinal = ORDINAL_NAMES.get(rule["ordinal"], "unknown")
        every = f"Every {ordinal} {_format_days(rule['days'])} of the month"
        if rule["interval"] != 1:
            every += f", every {rule['interval']} months"
    else:
        assert_never(rule)

    return f"{every} {since} {until}"


def _format_days(days: list[Weekday]) -> str:
    ordered = [day for day in WEEKDAYS if day in days]
    return " and ".join(day.capitalize() for day in ordered)
