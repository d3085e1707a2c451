# SPDX-License-Identifier: MIT

import pendulum
from conftest import build_recurring_event, local

from chronoplan.service.recurrence import build_summary, expand_occurrences, occurs_on


def test_daily_interval_counts_from_valid_from():
    rule = {"frequency": "daily", "interval": 2}
    valid_from = pendulum.date(2025, 1, 1)

    assert occurs_on(rule, pendulum.date(2025, 1, 1), valid_from)
    assert not occurs_on(rule, pendulum.date(2025, 1, 2), valid_from)
    assert occurs_on(rule, pendulum.date(2025, 1, 3), valid_from)


def test_weekly_rule_matches_days_and_week_interval():
    rule = {"frequency": "weekly", "days": ["monday", "friday"], "interval": 2}
    valid_from = pendulum.date(2025, 1, 6)

    assert occurs_on(rule, pendulum.date(2025, 1, 6), valid_from)
    assert occurs_on(rule, pendulum.date(2025, 1, 10), valid_from)
    assert not occurs_on(rule, pendulum.date(2025, 1, 8), valid_from)
    assert not occurs_on(rule, pendulum.date(2025, 1, 13), valid_from)
    assert occurs_on(rule, pendulum.date(2025, 1, 20), valid_from)


def test_weekly_interval_is_counted_in_calendar_weeks():
    rule = {"frequency": "weekly", "days": ["monday"], "interval": 2}
    # A Wednesday: the Monday five days later is already in the next ISO week
    valid_from = pendulum.date(2025, 1, 8)

    assert not occurs_on(rule, pendulum.date(2025, 1, 13), valid_from)
    assert occurs_on(rule, pendulum.date(2025, 1, 20), valid_from)


def test_monthly_ordinals():
    last_friday = {"frequency": "monthly", "ordinal": -1, "days": ["friday"], "interval": 1}
    first_monday = {"frequency": "monthly", "ordinal": 1, "days": ["monday"], "interval": 1}
    valid_from = pendulum.date(2025, 1, 1)

    assert occurs_on(last_friday, pendulum.date(2025, 1, 31), valid_from)
    assert not occurs_on(last_friday, pendulum.date(2025, 1, 24), valid_from)
    assert occurs_on(first_monday, pendulum.date(2025, 2, 3), valid_from)
    assert not occurs_on(first_monday, pendulum.date(2025, 2, 10), valid_from)


def test_monthly_interval():
    rule = {"frequency": "monthly", "ordinal": 1, "days": ["monday"], "interval": 2}
    valid_from = pendulum.date(2025, 1, 1)

    assert occurs_on(rule, pendulum.date(2025, 1, 6), valid_from)
    assert not occurs_on(rule, pendulum.date(2025, 2, 3), valid_from)
    assert occurs_on(rule, pendulum.date(2025, 3, 3), valid_from)


def test_expand_converts_local_slots_to_utc():
    recurring_event = build_recurring_event()

    occurrences = expand_occurrences(
        recurring_event, local(2025, 1, 6), local(2025, 1, 8)
    )

    assert [occurrence["start"] for occurrence in occurrences] == [
        pendulum.datetime(2025, 1, 6, 8, 0, tz="UTC"),
        pendulum.datetime(2025, 1, 7, 8, 0, tz="UTC"),
    ]
    assert occurrences[0]["end"] == pendulum.datetime(2025, 1, 6, 8, 30, tz="UTC")


def test_expand_honors_skip_days_and_inclusive_valid_to():
    skipping = build_recurring_event(skip_days=[pendulum.date(2025, 1, 7)])
    ending = build_recurring_event(valid_to=pendulum.date(2025, 1, 7))

    assert len(expand_occurrences(skipping, local(2025, 1, 6), local(2025, 1, 9))) == 2
    assert len(expand_occurrences(ending, local(2025, 1, 6), local(2025, 1, 9))) == 2


def test_expand_does_not_start_before_valid_from():
    recurring_event = build_recurring_event(valid_from=pendulum.date(2025, 1, 8))

    occurrences = expand_occurrences(
        recurring_event, local(2025, 1, 6), local(2025, 1, 10)
    )

    assert len(occurrences) == 2
    assert occurrences[0]["start"] == local(2025, 1, 8, 9, 0)


def test_overnight_slot_ends_next_day():
    recurring_event = build_recurring_event(
        slots=[{"start": pendulum.time(22, 0), "end": pendulum.time(6, 0)}]
    )

    [occurrence] = expand_occurrences(
        recurring_event, local(2025, 1, 6), local(2025, 1, 7)
    )

    assert occurrence["end"] == local(2025, 1, 7, 6, 0)
    assert (occurrence["end"] - occurrence["start"]).total_seconds() == 8 * 3600


def test_zero_length_and_untimed_occurrences_are_kept():
    zero_length = build_recurring_event(
        slots=[{"start": pendulum.time(10, 0), "end": pendulum.time(10, 0)}]
    )
    untimed = build_recurring_event(slots=[{"start": None, "end": None}])

    [zero] = expand_occurrences(zero_length, local(2025, 1, 6), local(2025, 1, 7))
    [all_day] = expand_occurrences(untimed, local(2025, 1, 6), local(2025, 1, 7))

    assert zero["start"] == zero["end"]
    assert all_day["start"] == local(2025, 1, 6)
    assert all_day["end"] is None


def test_slots_are_sorted_and_duplicates_collapsed():
    recurring_event = build_recurring_event(
        slots=[
            {"start": pendulum.time(18, 0), "end": pendulum.time(19, 0)},
            {"start": pendulum.time(7, 0), "end": pendulum.time(8, 0)},
            {"start": pendulum.time(7, 0), "end": pendulum.time(8, 0)},
        ]
    )

    occurrences = expand_occurrences(
        recurring_event, local(2025, 1, 6), local(2025, 1, 7)
    )

    assert [occurrence["start"] for occurrence in occurrences] == [
        local(2025, 1, 6, 7, 0),
        local(2025, 1, 6, 18, 0),
    ]


def test_window_end_is_exclusive():
    recurring_event = build_recurring_event()

    assert expand_occurrences(recurring_event, local(2025, 1, 6), local(2025, 1, 6, 9, 0)) == []
    assert expand_occurrences(recurring_event, local(2025, 1, 7), local(2025, 1, 6)) == []


def test_build_summary():
    weekly = {"frequency": "weekly", "days": ["friday", "monday"], "interval": 1}
    monthly = {"frequency": "monthly", "ordinal": -1, "days": ["friday"], "interval": 2}

    assert (
        build_summary(weekly, pendulum.date(2025, 1, 6), None)
        == "Every Monday and Friday from January 6, 2025 forever"
    )
    assert (
        build_summary(monthly, pendulum.date(2025, 1, 1), pendulum.date(2025, 12, 31))
        == "Every last Friday of the month, every 2 months from January 1, 2025 until December 31, 2025"
    )
    assert build_summary(
        {"frequency": "daily", "interval": 3}, pendulum.date(2025, 1, 1), None
    ).startswith("Every 3 days")
