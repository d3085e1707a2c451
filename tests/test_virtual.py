# SPDX-License-Identifier: MIT

import pendulum
from conftest import LABEL, build_recurring_event, local

from chronoplan.service.virtual import project_virtual_occurrences


def test_future_occurrences_are_virtual_views():
    recurring_event = build_recurring_event()

    views = project_virtual_occurrences(
        recurring_event, local(2025, 1, 6), local(2025, 1, 8), local(2025, 1, 1)
    )

    assert len(views) == 2
    for view in views:
        assert view["id"] is None
        assert view["virtual"] is True
        assert view["recurring_event_id"] == recurring_event["id"]
        assert view["label_id"] == LABEL
        assert view["duration_minutes"] == 30


def test_past_occurrences_are_not_projected():
    recurring_event = build_recurring_event()

    views = project_virtual_occurrences(
        recurring_event, local(2025, 1, 6), local(2025, 1, 8), local(2025, 1, 7, 12, 0)
    )

    assert views == []


def test_occurrence_in_progress_or_ending_now_stays_virtual():
    recurring_event = build_recurring_event()
    window = (local(2025, 1, 6), local(2025, 1, 7))

    in_progress = project_virtual_occurrences(
        recurring_event, *window, local(2025, 1, 6, 9, 10)
    )
    ending_now = project_virtual_occurrences(
        recurring_event, *window, local(2025, 1, 6, 9, 30)
    )

    assert [view["start"] for view in in_progress] == [local(2025, 1, 6, 9, 0)]
    assert len(ending_now) == 1


def test_untimed_occurrence_is_virtual_until_its_start():
    recurring_event = build_recurring_event(slots=[{"start": None, "end": None}])
    window = (local(2025, 1, 6), local(2025, 1, 7))

    [view] = project_virtual_occurrences(recurring_event, *window, local(2025, 1, 5, 23, 0))

    assert view["end"] is None
    assert view["duration_minutes"] is None
    assert project_virtual_occurrences(recurring_event, *window, local(2025, 1, 6, 0, 1)) == []


def test_projection_does_not_change_its_input():
    recurring_event = build_recurring_event()
    before = dict(recurring_event)

    project_virtual_occurrences(
        recurring_event, local(2025, 1, 6), local(2025, 1, 13), pendulum.datetime(2025, 1, 1)
    )

    assert recurring_event == before
