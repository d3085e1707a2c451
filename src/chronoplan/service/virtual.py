# SPDX-License-Identifier: MIT

import pendulum

from chronoplan.model.event_view import EventView
from chronoplan.model.recurring_event import RecurringEvent
from chronoplan.service.recurrence import expand_occurrences, reference_instant
from chronoplan.time import minutes_between


def project_virtual_occurrences(
    recurring_event: RecurringEvent,
    window_start: pendulum.DateTime,
    window_end: pendulum.DateTime,
    now: pendulum.DateTime,
) -> list[EventView]:
    """Unpersisted views of the occurrences in the window that are not over at ``now``."""
    views: list[EventView] = []
    for occurrence in expand_occurrences(recurring_event, window_start, window_end):
        if reference_instant(occurrence) < now:
            continue
        views.append(
            {
                "id": None,
                "name": recurring_event["name"],
                "label_id": recurring_event["label_id"],
                "start": occurrence["start"],
                "end": occurrence["end"],
                "duration_minutes": (
                    minutes_between(occurrence["start"], occurrence["end"])
                    if occurrence["end"] is not None
                    else None
                ),
                "recurring_event_id": recurring_event["id"],
                "virtual": True,
                "unconfirmed": False,
            }
        )
    return views
