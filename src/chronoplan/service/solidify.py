# SPDX-License-Identifier: MIT

import logging

import pendulum

from chronoplan.model.event import Event
from chronoplan.model.occurrence import Occurrence
from chronoplan.model.recurring_event import RecurringEvent
from chronoplan.repository.event import DuplicateOccurrenceError, EventRepository
from chronoplan.repository.label_time_bucket import LabelTimeBucketRepository
from chronoplan.repository.unit_of_work import atomic
from chronoplan.service.label_time_bucket import apply_duration
from chronoplan.service.recurrence import expand_occurrences, reference_instant
from chronoplan.template.event import get_event_template
from chronoplan.time import minutes_between

logger = logging.getLogger(__name__)


def _event_for_occurrence(
    recurring_event: RecurringEvent, occurrence: Occurrence
) -> Event:
    if recurring_event["id"] is None:
        raise ValueError("Recurring event has not been saved")

    event = get_event_template(recurring_event["owner_id"])
    event["name"] = recurring_event["name"]
    event["label_id"] = recurring_event["label_id"]
    event["start"] = occurrence["start"]
    event["end"] = occurrence["end"]
    if occurrence["end"] is not None:
        event["duration_minutes"] = minutes_between(
            occurrence["start"], occurrence["end"]
        )
    event["recurring_event_id"] = recurring_event["id"]
    event["occurrence_start"] = occurrence["start"]
    return event


def solidify_past_occurrences(
    recurring_event: RecurringEvent,
    window_start: pendulum.DateTime,
    window_end: pendulum.DateTime,
    now: pendulum.DateTime,
    events: EventRepository,
    buckets: LabelTimeBucketRepository,
) -> list[Event]:
    """
    Persist an Event for every occurrence in the window that is already over.

    An occurrence is over once its end (or its start, when untimed) is
    strictly before ``now``. Occurrences that already have an Event are left
    alone, so running this again over the same or an overlapping window
    changes nothing. Each new Event is saved together with its label time
    bucket increments: if either fails, both are rolled back and the error
    propagates, stopping the batch. A uniqueness violation reported by the
    event store counts as already solidified.

    Args:
        recurring_event: The recurring event whose occurrences are solidified
        window_start: Inclusive start of the window
        window_end: Exclusive end of the window
        now: Reference instant separating past from future
        events: Event store
        buckets: Label time bucket store

    Returns:
        The events created by this call
    """
    created: list[Event] = []

    for occurrence in expand_occurrences(recurring_event, window_start, window_end):
        if reference_instant(occurrence) >= now:
            continue
        if events.has_occurrence(recurring_event["id"], occurrence["start"]):  # type: ignore[arg-type]
            continue

        event = _event_for_occurrence(recurring_event, occurrence)
        try:
            with atomic(events, buckets):
                events.save_new_event(event)
                if event["duration_minutes"] is not None:
                    apply_duration(
                        recurring_event["owner_id"],
                        recurring_event["label_id"],
                        event["start"],
                        event["duration_minutes"],
                        recurring_event["timezone"],
                        buckets,
                    )
        except DuplicateOccurrenceError:
            logger.debug(
                "Occurrence at %s of recurring event %s was already solidified",
                occurrence["start"],
                recurring_event["id"],
            )
            continue

        created.append(event)

    if created:
        logger.info(
            "Solidified %d occurrences of recurring event %s",
            len(created),
            recurring_event["id"],
        )
    return created
