# SPDX-License-Identifier: MIT

from typing import Any, Callable

import pendulum
import pytest

from chronoplan.clock import FixedClockProvider
from chronoplan.model.recurring_event import RecurringEvent
from chronoplan.model.user import User
from chronoplan.repository.badge import BadgeRepository
from chronoplan.repository.event import EventRepository
from chronoplan.repository.label_time_bucket import LabelTimeBucketRepository
from chronoplan.repository.recurring_event import RecurringEventRepository
from chronoplan.service.context import PlannerContext
from chronoplan.template.recurring_event import get_recurring_event_template

ZONE = "Europe/Amsterdam"
LABEL = "label-work"


def local(*args: int, zone: str = ZONE) -> pendulum.DateTime:
    return pendulum.datetime(*args, tz=zone)


def build_recurring_event(owner_id: str = "user-1", **overrides: Any) -> RecurringEvent:
    recurring_event = get_recurring_event_template(owner_id, LABEL, ZONE)
    recurring_event.update(
        {
            "id": "recurring-1",
            "name": "Standup",
            "valid_from": pendulum.date(2025, 1, 1),
            "slots": [{"start": pendulum.time(9, 0), "end": pendulum.time(9, 30)}],
        }
    )
    recurring_event.update(overrides)  # type: ignore[typeddict-item]
    return recurring_event


@pytest.fixture
def user() -> User:
    return {"id": "user-1", "timezone": ZONE}


@pytest.fixture
def events(tmp_path) -> EventRepository:
    return EventRepository(tmp_path / "events")


@pytest.fixture
def recurring_events(tmp_path) -> RecurringEventRepository:
    return RecurringEventRepository(tmp_path / "recurring_events")


@pytest.fixture
def buckets(tmp_path) -> LabelTimeBucketRepository:
    return LabelTimeBucketRepository(tmp_path / "label_time_buckets")


@pytest.fixture
def badges(tmp_path) -> BadgeRepository:
    return BadgeRepository(tmp_path / "badges")


@pytest.fixture
def make_context(
    user, events, recurring_events, buckets
) -> Callable[[pendulum.DateTime], PlannerContext]:
    def _make(now: pendulum.DateTime) -> PlannerContext:
        return PlannerContext(
            user=user,
            clock_provider=FixedClockProvider(now),
            events=events,
            recurring_events=recurring_events,
            buckets=buckets,
        )

    return _make


@pytest.fixture
def add_recurring_event(recurring_events, user) -> Callable[..., RecurringEvent]:
    """Save a recurring event (daily standup by default) and return it."""

    def _add(**overrides: Any) -> RecurringEvent:
        recurring_event = build_recurring_event(user["id"], **overrides)
        recurring_events.save_new_recurring_event(recurring_event)
        return recurring_event

    return _add
