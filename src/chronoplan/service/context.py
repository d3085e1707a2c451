# SPDX-License-Identifier: MIT

from dataclasses import dataclass

import pendulum

from chronoplan.clock import ClockProvider
from chronoplan.model.user import User
from chronoplan.repository.event import EventRepository
from chronoplan.repository.label_time_bucket import LabelTimeBucketRepository
from chronoplan.repository.recurring_event import RecurringEventRepository


@dataclass
class PlannerContext:
    """Collaborators of a single view or stats request."""

    user: User
    clock_provider: ClockProvider
    events: EventRepository
    recurring_events: RecurringEventRepository
    buckets: LabelTimeBucketRepository

    @property
    def zone(self) -> str:
        return self.user["timezone"]

    def now(self) -> pendulum.DateTime:
        return self.clock_provider.get_clock_for_user(self.user).now()
