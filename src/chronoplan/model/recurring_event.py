# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from chronoplan.model.entity_id import EntityId
from chronoplan.model.recurrence import RecurrenceRule


class TimeSlot(TypedDict):
    start: Optional[pendulum.Time]  # None: untimed (all-day) occurrence
    end: Optional[pendulum.Time]  # earlier than start: ends the next day


class RecurringEvent(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    owner_id: EntityId
    name: str
    label_id: EntityId
    rule: RecurrenceRule
    valid_from: pendulum.Date
    valid_to: Optional[pendulum.Date]  # inclusive
    timezone: str  # zone the slot times were authored in
    slots: list[TimeSlot]
    skip_days: list[pendulum.Date]
    unconfirmed: bool
    created: pendulum.DateTime
    updated: pendulum.DateTime
