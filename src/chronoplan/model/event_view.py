# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from chronoplan.model.entity_id import EntityId


class EventView(TypedDict):
    """Presentation shape shared by persisted events and virtual occurrences."""

    id: Optional[EntityId]  # None for virtual occurrences
    name: Optional[str]
    label_id: Optional[EntityId]
    start: pendulum.DateTime
    end: Optional[pendulum.DateTime]
    duration_minutes: Optional[int]
    recurring_event_id: Optional[EntityId]
    virtual: bool
    unconfirmed: bool


class DayView(TypedDict):
    date: pendulum.Date
    events: list[EventView]


class WeekView(TypedDict):
    days: list[DayView]
    events: list[EventView]
