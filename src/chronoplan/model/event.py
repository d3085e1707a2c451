# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from chronoplan.model.entity_id import EntityId


class Event(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    owner_id: EntityId
    name: Optional[str]
    label_id: Optional[EntityId]
    start: pendulum.DateTime
    end: Optional[pendulum.DateTime]  # None for untimed events
    duration_minutes: Optional[int]

    # Origin: both None for directly created events
    recurring_event_id: Optional[EntityId]
    occurrence_start: Optional[pendulum.DateTime]

    unconfirmed: bool
    created: pendulum.DateTime
    updated: pendulum.DateTime
