# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from chronoplan.model.entity_id import EntityId


class Badge(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    owner_id: EntityId
    name: str
    label_ids: list[EntityId]


class TimeStats(TypedDict):
    today: int
    this_week: int
    last_week: int
    this_month: int
    last_month: int
    all_time: int
