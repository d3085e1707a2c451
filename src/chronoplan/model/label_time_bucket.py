# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from chronoplan.model.entity_id import EntityId

BucketType = Literal["DAY", "WEEK", "MONTH"]


class LabelTimeBucket(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    owner_id: EntityId
    label_id: EntityId
    bucket_type: BucketType
    bucket_year: int  # ISO week-year for WEEK buckets
    bucket_value: int  # YYYYMMDD, ISO week number or month number
    duration_minutes: int


class LabelMonthStats(TypedDict):
    label_id: EntityId
    year: int
    month: int
    total_events: int  # completed events starting in the month
    total_minutes: int  # read from the MONTH bucket
