# SPDX-License-Identifier: MIT

import logging

import pendulum

from chronoplan.model.entity_id import EntityId
from chronoplan.model.label_time_bucket import BucketType
from chronoplan.repository.label_time_bucket import LabelTimeBucketRepository
from chronoplan.service.bucket import BucketKey, keys_for_date
from chronoplan.template.label_time_bucket import get_label_time_bucket_template
from chronoplan.time import minutes_between, start_of_local_day

logger = logging.getLogger(__name__)


def split_by_local_day(
    start: pendulum.DateTime, minutes: int, zone: str
) -> list[tuple[pendulum.Date, int]]:
    """
    Cut ``minutes`` starting at ``start`` into per-local-day slices.

    Slice boundaries are local midnights in ``zone``. The last slice absorbs
    any rounding so the slices always add up to ``minutes``.
    """
    end = start.add(minutes=minutes)
    day = start.in_tz(zone).date()
    slices: list[tuple[pendulum.Date, int]] = []
    cursor = start
    allocated = 0

    while True:
        next_midnight = start_of_local_day(day.add(days=1), zone)
        if end <= next_midnight:
            slices.append((day, minutes - allocated))
            return slices
        slice_minutes = minutes_between(cursor, next_midnight)
        slices.append((day, slice_minutes))
        allocated += slice_minutes
        cursor = next_midnight
        day = day.add(days=1)


def apply_duration(
    owner_id: EntityId,
    label_id: EntityId,
    start: pendulum.DateTime,
    minutes: int,
    zone: str,
    buckets: LabelTimeBucketRepository,
) -> None:
    """
    Add ``minutes`` of ``label_id`` time to the DAY, WEEK and MONTH buckets it falls in.

    Durations crossing local midnight are split so every day bucket gets its
    own share; week and month buckets receive the per-day shares of the days
    they contain. Missing bucket rows are created. Non-positive durations
    leave the buckets untouched.
    """
    if minutes <= 0:
        logger.debug("Skipping non-positive duration %d for label %s", minutes, label_id)
        return

    increments: dict[tuple[BucketType, BucketKey], int] = {}
    for day, slice_minutes in split_by_local_day(start, minutes, zone):
        keys = keys_for_date(day)
        keyed: tuple[tuple[BucketType, BucketKey], ...] = (
            ("DAY", keys["day"]),
            ("WEEK", keys["week"]),
            ("MONTH", keys["month"]),
        )
        for bucket_type, key in keyed:
            increments[(bucket_type, key)] = (
                increments.get((bucket_type, key), 0) + slice_minutes
            )

    for (bucket_type, (bucket_year, bucket_value)), increment in increments.items():
        bucket = buckets.find_bucket(
            owner_id, label_id, bucket_type, bucket_year, bucket_value
        )
        if bucket is None:
            bucket = get_label_time_bucket_template(
                owner_id, label_id, bucket_type, bucket_year, bucket_value
            )
        bucket["duration_minutes"] += increment
        buckets.save_bucket(bucket)
        logger.debug(
            "Added %d minutes to %s bucket %d/%d of label %s",
            increment,
            bucket_type,
            bucket_year,
            bucket_value,
            label_id,
        )
