# SPDX-License-Identifier: MIT

import logging

from chronoplan.model.badge import Badge, TimeStats
from chronoplan.model.entity_id import EntityId
from chronoplan.model.label_time_bucket import BucketType, LabelTimeBucket
from chronoplan.service.bucket import BucketKey, keys_for, previous_month, previous_week
from chronoplan.service.context import PlannerContext

logger = logging.getLogger(__name__)


def _sum_minutes(rows: list[LabelTimeBucket]) -> int:
    return sum(row["duration_minutes"] for row in rows)


def compute_stats_for_badge(
    ctx: PlannerContext, badge: Badge, user_id: EntityId
) -> TimeStats:
    """
    Minutes spent on a badge's labels today, this and last week, this and last month, and overall.

    Periods are resolved from the user's current time in their timezone.
    Every matching bucket row is added as stored, including duplicates and
    negative values. The all-time figure is read from all rows of the labels
    and is not derived from the other periods.
    """
    label_ids = list(dict.fromkeys(badge["label_ids"]))
    if not label_ids:
        return {
            "today": 0,
            "this_week": 0,
            "last_week": 0,
            "this_month": 0,
            "last_month": 0,
            "all_time": 0,
        }

    keys = keys_for(ctx.now(), ctx.zone)

    def period_minutes(bucket_type: BucketType, key: BucketKey) -> int:
        bucket_year, bucket_value = key
        return _sum_minutes(
            ctx.buckets.find_buckets(
                user_id, label_ids, bucket_type, bucket_year, [bucket_value]
            )
        )

    stats: TimeStats = {
        "today": period_minutes("DAY", keys["day"]),
        "this_week": period_minutes("WEEK", keys["week"]),
        "last_week": period_minutes("WEEK", previous_week(keys["week"])),
        "this_month": period_minutes("MONTH", keys["month"]),
        "last_month": period_minutes("MONTH", previous_month(keys["month"])),
        "all_time": _sum_minutes(ctx.buckets.find_all_buckets(user_id, label_ids)),
    }

    logger.info("Computed stats for badge %s: %s", badge["id"], stats)
    return stats
