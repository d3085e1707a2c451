# SPDX-License-Identifier: MIT

from typing import TypeAlias, TypedDict

import pendulum

BucketKey: TypeAlias = tuple[int, int]


class BucketKeys(TypedDict):
    day: BucketKey  # (year, YYYYMMDD)
    week: BucketKey  # (ISO week-year, ISO week)
    month: BucketKey  # (year, month)


def day_value(date: pendulum.Date) -> int:
    return date.year * 10000 + date.month * 100 + date.day


def keys_for_date(date: pendulum.Date) -> BucketKeys:
    iso_year, iso_week, _ = date.isocalendar()
    return {
        "day": (date.year, day_value(date)),
        "week": (iso_year, iso_week),
        "month": (date.year, date.month),
    }


def keys_for(instant: pendulum.DateTime, zone: str) -> BucketKeys:
    """
    Resolve the day, week and month bucket keys containing ``instant`` in ``zone``.

    Weeks follow ISO-8601: week 1 holds the year's first Thursday, so
    December 29-31 can fall in week 1 of the next week-year and January 1-3
    in week 52 or 53 of the previous one.
    """
    return keys_for_date(instant.in_tz(zone).date())


def previous_week(key: BucketKey) -> BucketKey:
    """The ISO week before ``key``; week 1 rolls back to week 52 or 53 of the prior week-year."""
    iso_year, iso_week = key
    monday = pendulum.Date.fromisocalendar(iso_year, iso_week, 1)
    previous_year, previous_iso_week, _ = monday.subtract(days=7).isocalendar()
    return (previous_year, previous_iso_week)


def previous_month(key: BucketKey) -> BucketKey:
    year, month = key
    if month == 1:
        return (year - 1, 12)
    return (year, month - 1)
