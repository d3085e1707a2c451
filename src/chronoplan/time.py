# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def date_to_str(date: pendulum.Date) -> str:
    return date.isoformat()


def date_to_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_from_str(date: str) -> pendulum.Date:
    return cast(pendulum.Date, pendulum.parse(str(date), exact=True))


def date_from_str_optional(date: Optional[str]) -> Optional[pendulum.Date]:
    if date is None:
        return None
    return date_from_str(date)


def time_to_str(time: pendulum.Time) -> str:
    return time.isoformat()


def time_to_str_optional(time: Optional[pendulum.Time]) -> Optional[str]:
    if time is None:
        return None
    return time_to_str(time)


def time_from_str(time: str) -> pendulum.Time:
    return cast(pendulum.Time, pendulum.parse(time, exact=True))


def time_from_str_optional(time: Optional[str]) -> Optional[pendulum.Time]:
    if time is None:
        return None
    return time_from_str(time)


def at_local_time(
    date: pendulum.Date, time: Optional[pendulum.Time], zone: str
) -> pendulum.DateTime:
    """Combine a local date and wall-clock time in ``zone`` into an instant.

    A missing time means the start of the local day.
    """
    if time is None:
        return pendulum.datetime(date.year, date.month, date.day, tz=zone)
    return pendulum.datetime(
        date.year,
        date.month,
        date.day,
        time.hour,
        time.minute,
        time.second,
        tz=zone,
    )


def start_of_local_day(date: pendulum.Date, zone: str) -> pendulum.DateTime:
    """Local midnight of ``date`` in ``zone``, as a UTC instant."""
    return at_local_time(date, None, zone).in_tz("UTC")


def local_date(instant: pendulum.DateTime, zone: str) -> pendulum.Date:
    return instant.in_tz(zone).date()


def minutes_between(start: pendulum.DateTime, end: pendulum.DateTime) -> int:
    """Whole minutes from ``start`` to ``end``, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def datetime_to_display_local_time_str(
    datetime: pendulum.DateTime, zone: str
) -> str:
    return datetime.in_tz(zone).format("HH:mm")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def duration_minutes_to_str(minutes: int) -> str:
    sign = "-" if minutes < 0 else ""
    hours, remainder = divmod(abs(minutes), 60)
    return f"{sign}{hours}:{remainder:02d}"
