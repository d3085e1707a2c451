# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict, Union

Weekday = Literal[
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


class DailyRule(TypedDict):
    frequency: Literal["daily"]
    interval: int  # every N days, counted from valid_from


class WeeklyRule(TypedDict):
    frequency: Literal["weekly"]
    days: list[Weekday]
    interval: int  # every N ISO weeks, counted from the week of valid_from


class MonthlyRule(TypedDict):
    frequency: Literal["monthly"]
    ordinal: int  # 1-4 for first..fourth, -1 for last
    days: list[Weekday]
    interval: int  # every N months, counted from the month of valid_from


RecurrenceRule = Union[DailyRule, WeeklyRule, MonthlyRule]
