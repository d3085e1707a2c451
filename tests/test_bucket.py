# SPDX-License-Identifier: MIT

import pendulum

from chronoplan.service.bucket import day_value, keys_for, previous_month, previous_week


def test_day_value_is_yyyymmdd():
    assert day_value(pendulum.date(2025, 1, 1)) == 20250101
    assert day_value(pendulum.date(1999, 12, 31)) == 19991231


def test_first_of_january_2025_is_iso_week_one():
    keys = keys_for(pendulum.datetime(2025, 1, 1, 12, tz="UTC"), "UTC")

    assert keys["day"] == (2025, 20250101)
    assert keys["week"] == (2025, 1)
    assert keys["month"] == (2025, 1)
    assert previous_week(keys["week"]) == (2024, 52)


def test_december_31_2018_belongs_to_week_one_of_2019():
    keys = keys_for(pendulum.datetime(2018, 12, 31, 9, tz="UTC"), "UTC")

    assert keys["day"] == (2018, 20181231)
    assert keys["week"] == (2019, 1)
    assert keys["month"] == (2018, 12)
    assert previous_week(keys["week"]) == (2018, 52)


def test_january_first_can_belong_to_previous_week_year():
    keys = keys_for(pendulum.datetime(2021, 1, 1, 12, tz="UTC"), "UTC")

    assert keys["day"] == (2021, 20210101)
    assert keys["week"] == (2020, 53)
    assert keys["month"] == (2021, 1)


def test_previous_week_rolls_back_to_week_53():
    assert previous_week((2021, 1)) == (2020, 53)
    assert previous_week((2027, 1)) == (2026, 53)


def test_previous_week_within_year():
    assert previous_week((2025, 10)) == (2025, 9)


def test_keys_follow_the_given_zone():
    instant = pendulum.datetime(2024, 12, 31, 23, 30, tz="UTC")

    assert keys_for(instant, "UTC")["day"] == (2024, 20241231)
    amsterdam = keys_for(instant, "Europe/Amsterdam")
    assert amsterdam["day"] == (2025, 20250101)
    assert amsterdam["month"] == (2025, 1)


def test_previous_month_rollover():
    assert previous_month((2025, 1)) == (2024, 12)
    assert previous_month((2025, 5)) == (2025, 4)
