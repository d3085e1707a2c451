# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from chronoplan.time import date_from_str, datetime_from_str


def parse_instant(instant_param: Optional[str]) -> Optional[pendulum.DateTime]:
    """Parse an ISO-8601 instant such as 2025-01-06T09:30:00+01:00 (UTC when no offset)."""
    if instant_param is None:
        return None

    try:
        return datetime_from_str(instant_param).in_tz("UTC")
    except (ValueError, TypeError, AttributeError) as e:
        raise typer.BadParameter(f"Incorrect instant format: {e}")


def resolve_date(date_param: Optional[str], today: pendulum.Date) -> pendulum.Date:
    """
    Resolve a date argument relative to ``today``.

    Accepts YYYY-MM-DD, today/t, yesterday/y, tomorrow/o, or a signed day
    offset like 1 or -7. A missing argument means today.
    """
    if date_param is None:
        return today

    date = date_param.strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")

    if re.match(r"^[+-]?\d+$", date):
        return today.add(days=int(date))

    if date == "today" or date == "t":
        return today
    if date == "yesterday" or date == "y":
        return today.subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today.add(days=1)
    raise typer.BadParameter("Incorrect date format")


def resolve_month(
    month_param: Optional[str], today: pendulum.Date
) -> tuple[int, int]:
    """
    Resolve a month argument relative to ``today`` into ``(year, month)``.

    Accepts YYYY-MM or a signed month offset like -1. A missing argument
    means the current month.
    """
    if month_param is None:
        return today.year, today.month

    month = month_param.strip()

    match = re.match(r"^(\d{4})-(\d{2})$", month)
    if match:
        year, month_number = int(match.group(1)), int(match.group(2))
        if not 1 <= month_number <= 12:
            raise typer.BadParameter(f"Invalid month: {month_number}")
        return year, month_number

    if re.match(r"^[+-]?\d+$", month):
        shifted = today.replace(day=1).add(months=int(month))
        return shifted.year, shifted.month

    raise typer.BadParameter("Incorrect month format")
