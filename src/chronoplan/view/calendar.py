# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from chronoplan.model.event_view import DayView, EventView, WeekView
from chronoplan.time import (
    date_to_display_str,
    datetime_to_display_local_time_str,
    duration_minutes_to_str,
)
from chronoplan.view.header import header

columns = ["start", "end", "duration", "name", "label", "state"]


def _event_row(event: EventView, zone: str) -> list[str]:
    if event["end"] is None:
        start = "all day"
        end = ""
    else:
        start = datetime_to_display_local_time_str(event["start"], zone)
        end = datetime_to_display_local_time_str(event["end"], zone)

    duration = ""
    if event["duration_minutes"] is not None:
        duration = duration_minutes_to_str(event["duration_minutes"])

    if event["virtual"]:
        state = "[grey50]planned[/grey50]"
    elif event["recurring_event_id"] is not None:
        state = "[green]done[/green]"
    else:
        state = ""

    return [start, end, duration, event["name"] or "", event["label_id"] or "", state]


def _day_table(day: DayView, zone: str) -> Table:
    day_table = Table(box=box.SIMPLE, title=date_to_display_str(day["date"]))
    for column in columns:
        day_table.add_column(column)
    for event in day["events"]:
        day_table.add_row(*_event_row(event, zone))
    return day_table


def day_view(user_id: str, day: DayView, zone: str) -> None:
    header(user_id, "day")

    console = Console()
    console.print(_day_table(day, zone))


def week_view(user_id: str, week: WeekView, zone: str) -> None:
    header(user_id, "week")

    console = Console()
    for day in week["days"]:
        console.print(_day_table(day, zone))

    total = sum(event["duration_minutes"] or 0 for event in week["events"])
    console.print(f" {len(week['events'])} events, {duration_minutes_to_str(total)} total")
