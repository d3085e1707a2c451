# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from chronoplan.model.label_time_bucket import LabelMonthStats
from chronoplan.time import WEEKDAYS, duration_minutes_to_str
from chronoplan.view.header import header


def _month_grid(year: int, month: int, dates: list[pendulum.Date]) -> Table:
    marked = set(dates)
    first_day = pendulum.date(year, month, 1)

    grid = Table(box=box.SIMPLE, title=first_day.format("MMMM YYYY"))
    for weekday in WEEKDAYS:
        grid.add_column(weekday[:3].capitalize(), justify="right")

    # Leading blanks up to the weekday of the 1st, Monday first
    cells = [""] * (first_day.isoweekday() - 1)
    for day in range(1, first_day.days_in_month + 1):
        if first_day.replace(day=day) in marked:
            cells.append(f"[bold green]{day}*[/bold green]")
        else:
            cells.append(f"[grey50]{day}[/grey50]")
    cells.extend([""] * (-len(cells) % 7))

    for index in range(0, len(cells), 7):
        grid.add_row(*cells[index : index + 7])
    return grid


def month_view(
    user_id: str,
    year: int,
    month: int,
    dates: list[pendulum.Date],
    label_stats: Optional[LabelMonthStats] = None,
) -> None:
    header(user_id, "month")

    console = Console()
    console.print(_month_grid(year, month, dates))

    if label_stats is None:
        console.print(f" {len(dates)} days with events")
        return

    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("label")
    stats_table.add_column("events", justify="right")
    stats_table.add_column("time", justify="right")
    stats_table.add_row(
        label_stats["label_id"],
        str(label_stats["total_events"]),
        duration_minutes_to_str(label_stats["total_minutes"]),
    )
    console.print(stats_table)
