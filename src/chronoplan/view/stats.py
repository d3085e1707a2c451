# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from chronoplan.model.badge import Badge, TimeStats
from chronoplan.time import duration_minutes_to_str
from chronoplan.view.header import header


def badge_stats_view(user_id: str, badge: Badge, stats: TimeStats) -> None:
    header(user_id, f"stats: {badge['name']}")

    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("period")
    stats_table.add_column("time", justify="right")
    stats_table.add_column("minutes", justify="right")

    for period in ("today", "this_week", "last_week", "this_month", "last_month", "all_time"):
        minutes = stats[period]  # type: ignore[literal-required]
        stats_table.add_row(
            period.replace("_", " "), duration_minutes_to_str(minutes), str(minutes)
        )

    console = Console()
    console.print(stats_table)
