# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from chronoplan.model.recurring_event import RecurringEvent, TimeSlot
from chronoplan.service.recurrence import build_summary


def _format_slot(slot: TimeSlot) -> str:
    if slot["start"] is None:
        return "all day"
    start = slot["start"].format("HH:mm")
    if slot["end"] is None:
        return start
    return f"{start}-{slot['end'].format('HH:mm')}"


def recurring_events_view(recurring_events: list[RecurringEvent]) -> None:
    recurring_table = Table(box=box.SIMPLE)
    recurring_table.add_column("id")
    recurring_table.add_column("name")
    recurring_table.add_column("label")
    recurring_table.add_column("recurrence")
    recurring_table.add_column("slots")
    recurring_table.add_column("timezone")

    for recurring_event in recurring_events:
        name = recurring_event["name"]
        if recurring_event["unconfirmed"]:
            name = f"[grey50]{name} (draft)[/grey50]"
        recurring_table.add_row(
            str(recurring_event["id"]),
            name,
            recurring_event["label_id"],
            build_summary(
                recurring_event["rule"],
                recurring_event["valid_from"],
                recurring_event["valid_to"],
            ),
            ", ".join(_format_slot(slot) for slot in recurring_event["slots"]),
            recurring_event["timezone"],
        )

    console = Console()
    console.print(recurring_table)
