# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from chronoplan import configuration, time
from chronoplan.model.entity_id import EntityId, generate_entity_id
from chronoplan.model.recurring_event import RecurringEvent


class RecurringEventNotFoundError(Exception):
    """Raised when no recurring event exists for an id."""

    def __init__(self, recurring_event_id: EntityId) -> None:
        super().__init__(f"Recurring event {recurring_event_id} not found")
        self.recurring_event_id = recurring_event_id


class RecurringEventRepository:
    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = data_dir
        self._recurring_events: Optional[list[RecurringEvent]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        return configuration.DATA_RECURRING_EVENTS_DIR

    @property
    def recurring_events(self) -> list[RecurringEvent]:
        if self._recurring_events is None:
            self.__load_data()
        if self._recurring_events is None:
            raise ValueError()
        return self._recurring_events

    def __load_data(self) -> None:
        self._recurring_events = []
        if not self.data_dir.is_dir():
            return
        for file_path in sorted(self.data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_recurring_event = load(file_path.read_text(), Loader=Loader)
            if raw_recurring_event is not None:
                self._recurring_events.append(
                    self.__convert_recurring_event_for_deserialization(
                        raw_recurring_event
                    )
                )

    def __save_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for recurring_event in self.recurring_events:
            if recurring_event["id"] in self._dirty_ids:
                serializable_recurring_event = (
                    self.__convert_recurring_event_for_serialization(
                        deepcopy(recurring_event)
                    )
                )
                file_path = self.data_dir / f"{recurring_event['id']}.yaml"
                file_path.write_text(dump(serializable_recurring_event, Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._recurring_events is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_recurring_event_for_serialization(
        self, recurring_event: RecurringEvent
    ) -> dict[str, Any]:
        serializable_recurring_event = cast(dict[str, Any], recurring_event)
        serializable_recurring_event["valid_from"] = time.date_to_str(
            serializable_recurring_event["valid_from"]
        )
        serializable_recurring_event["valid_to"] = time.date_to_str_optional(
            serializable_recurring_event["valid_to"]
        )
        serializable_recurring_event["slots"] = [
            {
                "start": time.time_to_str_optional(slot["start"]),
                "end": time.time_to_str_optional(slot["end"]),
            }
            for slot in serializable_recurring_event["slots"]
        ]
        serializable_recurring_event["skip_days"] = [
            time.date_to_str(day) for day in serializable_recurring_event["skip_days"]
        ]
        serializable_recurring_event["created"] = time.datetime_to_iso_str(
            serializable_recurring_event["created"]
        )
        serializable_recurring_event["updated"] = time.datetime_to_iso_str(
            serializable_recurring_event["updated"]
        )
        return serializable_recurring_event

    def __convert_recurring_event_for_deserialization(
        self, recurring_event: dict[str, Any]
    ) -> RecurringEvent:
        deserializable_recurring_event = recurring_event
        deserializable_recurring_event["valid_from"] = time.date_from_str(
            deserializable_recurring_event["valid_from"]
        )
        deserializable_recurring_event["valid_to"] = time.date_from_str_optional(
            deserializable_recurring_event.get("valid_to")
        )
        deserializable_recurring_event["slots"] = [
            {
                "start": time.time_from_str_optional(slot.get("start")),
                "end": time.time_from_str_optional(slot.get("end")),
            }
            for slot in deserializable_recurring_event.get("slots") or []
        ]
        deserializable_recurring_event["skip_days"] = [
            time.date_from_str(day)
            for day in deserializable_recurring_event.get("skip_days") or []
        ]
        deserializable_recurring_event["created"] = time.datetime_from_str(
            deserializable_recurring_event["created"]
        )
        deserializable_recurring_event["updated"] = time.datetime_from_str(
            deserializable_recurring_event["updated"]
        )
        deserializable_recurring_event.setdefault("unconfirmed", False)
        rule = deserializable_recurring_event["rule"]
        rule.setdefault("interval", 1)
        return cast(RecurringEvent, deserializable_recurring_event)

    def save_new_recurring_event(self, recurring_event: RecurringEvent) -> EntityId:
        self.is_dirty = True

        recurring_event["id"] = generate_entity_id()
        self.recurring_events.append(recurring_event)
        self._dirty_ids.add(recurring_event["id"])

        return recurring_event["id"]

    def get_recurring_event(self, id: EntityId) -> RecurringEvent:
        matching = [
            recurring_event
            for recurring_event in self.recurring_events
            if recurring_event["id"] == id
        ]
        if len(matching) == 0:
            raise RecurringEventNotFoundError(id)
        return deepcopy(matching[0])

    def get_confirmed_recurring_events_in_range(
        self,
        owner_id: EntityId,
        from_date: pendulum.Date,
        to_date: pendulum.Date,
    ) -> list[RecurringEvent]:
        """Confirmed recurring events whose validity overlaps ``[from_date, to_date]``."""
        return deepcopy(
            [
                recurring_event
                for recurring_event in self.recurring_events
                if recurring_event["owner_id"] == owner_id
                and not recurring_event["unconfirmed"]
                and recurring_event["valid_from"] <= to_date
                and (
                    recurring_event["valid_to"] is None
                    or recurring_event["valid_to"] >= from_date
                )
            ]
        )

    def get_recurring_events_for_owner(
        self, owner_id: EntityId
    ) -> list[RecurringEvent]:
        return deepcopy(
            [
                recurring_event
                for recurring_event in self.recurring_events
                if recurring_event["owner_id"] == owner_id
            ]
        )


RECURRING_EVENT_REPO = RecurringEventRepository()
