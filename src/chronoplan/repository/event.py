# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, TypeAlias, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from chronoplan import configuration, time
from chronoplan.model.entity_id import EntityId, generate_entity_id
from chronoplan.model.event import Event

EventSnapshot: TypeAlias = tuple[int, bool]


class DuplicateOccurrenceError(Exception):
    """Raised when an event already exists for a recurring event occurrence."""

    def __init__(
        self, recurring_event_id: EntityId, occurrence_start: pendulum.DateTime
    ) -> None:
        super().__init__(
            f"An event already exists for recurring event {recurring_event_id} "
            f"at {time.datetime_to_iso_str(occurrence_start)}"
        )
        self.recurring_event_id = recurring_event_id
        self.occurrence_start = occurrence_start


def _occurrence_key(
    event: Event,
) -> Optional[tuple[EntityId, pendulum.DateTime]]:
    if event["recurring_event_id"] is None or event["occurrence_start"] is None:
        return None
    return (event["recurring_event_id"], event["occurrence_start"])


class EventRepository:
    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = data_dir
        self._events: Optional[list[Event]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._occurrence_keys: set[tuple[EntityId, pendulum.DateTime]] = set()

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        return configuration.DATA_EVENTS_DIR

    @property
    def events(self) -> list[Event]:
        if self._events is None:
            self.__load_data()
        if self._events is None:
            raise ValueError()
        return self._events

    def __load_data(self) -> None:
        self._events = []
        self._occurrence_keys = set()
        if not self.data_dir.is_dir():
            return
        for file_path in sorted(self.data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_event = load(file_path.read_text(), Loader=Loader)
            if raw_event is not None:
                event = self.__convert_event_for_deserialization(raw_event)
                self._events.append(event)
                self.__index_occurrence(event)

    def __index_occurrence(self, event: Event) -> None:
        key = _occurrence_key(event)
        if key is not None:
            self._occurrence_keys.add(key)

    def __save_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for event in self.events:
            if event["id"] in self._dirty_ids:
                serializable_event = self.__convert_event_for_serialization(
                    deepcopy(event)
                )
                file_path = self.data_dir / f"{event['id']}.yaml"
                file_path.write_text(dump(serializable_event, Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._events is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def snapshot(self) -> EventSnapshot:
        # Events are only ever appended, so the length marks the state
        return (len(self.events), self.is_dirty)

    def restore(self, snapshot: EventSnapshot) -> None:
        length, self.is_dirty = snapshot
        for event in self.events[length:]:
            self._dirty_ids.discard(event["id"])
            key = _occurrence_key(event)
            if key is not None:
                self._occurrence_keys.discard(key)
        del self.events[length:]

    def release(self) -> None:
        """Nothing is recorded past the snapshot itself."""

    def __convert_event_for_serialization(self, event: Event) -> dict[str, Any]:
        serializable_event = cast(dict[str, Any], event)
        serializable_event["start"] = time.datetime_to_iso_str(
            serializable_event["start"]
        )
        serializable_event["end"] = time.datetime_to_iso_str_optional(
            serializable_event["end"]
        )
        serializable_event["occurrence_start"] = time.datetime_to_iso_str_optional(
            serializable_event["occurrence_start"]
        )
        serializable_event["created"] = time.datetime_to_iso_str(
            serializable_event["created"]
        )
        serializable_event["updated"] = time.datetime_to_iso_str(
            serializable_event["updated"]
        )
        return serializable_event

    def __convert_event_for_deserialization(self, event: dict[str, Any]) -> Event:
        deserializable_event = event
        deserializable_event["start"] = time.datetime_from_str(
            deserializable_event["start"]
        )
        deserializable_event["end"] = time.datetime_from_str_optional(
            deserializable_event.get("end")
        )
        deserializable_event["occurrence_start"] = time.datetime_from_str_optional(
            deserializable_event.get("occurrence_start")
        )
        deserializable_event["created"] = time.datetime_from_str(
            deserializable_event["created"]
        )
        deserializable_event["updated"] = time.datetime_from_str(
            deserializable_event["updated"]
        )
        deserializable_event.setdefault("recurring_event_id", None)
        deserializable_event.setdefault("duration_minutes", None)
        deserializable_event.setdefault("unconfirmed", False)
        return cast(Event, deserializable_event)

    def save_new_event(self, event: Event) -> EntityId:
        """Persist a new event.

        Raises:
            DuplicateOccurrenceError: an event already exists for the same
                (recurring_event_id, occurrence_start) pair.
        """
        recurring_event_id = event["recurring_event_id"]
        occurrence_start = event["occurrence_start"]
        if (
            recurring_event_id is not None
            and occurrence_start is not None
            and self.has_occurrence(recurring_event_id, occurrence_start)
        ):
            raise DuplicateOccurrenceError(recurring_event_id, occurrence_start)

        self.is_dirty = True

        event["id"] = generate_entity_id()
        stored_event = deepcopy(event)
        self.events.append(stored_event)
        self._dirty_ids.add(event["id"])
        self.__index_occurrence(stored_event)

        return event["id"]

    def has_occurrence(
        self, recurring_event_id: EntityId, occurrence_start: pendulum.DateTime
    ) -> bool:
        if self._events is None:
            self.__load_data()
        return (recurring_event_id, occurrence_start) in self._occurrence_keys

    def get_confirmed_events_in_range(
        self,
        owner_id: EntityId,
        start: pendulum.DateTime,
        end: pendulum.DateTime,
    ) -> list[Event]:
        """Confirmed events of ``owner_id`` starting in ``[start, end)``, by start."""
        matching_events = [
            event
            for event in self.events
            if event["owner_id"] == owner_id
            and not event["unconfirmed"]
            and start <= event["start"] < end
        ]
        matching_events.sort(key=lambda event: event["start"])
        return deepcopy(matching_events)

    def get_all_events(self) -> list[Event]:
        return deepcopy(self.events)

    def get_event(self, id: EntityId) -> Event:
        return deepcopy([event for event in self.events if event["id"] == id][0])


EVENT_REPO = EventRepository()
