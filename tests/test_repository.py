# SPDX-License-Identifier: MIT

import pendulum
import pytest
from conftest import LABEL, build_recurring_event, local

from chronoplan import cleanup, configuration
from chronoplan.repository.badge import BadgeNotFoundError, BadgeRepository
from chronoplan.repository.configuration import ConfigurationRepository
from chronoplan.repository.event import DuplicateOccurrenceError, EventRepository
from chronoplan.repository.label_time_bucket import LabelTimeBucketRepository
from chronoplan.repository.recurring_event import (
    RecurringEventNotFoundError,
    RecurringEventRepository,
)
from chronoplan.repository.unit_of_work import atomic
from chronoplan.template.event import get_event_template
from chronoplan.template.label_time_bucket import get_label_time_bucket_template


def occurrence_event(recurring_event_id, occurrence_start):
    event = get_event_template("user-1")
    event["name"] = "Standup"
    event["start"] = occurrence_start
    event["end"] = occurrence_start.add(minutes=30)
    event["duration_minutes"] = 30
    event["recurring_event_id"] = recurring_event_id
    event["occurrence_start"] = occurrence_start
    return event


def test_events_survive_flush_and_reload(tmp_path):
    events = EventRepository(tmp_path / "events")
    start = pendulum.datetime(2025, 1, 6, 8, 0, tz="UTC")
    event_id = events.save_new_event(occurrence_event("recurring-1", start))

    assert events.flush() is True
    assert events.flush() is False

    reloaded = EventRepository(tmp_path / "events").get_event(event_id)
    assert reloaded["start"] == start
    assert reloaded["occurrence_start"] == start
    assert reloaded["duration_minutes"] == 30


def test_duplicate_occurrence_is_rejected(events):
    start = pendulum.datetime(2025, 1, 6, 8, 0, tz="UTC")
    events.save_new_event(occurrence_event("recurring-1", start))

    with pytest.raises(DuplicateOccurrenceError) as error:
        events.save_new_event(occurrence_event("recurring-1", start))

    assert error.value.recurring_event_id == "recurring-1"
    assert len(events.get_all_events()) == 1
    events.save_new_event(occurrence_event("recurring-2", start))
    assert events.has_occurrence("recurring-2", start)


def test_confirmed_events_in_range_excludes_unconfirmed_and_end(events):
    inside = occurrence_event("r1", pendulum.datetime(2025, 1, 6, 8, tz="UTC"))
    draft = occurrence_event("r2", pendulum.datetime(2025, 1, 6, 9, tz="UTC"))
    draft["unconfirmed"] = True
    at_end = occurrence_event("r3", pendulum.datetime(2025, 1, 7, tz="UTC"))
    for event in (at_end, draft, inside):
        events.save_new_event(event)

    found = events.get_confirmed_events_in_range(
        "user-1",
        pendulum.datetime(2025, 1, 6, tz="UTC"),
        pendulum.datetime(2025, 1, 7, tz="UTC"),
    )

    assert [event["recurring_event_id"] for event in found] == ["r1"]


def test_recurring_event_round_trip(tmp_path):
    recurring_events = RecurringEventRepository(tmp_path / "recurring_events")
    recurring_event = build_recurring_event(
        skip_days=[pendulum.date(2025, 1, 7)],
        slots=[
            {"start": pendulum.time(22, 0), "end": pendulum.time(6, 0)},
            {"start": None, "end": None},
        ],
    )
    recurring_event_id = recurring_events.save_new_recurring_event(recurring_event)
    recurring_events.flush()

    reloaded = RecurringEventRepository(
        tmp_path / "recurring_events"
    ).get_recurring_event(recurring_event_id)

    assert reloaded["valid_from"] == pendulum.date(2025, 1, 1)
    assert reloaded["valid_to"] is None
    assert reloaded["skip_days"] == [pendulum.date(2025, 1, 7)]
    assert reloaded["slots"][0]["end"] == pendulum.time(6, 0)
    assert reloaded["slots"][1] == {"start": None, "end": None}


def test_hand_written_recurring_event_file_is_read(tmp_path):
    data_dir = tmp_path / "recurring_events"
    data_dir.mkdir()
    (data_dir / "gym.yaml").write_text(
        "id: gym\n"
        "entity_type: recurring_event\n"
        "owner_id: user-1\n"
        "name: Gym\n"
        "label_id: label-health\n"
        "rule:\n"
        "  frequency: weekly\n"
        "  days: [tuesday, thursday]\n"
        "valid_from: 2025-01-06\n"
        "timezone: Europe/Amsterdam\n"
        "slots:\n"
        "  - start: '18:00:00'\n"
        "    end: '19:00:00'\n"
        "created: '2025-01-01T00:00:00+00:00'\n"
        "updated: '2025-01-01T00:00:00+00:00'\n"
    )

    recurring_event = RecurringEventRepository(data_dir).get_recurring_event("gym")

    assert recurring_event["rule"]["interval"] == 1
    assert recurring_event["valid_from"] == pendulum.date(2025, 1, 6)
    assert recurring_event["slots"][0]["start"] == pendulum.time(18, 0)
    assert recurring_event["skip_days"] == []
    assert recurring_event["unconfirmed"] is False


def test_recurring_events_in_range_checks_validity_overlap(recurring_events):
    recurring_events.save_new_recurring_event(
        build_recurring_event(name="ended", valid_to=pendulum.date(2025, 1, 5))
    )
    recurring_events.save_new_recurring_event(
        build_recurring_event(name="later", valid_from=pendulum.date(2025, 1, 8))
    )
    recurring_events.save_new_recurring_event(build_recurring_event(name="open"))

    found = recurring_events.get_confirmed_recurring_events_in_range(
        "user-1", pendulum.date(2025, 1, 6), pendulum.date(2025, 1, 7)
    )

    assert [recurring_event["name"] for recurring_event in found] == ["open"]


def test_missing_recurring_event_and_badge_raise(recurring_events, badges):
    with pytest.raises(RecurringEventNotFoundError):
        recurring_events.get_recurring_event("nope")
    with pytest.raises(BadgeNotFoundError):
        badges.get_badge("nope")


def test_badge_label_ids_are_deduplicated(tmp_path):
    badges = BadgeRepository(tmp_path / "badges")
    badge_id = badges.save_new_badge(
        {
            "id": None,
            "entity_type": "badge",
            "owner_id": "user-1",
            "name": "Deep work",
            "label_ids": ["a", "b", "a"],
        }
    )
    badges.flush()

    assert BadgeRepository(tmp_path / "badges").get_badge(badge_id)["label_ids"] == ["a", "b"]


def test_save_bucket_inserts_then_replaces(buckets):
    bucket = get_label_time_bucket_template("user-1", LABEL, "DAY", 2025, 20250106)
    bucket["duration_minutes"] = 30
    buckets.save_bucket(bucket)

    stored = buckets.find_bucket("user-1", LABEL, "DAY", 2025, 20250106)
    stored["duration_minutes"] += 15
    buckets.save_bucket(stored)

    assert len(buckets.find_all_buckets("user-1", [LABEL])) == 1
    assert buckets.find_bucket("user-1", LABEL, "DAY", 2025, 20250106)["duration_minutes"] == 45


def test_atomic_restores_every_repository_on_error(tmp_path):
    events = EventRepository(tmp_path / "events")
    buckets = LabelTimeBucketRepository(tmp_path / "buckets")
    events.save_new_event(occurrence_event("r1", local(2025, 1, 6, 9, 0)))

    with pytest.raises(RuntimeError):
        with atomic(events, buckets):
            events.save_new_event(occurrence_event("r2", local(2025, 1, 7, 9, 0)))
            buckets.save_bucket(
                get_label_time_bucket_template("user-1", LABEL, "DAY", 2025, 20250107)
            )
            raise RuntimeError("boom")

    assert [event["recurring_event_id"] for event in events.get_all_events()] == ["r1"]
    assert buckets.find_all_buckets("user-1", [LABEL]) == []


def test_configuration_fills_in_missing_settings(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("user_id: bob\n")
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_path)
    repository = ConfigurationRepository()

    config = repository.get_config()

    assert config["user_id"] == "bob"
    assert config["timezone"] == "UTC"
    assert config["show_header"] is True
    assert repository.is_dirty

    repository.update_config(timezone="Asia/Tokyo")
    repository.flush()
    assert "Asia/Tokyo" in config_path.read_text()


def test_atomic_puts_back_replaced_bucket_rows(buckets):
    bucket = get_label_time_bucket_template("user-1", LABEL, "DAY", 2025, 20250106)
    bucket["duration_minutes"] = 30
    buckets.save_bucket(bucket)
    buckets.flush()

    with pytest.raises(RuntimeError):
        with atomic(buckets):
            stored = buckets.find_bucket("user-1", LABEL, "DAY", 2025, 20250106)
            stored["duration_minutes"] += 15
            buckets.save_bucket(stored)
            stored["duration_minutes"] += 15
            buckets.save_bucket(stored)
            raise RuntimeError("boom")

    assert buckets.find_bucket("user-1", LABEL, "DAY", 2025, 20250106)["duration_minutes"] == 30
    assert buckets.is_dirty is False
    assert buckets.flush() is False


def test_atomic_keeps_changes_and_forgets_them_after_success(events, buckets):
    with atomic(events, buckets):
        events.save_new_event(occurrence_event("r1", local(2025, 1, 6, 9, 0)))
        buckets.save_bucket(
            get_label_time_bucket_template("user-1", LABEL, "DAY", 2025, 20250106)
        )

    with pytest.raises(RuntimeError):
        with atomic(events, buckets):
            events.save_new_event(occurrence_event("r2", local(2025, 1, 7, 9, 0)))
            raise RuntimeError("boom")

    assert [event["recurring_event_id"] for event in events.get_all_events()] == ["r1"]
    assert events.has_occurrence("r1", local(2025, 1, 6, 9, 0))
    assert not events.has_occurrence("r2", local(2025, 1, 7, 9, 0))
    assert len(buckets.find_all_buckets("user-1", [LABEL])) == 1
    assert events.flush() is True


def test_saved_event_is_not_shared_with_the_caller(events):
    start = pendulum.datetime(2025, 1, 6, 8, 0, tz="UTC")
    event = occurrence_event("recurring-1", start)
    events.save_new_event(event)

    event["occurrence_start"] = start.add(days=1)

    assert events.has_occurrence("recurring-1", start)
    assert events.get_event(event["id"])["occurrence_start"] == start


class RecordingRepository:
    def __init__(self, name, flushed):
        self.name = name
        self.flushed = flushed

    def flush(self):
        self.flushed.append(self.name)
        return True


def test_flush_all_writes_buckets_before_events(monkeypatch):
    flushed = []
    for name in (
        "CONFIGURATION_REPO",
        "EVENT_REPO",
        "RECURRING_EVENT_REPO",
        "LABEL_TIME_BUCKET_REPO",
        "BADGE_REPO",
    ):
        monkeypatch.setattr(cleanup, name, RecordingRepository(name, flushed))

    cleanup.flush_all()

    assert sorted(flushed) == sorted(set(flushed))
    assert len(flushed) == 5
    assert flushed.index("LABEL_TIME_BUCKET_REPO") < flushed.index("EVENT_REPO")
    assert flushed[-1] == "EVENT_REPO"
