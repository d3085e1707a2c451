# SPDX-License-Identifier: MIT

from chronoplan.model.entity_id import EntityId
from chronoplan.model.entity_type import EntityType
from chronoplan.model.recurring_event import RecurringEvent
from chronoplan.time import now_utc


def get_recurring_event_template(
    owner_id: EntityId, label_id: EntityId, timezone: str
) -> RecurringEvent:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.RECURRING_EVENT,
        "owner_id": owner_id,
        "name": "",
        "label_id": label_id,
        "rule": {"frequency": "daily", "interval": 1},
        "valid_from": now.in_tz(timezone).date(),
        "valid_to": None,
        "timezone": timezone,
        "slots": [],
        "skip_days": [],
        "unconfirmed": False,
        "created": now,
        "updated": now,
    }
