# SPDX-License-Identifier: MIT

from chronoplan.model.entity_id import EntityId
from chronoplan.model.entity_type import EntityType
from chronoplan.model.event import Event
from chronoplan.time import now_utc


def get_event_template(owner_id: EntityId) -> Event:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.EVENT,
        "owner_id": owner_id,
        "name": None,
        "label_id": None,
        "start": now,
        "end": None,
        "duration_minutes": None,
        "recurring_event_id": None,
        "occurrence_start": None,
        "unconfirmed": False,
        "created": now,
        "updated": now,
    }
