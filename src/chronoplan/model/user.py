# SPDX-License-Identifier: MIT

from typing import TypedDict

from chronoplan.model.entity_id import EntityId


class User(TypedDict):
    id: EntityId
    timezone: str  # IANA zone name, e.g. "Europe/Amsterdam"
