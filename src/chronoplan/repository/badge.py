# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from chronoplan import configuration
from chronoplan.model.badge import Badge
from chronoplan.model.entity_id import EntityId, generate_entity_id


class BadgeNotFoundError(Exception):
    """Raised when no badge exists for an id."""

    def __init__(self, badge_id: EntityId) -> None:
        super().__init__(f"Badge {badge_id} not found")
        self.badge_id = badge_id


class BadgeRepository:
    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = data_dir
        self._badges: Optional[list[Badge]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        return configuration.DATA_BADGES_DIR

    @property
    def badges(self) -> list[Badge]:
        if self._badges is None:
            self.__load_data()
        if self._badges is None:
            raise ValueError()
        return self._badges

    def __load_data(self) -> None:
        self._badges = []
        if not self.data_dir.is_dir():
            return
        for file_path in sorted(self.data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_badge = load(file_path.read_text(), Loader=Loader)
            if raw_badge is not None:
                self._badges.append(cast(Badge, raw_badge))

    def __save_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for badge in self.badges:
            if badge["id"] in self._dirty_ids:
                file_path = self.data_dir / f"{badge['id']}.yaml"
                file_path.write_text(dump(dict(badge), Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._badges is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def save_new_badge(self, badge: Badge) -> EntityId:
        self.is_dirty = True

        badge["id"] = generate_entity_id()
        # Deduplicate labels
        badge["label_ids"] = list(dict.fromkeys(badge["label_ids"]))
        self.badges.append(badge)
        self._dirty_ids.add(badge["id"])

        return badge["id"]

    def get_badge(self, id: EntityId) -> Badge:
        matching = [badge for badge in self.badges if badge["id"] == id]
        if len(matching) == 0:
            raise BadgeNotFoundError(id)
        return deepcopy(matching[0])


BADGE_REPO = BadgeRepository()
