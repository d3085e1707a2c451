# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Iterable, Optional, TypeAlias, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from chronoplan import configuration
from chronoplan.model.entity_id import EntityId, generate_entity_id
from chronoplan.model.label_time_bucket import BucketType, LabelTimeBucket

LabelTimeBucketSnapshot: TypeAlias = tuple[int, bool]


class LabelTimeBucketRepository:
    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self._data_dir = data_dir
        self._buckets: Optional[list[LabelTimeBucket]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        # Rows replaced since the last snapshot, by index, with their dirty state
        self._replaced: Optional[dict[int, tuple[LabelTimeBucket, bool]]] = None

    @property
    def data_dir(self) -> Path:
        if self._data_dir is not None:
            return self._data_dir
        return configuration.DATA_LABEL_TIME_BUCKETS_DIR

    @property
    def buckets(self) -> list[LabelTimeBucket]:
        if self._buckets is None:
            self.__load_data()
        if self._buckets is None:
            raise ValueError()
        return self._buckets

    def __load_data(self) -> None:
        self._buckets = []
        if not self.data_dir.is_dir():
            return
        for file_path in sorted(self.data_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_bucket = load(file_path.read_text(), Loader=Loader)
            if raw_bucket is not None:
                self._buckets.append(cast(LabelTimeBucket, raw_bucket))

    def __save_data(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for bucket in self.buckets:
            if bucket["id"] in self._dirty_ids:
                file_path = self.data_dir / f"{bucket['id']}.yaml"
                file_path.write_text(dump(dict(bucket), Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._buckets is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def snapshot(self) -> LabelTimeBucketSnapshot:
        """Start recording replaced rows so that ``restore`` can put them back.

        Snapshots do not nest: a new one discards what the previous recorded.
        """
        self._replaced = {}
        return (len(self.buckets), self.is_dirty)

    def restore(self, snapshot: LabelTimeBucketSnapshot) -> None:
        length, self.is_dirty = snapshot
        for index, (bucket, was_dirty) in (self._replaced or {}).items():
            self.buckets[index] = bucket
            if not was_dirty:
                self._dirty_ids.discard(bucket["id"])
        for bucket in self.buckets[length:]:
            self._dirty_ids.discard(bucket["id"])
        del self.buckets[length:]
        self._replaced = None

    def release(self) -> None:
        self._replaced = None

    def find_bucket(
        self,
        owner_id: EntityId,
        label_id: EntityId,
        bucket_type: BucketType,
        bucket_year: int,
        bucket_value: int,
    ) -> Optional[LabelTimeBucket]:
        for bucket in self.buckets:
            if (
                bucket["owner_id"] == owner_id
                and bucket["label_id"] == label_id
                and bucket["bucket_type"] == bucket_type
                and bucket["bucket_year"] == bucket_year
                and bucket["bucket_value"] == bucket_value
            ):
                return deepcopy(bucket)
        return None

    def find_buckets(
        self,
        owner_id: EntityId,
        label_ids: Iterable[EntityId],
        bucket_type: BucketType,
        bucket_year: int,
        bucket_values: Iterable[int],
    ) -> list[LabelTimeBucket]:
        label_id_set = set(label_ids)
        bucket_value_set = set(bucket_values)
        return deepcopy(
            [
                bucket
                for bucket in self.buckets
                if bucket["owner_id"] == owner_id
                and bucket["label_id"] in label_id_set
                and bucket["bucket_type"] == bucket_type
                and bucket["bucket_year"] == bucket_year
                and bucket["bucket_value"] in bucket_value_set
            ]
        )

    def find_all_buckets(
        self, owner_id: EntityId, label_ids: Iterable[EntityId]
    ) -> list[LabelTimeBucket]:
        label_id_set = set(label_ids)
        return deepcopy(
            [
                bucket
                for bucket in self.buckets
                if bucket["owner_id"] == owner_id and bucket["label_id"] in label_id_set
            ]
        )

    def save_bucket(self, bucket: LabelTimeBucket) -> EntityId:
        """Insert ``bucket`` when it has no id yet, otherwise replace the stored row."""
        self.is_dirty = True

        if bucket["id"] is None:
            bucket["id"] = generate_entity_id()
            self.buckets.append(deepcopy(bucket))
        else:
            index = [stored["id"] for stored in self.buckets].index(bucket["id"])
            if self._replaced is not None and index not in self._replaced:
                self._replaced[index] = (
                    self.buckets[index],
                    bucket["id"] in self._dirty_ids,
                )
            self.buckets[index] = deepcopy(bucket)
        self._dirty_ids.add(bucket["id"])

        return bucket["id"]


LABEL_TIME_BUCKET_REPO = LabelTimeBucketRepository()
