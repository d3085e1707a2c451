# SPDX-License-Identifier: MIT

from chronoplan.model.entity_id import EntityId
from chronoplan.model.entity_type import EntityType
from chronoplan.model.label_time_bucket import BucketType, LabelTimeBucket


def get_label_time_bucket_template(
    owner_id: EntityId,
    label_id: EntityId,
    bucket_type: BucketType,
    bucket_year: int,
    bucket_value: int,
) -> LabelTimeBucket:
    return {
        "id": None,
        "entity_type": EntityType.LABEL_TIME_BUCKET,
        "owner_id": owner_id,
        "label_id": label_id,
        "bucket_type": bucket_type,
        "bucket_year": bucket_year,
        "bucket_value": bucket_value,
        "duration_minutes": 0,
    }
