# SPDX-License-Identifier: MIT


class EntityType:
    EVENT = "event"
    RECURRING_EVENT = "recurring_event"
    LABEL_TIME_BUCKET = "label_time_bucket"
    BADGE = "badge"
