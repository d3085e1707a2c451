# SPDX-License-Identifier: MIT

import atexit

from chronoplan.repository.badge import BADGE_REPO
from chronoplan.repository.configuration import CONFIGURATION_REPO
from chronoplan.repository.event import EVENT_REPO
from chronoplan.repository.label_time_bucket import LABEL_TIME_BUCKET_REPO
from chronoplan.repository.recurring_event import RECURRING_EVENT_REPO


def flush_all() -> None:
    CONFIGURATION_REPO.flush()

    RECURRING_EVENT_REPO.flush()
    BADGE_REPO.flush()
    # Bucket increments go to disk before the events that record them
    LABEL_TIME_BUCKET_REPO.flush()
    EVENT_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_all)
