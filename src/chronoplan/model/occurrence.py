# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class Occurrence(TypedDict):
    start: pendulum.DateTime
    end: Optional[pendulum.DateTime]
