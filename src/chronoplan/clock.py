# SPDX-License-Identifier: MIT

from typing import Callable, Protocol

import pendulum

from chronoplan.model.user import User


class Clock:
    """Supplies "now" in a fixed zone from an instant source."""

    def __init__(
        self, zone: str, instant_source: Callable[[], pendulum.DateTime]
    ) -> None:
        self.zone = zone
        self._instant_source = instant_source
        # Resolve eagerly so an unknown zone fails when the clock is handed out
        pendulum.timezone(zone)

    def now(self) -> pendulum.DateTime:
        return self._instant_source().in_tz(self.zone)


class ClockProvider(Protocol):
    def get_clock_for_user(self, user: User) -> Clock: ...

    def get_clock_for_zone(self, zone: str) -> Clock: ...


class SystemClockProvider:
    def get_clock_for_user(self, user: User) -> Clock:
        return self.get_clock_for_zone(user["timezone"])

    def get_clock_for_zone(self, zone: str) -> Clock:
        return Clock(zone, lambda: pendulum.now("UTC"))


class FixedClockProvider:
    """Clock provider pinned to one instant."""

    def __init__(self, instant: pendulum.DateTime) -> None:
        self.instant = instant

    def get_clock_for_user(self, user: User) -> Clock:
        return self.get_clock_for_zone(user["timezone"])

    def get_clock_for_zone(self, zone: str) -> Clock:
        return Clock(zone, lambda: self.instant)
