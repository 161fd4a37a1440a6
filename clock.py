# clock.py
#
# Description:
# Time sources for the scheduling engine. The engine never reads the wall
# clock itself; callers hand it a Clock so that due-time arithmetic can be
# checked without waiting on real time.
#

import datetime
from typing import Optional, Protocol


class Clock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime.datetime:
        ...


class SystemClock:
    """Reads the local wall clock."""

    def now(self) -> datetime.datetime:
        return datetime.datetime.now()


class FixedClock:
    """
    A clock frozen at a given instant that can be moved forward by hand.

    Used by the tests and handy for demos where minutes should pass instantly.
    """

    def __init__(self, start: Optional[datetime.datetime] = None):
        self._now = start or datetime.datetime(2024, 1, 1, 9, 0)

    def now(self) -> datetime.datetime:
        return self._now

    def advance(self, minutes: int = 0, seconds: int = 0) -> datetime.datetime:
        """Move the clock forward and return the new time."""
        self._now = self._now + datetime.timedelta(minutes=minutes, seconds=seconds)
        return self._now
