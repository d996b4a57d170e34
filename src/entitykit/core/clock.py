"""Clock abstraction for entity timestamps.

WallClock: real wall-clock time
FixedClock: deterministic clock for tests, advanced explicitly

Entity helpers never call datetime.now() directly — they take an IClock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current time as timezone-aware UTC datetime."""
        ...


class WallClock:
    """Real wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Deterministic clock for tests.

    Time advances only when explicitly set or advanced.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        if self._time.tzinfo is None:
            raise ValueError("FixedClock requires a timezone-aware start time")

    def now(self) -> datetime:
        return self._time

    def set_time(self, t: datetime) -> None:
        """Move the clock. Must be monotonically increasing."""
        if t < self._time:
            raise ValueError(
                f"FixedClock cannot go backwards: {t} < {self._time}"
            )
        self._time = t

    def advance(self, seconds: float = 1.0) -> datetime:
        """Advance time by *seconds* and return the new time."""
        self.set_time(self._time + timedelta(seconds=seconds))
        return self._time


DEFAULT_CLOCK: IClock = WallClock()
