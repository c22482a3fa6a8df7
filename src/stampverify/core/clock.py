"""Clocks used for session expiry."""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        """Return the current reading in seconds."""
        ...


class MonotonicClock:
    """Wall-independent clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to, for driving expiry in tests."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds
