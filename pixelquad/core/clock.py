# pixelquad/core/clock.py
from __future__ import annotations

import time
from typing import Protocol

from pixelquad.errors import ClockError


class Clock(Protocol):
    def now(self) -> float: ...


class MonotonicClock:
    """Wall-time source in fractional seconds."""

    def now(self) -> float:
        try:
            return time.perf_counter()
        except (OSError, ValueError) as e:
            raise ClockError(f"Unable to read system time: {e}") from e


class ElapsedClock:
    """
    Seconds elapsed since `start()` on top of another clock.

    Used as the animation parameter so frames do not depend on the epoch
    of the underlying time source.
    """

    def __init__(self, source: Clock):
        self._source = source
        self._origin: float | None = None

    def start(self) -> None:
        self._origin = self._source.now()

    def now(self) -> float:
        if self._origin is None:
            self.start()
        assert self._origin is not None
        return self._source.now() - self._origin


class ManualClock:
    """Deterministic clock driven by hand."""

    def __init__(self, start: float = 0.0):
        self._t = float(start)

    def now(self) -> float:
        return self._t

    def advance(self, dt: float) -> None:
        if dt < 0.0:
            raise ValueError("ManualClock cannot move backwards")
        self._t += dt

    def set(self, t: float) -> None:
        if t < self._t:
            raise ValueError("ManualClock cannot move backwards")
        self._t = float(t)
