"""Millisecond clocks for decision timing."""

import time

from pursuit.types import Millis


class Clock:
    """Monotonic millisecond clock.

    Rules read ``now_ms()`` to age sightings and memories.
    """

    def __init__(self) -> None:
        self._origin = time.perf_counter()

    def now_ms(self) -> Millis:
        """Milliseconds elapsed since the clock was created."""
        return Millis((time.perf_counter() - self._origin) * 1000.0)

    def __call__(self) -> Millis:
        return self.now_ms()


class ManualClock(Clock):
    """Clock that only moves when told to.

    Used by headless simulations and tests that need exact ages.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        super().__init__()
        self._now = Millis(start_ms)

    def now_ms(self) -> Millis:
        return self._now

    def advance(self, delta_ms: float) -> Millis:
        """Move time forward by ``delta_ms`` and return the new reading."""
        if delta_ms < 0:
            msg = "ManualClock cannot run backwards"
            raise ValueError(msg)
        self._now = Millis(self._now + delta_ms)
        return self._now
