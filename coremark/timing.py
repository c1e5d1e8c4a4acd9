"""Wall-clock timing of the benchmark in millisecond ticks."""

from __future__ import annotations

import time
from collections.abc import Callable
from types import TracebackType

__all__ = [
    "NSECS_PER_SEC",
    "TIMER_RES_DIVIDER",
    "TICKS_PER_SEC",
    "DEFAULT_NUM_CONTEXTS",
    "Timer",
    "time_in_secs",
]

NSECS_PER_SEC = 1_000_000_000
TIMER_RES_DIVIDER = 1_000_000
TICKS_PER_SEC = NSECS_PER_SEC // TIMER_RES_DIVIDER
DEFAULT_NUM_CONTEXTS = 1


def _trunc_div(value: int, divisor: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(value) // divisor
    return -quotient if value < 0 else quotient


class Timer:
    """Measures the time between :meth:`start` and :meth:`stop` in ticks.

    ``clock`` returns the current time in nanoseconds; it defaults to the
    real-time system clock.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns) -> None:
        self._clock = clock
        self._start: int | None = None
        self._stop: int | None = None

    def start(self) -> None:
        """Record the start of the timed section."""
        self._start = self._clock()
        self._stop = None

    def stop(self) -> None:
        """Record the end of the timed section."""
        if self._start is None:
            raise RuntimeError("timer was stopped before it was started")
        self._stop = self._clock()

    def ticks(self) -> int:
        """Return the elapsed time in ticks of 1/TICKS_PER_SEC seconds."""
        if self._start is None or self._stop is None:
            raise RuntimeError("timer has not been started and stopped")
        start_sec, start_nsec = divmod(self._start, NSECS_PER_SEC)
        stop_sec, stop_nsec = divmod(self._stop, NSECS_PER_SEC)
        return (stop_sec - start_sec) * TICKS_PER_SEC + _trunc_div(
            stop_nsec - start_nsec, TIMER_RES_DIVIDER
        )

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


def time_in_secs(ticks: int) -> float:
    """Convert a tick count from :meth:`Timer.ticks` to seconds."""
    return ticks / TICKS_PER_SEC