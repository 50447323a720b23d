"""Master clock abstractions used by tick sources.

A master clock supplies the instant a tick source reports. Clock time is in
seconds; tick sources convert it to the units of their time system.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Protocol, runtime_checkable

MonotonicFn = Callable[[], float]


@runtime_checkable
class MasterClock(Protocol):
    """Protocol implemented by master clock providers."""

    def now(self) -> float:
        """Return the current time in seconds."""


@dataclass
class RealTimeMasterClock:
    """Master clock anchored at ``start`` and advanced by a monotonic timer.

    Parameters
    ----------
    rate:
        Scale factor applied to elapsed monotonic time. Must be positive.
    start:
        Time (seconds) to begin counting from. Defaults to the current UNIX
        time so :meth:`now` tracks UTC without jumping backwards when the
        system clock is adjusted.
    monotonic_fn:
        Injectable monotonic function, defaults to :func:`time.perf_counter`.
    """

    rate: float = 1.0
    start: float = field(default_factory=time.time)
    monotonic_fn: MonotonicFn = field(default=time.perf_counter)

    def __post_init__(self) -> None:
        if self.rate <= 0.0:
            raise ValueError("rate must be greater than zero")
        self._origin_monotonic: float = self.monotonic_fn()

    def now(self) -> float:
        elapsed = max(0.0, self.monotonic_fn() - self._origin_monotonic)
        return self.start + elapsed * self.rate


class SteppedMasterClock:
    """Deterministic master clock used for tests and simulations.

    Time advances only when :meth:`advance` is called.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._current = start
        self._lock = Lock()

    def now(self) -> float:
        with self._lock:
            return self._current

    def advance(self, seconds: float) -> float:
        """Advance the clock by ``seconds`` (must be non-negative)."""
        if seconds < 0.0:
            raise ValueError("seconds must be non-negative")
        with self._lock:
            self._current += seconds
            return self._current
