"""Reference tick sources.

- :class:`LocalClockTickSource` ticks at a fixed cadence with the time reported
  by a :class:`MasterClock` (``realtime`` mode).
- :class:`LatestDataTickSource` ticks when newer data arrives (``LAD`` mode).

Both deliver time values in milliseconds. Listeners are called on the thread
that produces the tick.
"""

from __future__ import annotations

import logging
import time
from threading import Event, Lock, Thread
from typing import Callable

from ..domain.interfaces import TickCallback, Unlisten
from ..domain.types import ModeKey, TickSourceMetadata
from .clock import MasterClock

SleepFn = Callable[[float], None]

logger = logging.getLogger(__name__)


class BaseTickSource:
    """Listener bookkeeping shared by the tick sources."""

    def __init__(self, metadata: TickSourceMetadata) -> None:
        self.metadata = metadata
        self._listeners: list[TickCallback] = []
        self._lock = Lock()

    def listen(self, callback: TickCallback) -> Unlisten:
        with self._lock:
            self._listeners.append(callback)

        def unlisten() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unlisten

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def _emit(self, t: float) -> bool:
        with self._lock:
            snapshot = list(self._listeners)
        for callback in snapshot:
            callback(t)
        return bool(snapshot)


class LocalClockTickSource(BaseTickSource):
    """Ticks with the master clock's time, in milliseconds.

    Parameters
    ----------
    clock:
        Clock read on every tick.
    interval_ms:
        Cadence of the background thread started by :meth:`start`.
    sleep_fn:
        Sleep function used between ticks. ``None`` disables the background
        loop's sleeping, for stepped tests that call :meth:`run_once`.
    """

    def __init__(
        self,
        clock: MasterClock,
        interval_ms: float = 1000,
        sleep_fn: SleepFn | None = time.sleep,
        key: str = "local",
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be greater than zero")
        super().__init__(
            TickSourceMetadata(key=key, mode=ModeKey.REALTIME.value, name="Local clock")
        )
        self.clock = clock
        self.interval_ms = interval_ms
        self.sleep_fn = sleep_fn
        self._stop_event = Event()
        self._thread: Thread | None = None

    def run_once(self) -> bool:
        """Emit one tick. Returns ``True`` if any listener received it."""
        return self._emit(self.clock.now() * 1000.0)

    def run_forever(self) -> None:
        """Tick until :meth:`stop` is called."""
        interval = self.interval_ms / 1000.0
        next_wall_tick = time.perf_counter()
        while not self._stop_event.is_set():
            self.run_once()
            if self.sleep_fn is None:
                continue
            next_wall_tick += interval
            remaining = next_wall_tick - time.perf_counter()
            if remaining > 0:
                self.sleep_fn(remaining)
            else:
                # Running late; reset the baseline instead of bursting.
                next_wall_tick = time.perf_counter()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = Thread(target=self.run_forever, name="tick-source", daemon=True)
        self._thread.start()
        logger.debug("Started local clock tick source %s", self.metadata.key)

    def stop(self, timeout: float | None = 1.0) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout=timeout)
            self._thread = None
        logger.debug("Stopped local clock tick source %s", self.metadata.key)


class LatestDataTickSource(BaseTickSource):
    """Ticks with the timestamp of the latest data received."""

    def __init__(self, key: str = "lad") -> None:
        super().__init__(
            TickSourceMetadata(key=key, mode=ModeKey.LAD.value, name="Latest available data")
        )
        self._latest: float | None = None

    @property
    def latest(self) -> float | None:
        return self._latest

    def push(self, timestamp: float) -> bool:
        """Record a data timestamp.

        Out-of-order data older than the latest value is dropped. Returns
        ``True`` when a tick was emitted.
        """
        with self._lock:
            if self._latest is not None and timestamp < self._latest:
                return False
            self._latest = timestamp
        self._emit(timestamp)
        return True
