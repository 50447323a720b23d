"""Shared time conductor.

The conductor holds the single displayed :class:`Bounds` value, the selected
time system and the *follow* flag. Views observe it through ``on``/``off``
listeners; only the active mode controller writes to it.

Events:

- ``time_system``: ``handler(time_system)`` after the time system and the
  accompanying bounds have been applied.
- ``bounds``: ``handler(bounds)`` after every accepted bounds update.
- ``follow``: ``handler(follow)`` after the follow flag is set.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from threading import RLock

from ..domain.interfaces import EventHandler, TimeSystem
from ..domain.types import Bounds
from ..infra.exceptions import ValidationError

EVENT_BOUNDS = "bounds"
EVENT_TIME_SYSTEM = "time_system"
EVENT_FOLLOW = "follow"

logger = logging.getLogger(__name__)


def validate_bounds(bounds: Bounds) -> None:
    if bounds.start is None or bounds.end is None:
        raise ValidationError("Start and end must be specified as numeric values")
    if bounds.start > bounds.end:
        raise ValidationError(
            f"Specified start {bounds.start} exceeds end bound {bounds.end}"
        )


class TimeConductor:
    """In-memory conductor implementing the :class:`Conductor` contract."""

    def __init__(
        self,
        time_system: TimeSystem | None = None,
        bounds: Bounds | None = None,
    ) -> None:
        if bounds is not None:
            validate_bounds(bounds)
        self._time_system = time_system
        self._bounds = bounds
        self._follow = False
        self._listeners: dict[str, list[EventHandler]] = defaultdict(list)
        self._lock = RLock()

    # Listener management ----------------------------------------------------
    def on(self, event: str, handler: EventHandler) -> None:
        with self._lock:
            self._listeners[event].append(handler)

    def off(self, event: str, handler: EventHandler) -> None:
        with self._lock:
            handlers = self._listeners.get(event)
            if handlers and handler in handlers:
                handlers.remove(handler)

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._listeners.get(event, ()))

    def _emit(self, event: str, *args: object) -> None:
        # Handlers run outside the lock; they commonly write back to the conductor.
        with self._lock:
            snapshot = list(self._listeners.get(event, ()))
        for handler in snapshot:
            handler(*args)

    # Bounds -----------------------------------------------------------------
    @property
    def bounds(self) -> Bounds | None:
        with self._lock:
            return self._bounds

    def set_bounds(self, bounds: Bounds) -> Bounds:
        """Replace the displayed bounds. Raises :class:`ValidationError` if invalid."""
        validate_bounds(bounds)
        with self._lock:
            self._bounds = bounds
        self._emit(EVENT_BOUNDS, bounds)
        return bounds

    # Time system ------------------------------------------------------------
    @property
    def time_system(self) -> TimeSystem | None:
        with self._lock:
            return self._time_system

    def set_time_system(self, time_system: TimeSystem, bounds: Bounds) -> TimeSystem:
        """Select a time system and apply ``bounds`` expressed in its units.

        The supplied bounds are applied first, so ``time_system`` listeners
        see them and may derive new bounds from them.
        """
        validate_bounds(bounds)
        with self._lock:
            self._time_system = time_system
        logger.debug("Time system changed to %s", time_system.metadata.key)
        self.set_bounds(bounds)
        self._emit(EVENT_TIME_SYSTEM, time_system)
        return time_system

    # Follow -----------------------------------------------------------------
    @property
    def follow(self) -> bool:
        with self._lock:
            return self._follow

    def set_follow(self, follow: bool) -> bool:
        with self._lock:
            self._follow = follow
        self._emit(EVENT_FOLLOW, follow)
        return follow
