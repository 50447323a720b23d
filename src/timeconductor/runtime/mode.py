"""Mode-specific conductor behaviour.

A :class:`ModeController` exists for exactly as long as its mode is active.
It reacts to time-system changes on the shared conductor, owns the single
tick-source subscription for its mode and derives bounds from ticks and
deltas:

- on tick ``t``: ``bounds = (t - deltas.start, t + deltas.end)``, or
  ``(t, t)`` when no deltas are set;
- on a delta change the raw end instant is recovered from the current bounds
  (by removing the previous end delta) and the window is rebuilt around it,
  so repeated edits never drift.

Ticks may arrive on a tick source's own thread. All state changes go through
one re-entrant lock.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from threading import RLock

from ..domain.interfaces import Conductor, TickSource, TimeSystem, Unlisten
from ..domain.types import Bounds, Deltas, ModeKey, ModeMetadata, TimeSystemDefaults
from ..infra.exceptions import ModeError
from ..infra.settings import settings
from .conductor import EVENT_TIME_SYSTEM

logger = logging.getLogger(__name__)


def supports_mode(time_system: TimeSystem, mode_key: str) -> bool:
    """True if ``time_system`` has at least one tick source tagged ``mode_key``."""
    return any(source.metadata.mode == mode_key for source in time_system.tick_sources() or ())


class ModeController:
    """Conductor behaviour for one mode.

    Args:
        metadata: The mode this controller implements.
        conductor: Shared conductor receiving bounds and follow updates.
        time_systems: All registered time systems.
        fallback_defaults: Defaults used for time systems that supply none.
            Defaults to the configured fallback (zeroed bounds and deltas).
    """

    def __init__(
        self,
        metadata: ModeMetadata,
        conductor: Conductor,
        time_systems: Sequence[TimeSystem],
        fallback_defaults: TimeSystemDefaults | None = None,
    ) -> None:
        self._metadata = metadata
        self._conductor = conductor
        self._fallback_defaults = fallback_defaults or settings.fallback_defaults()
        self._deltas: Deltas | None = None
        self._tick_source: TickSource | None = None
        self._unlisten: Unlisten | None = None
        self._available_tick_sources: tuple[TickSource, ...] = ()
        self._destroyed = False
        self._lock = RLock()

        if self.is_fixed:
            # Fixed mode supports every time system
            self._available_time_systems = tuple(time_systems)
        else:
            self._available_time_systems = tuple(
                ts for ts in time_systems if supports_mode(ts, metadata.key)
            )

        # Registered and removed by identity in destroy()
        self._time_system_handler = self.change_time_system

        current = conductor.time_system
        if current is not None:
            self.change_time_system(current)

        conductor.on(EVENT_TIME_SYSTEM, self._time_system_handler)

    @property
    def metadata(self) -> ModeMetadata:
        return self._metadata

    @property
    def is_fixed(self) -> bool:
        return self._metadata.key == ModeKey.FIXED.value

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def available_time_systems(self) -> tuple[TimeSystem, ...]:
        return self._available_time_systems

    @property
    def available_tick_sources(self) -> tuple[TickSource, ...]:
        """Tick sources of the current time system that support this mode."""
        return self._available_tick_sources

    # Time system ------------------------------------------------------------
    def change_time_system(self, time_system: TimeSystem) -> None:
        """Apply the defaults of ``time_system`` and pick its tick source.

        Fixed mode applies the default bounds only; its deltas stay unset.
        Events reaching a destroyed controller are ignored.
        """
        with self._lock:
            if self._destroyed:
                return
            defaults = time_system.defaults()
            if defaults is None:
                logger.warning(
                    "Time system %s has no defaults; using fallback bounds %s",
                    time_system.metadata.key,
                    self._fallback_defaults.bounds,
                )
                defaults = self._fallback_defaults

            self._conductor.set_bounds(defaults.bounds)
            if not self.is_fixed:
                self.set_deltas(defaults.deltas)

            key = self._metadata.key
            self._available_tick_sources = tuple(
                source
                for source in time_system.tick_sources() or ()
                if source.metadata.mode == key
            )
            if not self._available_tick_sources and not self.is_fixed:
                logger.info(
                    "Time system %s has no tick source for mode %s",
                    time_system.metadata.key,
                    key,
                )

            logger.debug("Mode %s applied time system %s", key, time_system.metadata.key)
            self.set_tick_source(
                self._available_tick_sources[0] if self._available_tick_sources else None
            )

    # Tick source ------------------------------------------------------------
    @property
    def tick_source(self) -> TickSource | None:
        return self._tick_source

    def set_tick_source(self, tick_source: TickSource | None) -> TickSource | None:
        """Follow ``tick_source``, or stop following when ``None``.

        Any previous subscription is released before the new one is made.
        """
        with self._lock:
            if self._destroyed:
                raise ModeError(f"Mode controller {self._metadata.key} has been destroyed")

            self._release_tick_source()
            self._tick_source = tick_source
            if tick_source is not None:
                self._unlisten = tick_source.listen(self._tick_handler(tick_source))
                logger.debug("Following tick source %s", tick_source.metadata.key)
                self._conductor.set_follow(True)
            else:
                self._conductor.set_follow(False)
            return tick_source

    def _release_tick_source(self) -> None:
        if self._unlisten is not None:
            self._unlisten()
            self._unlisten = None
            if self._tick_source is not None:
                logger.debug("Released tick source %s", self._tick_source.metadata.key)

    def _tick_handler(self, tick_source: TickSource):
        def on_tick(time: float) -> None:
            with self._lock:
                # Drop ticks already in flight when the subscription was released
                if self._destroyed or self._tick_source is not tick_source:
                    return
                self._tick(time)

        return on_tick

    def _tick(self, time: float) -> None:
        deltas = self._deltas
        start = end = time
        if deltas is not None:
            start = time - deltas.start
            end = time + deltas.end
        self._conductor.set_bounds(Bounds(start=start, end=end))

    # Deltas -----------------------------------------------------------------
    @property
    def deltas(self) -> Deltas | None:
        return self._deltas

    def set_deltas(self, deltas: Deltas) -> Deltas:
        """Set new deltas and rebuild the bounds around the same raw end instant.

        Raises:
            ModeError: in fixed mode, or when the conductor has no bounds yet.
        """
        with self._lock:
            if self.is_fixed:
                raise ModeError("Deltas are not supported in fixed mode")
            bounds = self._conductor.bounds
            if bounds is None:
                raise ModeError("Cannot apply deltas before bounds are established")

            raw_end = bounds.end
            if self._deltas is not None:
                raw_end -= self._deltas.end

            self._deltas = deltas
            self._conductor.set_bounds(
                Bounds(start=raw_end - deltas.start, end=raw_end + deltas.end)
            )
            return deltas

    # Lifecycle --------------------------------------------------------------
    def destroy(self) -> None:
        """Stop listening to the conductor and release the tick source."""
        with self._lock:
            if self._destroyed:
                return
            self._destroyed = True
            self._conductor.off(EVENT_TIME_SYSTEM, self._time_system_handler)
            self._release_tick_source()
            self._tick_source = None
            logger.debug("Destroyed mode controller %s", self._metadata.key)
