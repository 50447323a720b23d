"""
Conductor view service.

Exposes the parts of conductor state that are not held by the conductor
itself: the available modes, the active mode and its deltas. Switching mode
tears down the active :class:`ModeController` and builds a fresh one.

Modes:

- ``fixed``: bounds do not change with time; always available.
- ``realtime``: bounds advance with a clock. Offered only when some time
  system has a ``realtime`` tick source.
- ``LAD`` (latest available data): bounds advance when data arrives.
  Offered only when some time system has a ``LAD`` tick source.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from ..domain.interfaces import Conductor, TickSource, TimeSystem
from ..domain.modes import FIXED_MODE, TICKING_MODES
from ..domain.types import Deltas, ModeKey, ModeMetadata, TimeSystemDefaults
from ..infra.exceptions import NoActiveModeError, UnknownModeError
from ..infra.settings import settings
from .mode import ModeController, supports_mode

logger = logging.getLogger(__name__)


def _contains(time_systems: Sequence[TimeSystem], time_system: TimeSystem) -> bool:
    key = time_system.metadata.key
    return any(candidate.metadata.key == key for candidate in time_systems)


class ConductorViewService:
    """Mode selection on top of a shared conductor."""

    def __init__(
        self,
        conductor: Conductor,
        time_systems: Sequence[TimeSystem],
        fallback_defaults: TimeSystemDefaults | None = None,
    ) -> None:
        """
        Args:
            conductor: The shared conductor.
            time_systems: Registered time systems, in preference order.
            fallback_defaults: Defaults for time systems that supply none.
        """
        self._conductor = conductor
        self._time_systems = tuple(time_systems)
        self._fallback_defaults = fallback_defaults or settings.fallback_defaults()
        self._mode: ModeController | None = None

        modes: dict[str, ModeMetadata] = {FIXED_MODE.key: FIXED_MODE}
        for metadata in TICKING_MODES:
            if any(supports_mode(ts, metadata.key) for ts in self._time_systems):
                modes[metadata.key] = metadata
        self._available_modes: Mapping[str, ModeMetadata] = MappingProxyType(modes)

    @property
    def available_modes(self) -> Mapping[str, ModeMetadata]:
        """Modes that can be selected, keyed by mode key. Never changes."""
        return self._available_modes

    @property
    def mode(self) -> str | None:
        """Key of the active mode, or ``None`` before a mode is set."""
        return self._mode.metadata.key if self._mode is not None else None

    @property
    def controller(self) -> ModeController | None:
        return self._mode

    def set_mode(self, mode_key: str | ModeKey) -> str:
        """Activate ``mode_key``.

        The previous controller is destroyed before the new one is built. If
        the conductor's time system is missing or unsupported by the new mode,
        the first supported time system is selected with its default bounds.

        Raises:
            UnknownModeError: ``mode_key`` is not in :attr:`available_modes`.
                Nothing is changed in that case.
        """
        if isinstance(mode_key, ModeKey):
            mode_key = mode_key.value
        metadata = self._available_modes.get(mode_key)
        if metadata is None:
            raise UnknownModeError(
                f"Unknown mode {mode_key!r}; available: {', '.join(self._available_modes)}"
            )

        previous = self.mode
        if self._mode is not None:
            self._mode.destroy()
        self._mode = ModeController(
            metadata, self._conductor, self._time_systems, self._fallback_defaults
        )
        logger.info("Conductor mode changed from %s to %s", previous, mode_key)

        time_system = self._conductor.time_system
        available = self._mode.available_time_systems
        if time_system is None or not _contains(available, time_system):
            if not available:
                logger.warning("No time system supports mode %s", mode_key)
                return mode_key
            time_system = available[0]
            defaults = time_system.defaults() or self._fallback_defaults
            self._conductor.set_time_system(time_system, defaults.bounds)

        return mode_key

    @property
    def available_time_systems(self) -> tuple[TimeSystem, ...]:
        """Time systems usable in the active mode; empty before a mode is set."""
        if self._mode is None:
            return ()
        return self._mode.available_time_systems

    @property
    def tick_source(self) -> TickSource | None:
        return self._mode.tick_source if self._mode is not None else None

    @property
    def available_tick_sources(self) -> tuple[TickSource, ...]:
        if self._mode is None:
            return ()
        return self._mode.available_tick_sources

    @property
    def deltas(self) -> Deltas | None:
        """Offsets from the latest tick used to derive bounds.

        ``start`` is subtracted from the tick value for the start bound;
        ``end`` is added to it for the end bound. ``None`` in fixed mode.
        """
        return self._require_mode().deltas

    def set_deltas(self, deltas: Deltas) -> Deltas:
        return self._require_mode().set_deltas(deltas)

    def destroy(self) -> None:
        """Tear down the active mode and stop following."""
        if self._mode is None:
            return
        self._mode.destroy()
        self._mode = None
        self._conductor.set_follow(False)

    def _require_mode(self) -> ModeController:
        if self._mode is None:
            raise NoActiveModeError("No conductor mode is active")
        return self._mode
