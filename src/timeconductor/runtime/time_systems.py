"""Reference time systems."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..domain.interfaces import TickSource
from ..domain.types import Bounds, Deltas, TimeSystemDefaults, TimeSystemMetadata
from ..infra.settings import Settings, settings as default_settings
from .clock import MasterClock


@dataclass(frozen=True)
class StaticTimeSystem:
    """Time system with fixed defaults and tick sources."""

    metadata: TimeSystemMetadata
    default_values: TimeSystemDefaults | None = None
    sources: tuple[TickSource, ...] = field(default_factory=tuple)

    def defaults(self) -> TimeSystemDefaults | None:
        return self.default_values

    def tick_sources(self) -> Sequence[TickSource]:
        return self.sources


class UTCTimeSystem:
    """UTC milliseconds. Defaults end at the clock's current time.

    The default window is ``window_ms`` long; default deltas come from
    settings (15 minutes before, nothing after, unless configured).
    """

    def __init__(
        self,
        clock: MasterClock,
        tick_sources: Sequence[TickSource] = (),
        config: Settings | None = None,
    ) -> None:
        self.metadata = TimeSystemMetadata(key="utc", name="UTC")
        self.clock = clock
        self._tick_sources = tuple(tick_sources)
        self._config = config or default_settings

    def defaults(self) -> TimeSystemDefaults:
        now_ms = self.clock.now() * 1000.0
        return TimeSystemDefaults(
            bounds=Bounds(start=now_ms - self._config.utc_window_ms, end=now_ms),
            deltas=Deltas(
                start=self._config.utc_delta_start_ms,
                end=self._config.utc_delta_end_ms,
            ),
        )

    def tick_sources(self) -> Sequence[TickSource]:
        return self._tick_sources
