"""Collaborator contracts consumed by the mode engine.

Time systems, tick sources and the shared conductor are owned outside the
engine. The engine only relies on the members declared here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Callable, Protocol, runtime_checkable

from .types import Bounds, TickSourceMetadata, TimeSystemDefaults, TimeSystemMetadata

TickCallback = Callable[[float], None]
Unlisten = Callable[[], None]
EventHandler = Callable[..., Any]


@runtime_checkable
class TickSource(Protocol):
    """Producer of time values for one mode."""

    metadata: TickSourceMetadata

    def listen(self, callback: TickCallback) -> Unlisten:
        """Register ``callback`` for ticks and return a function that removes it."""


@runtime_checkable
class TimeSystem(Protocol):
    """A unit/domain for time values, e.g. UTC milliseconds."""

    metadata: TimeSystemMetadata

    def defaults(self) -> TimeSystemDefaults | None:
        """Default bounds and deltas, or ``None`` if the system has none."""

    def tick_sources(self) -> Sequence[TickSource]:
        """Tick sources able to drive this time system."""


@runtime_checkable
class Conductor(Protocol):
    """Shared holder of the displayed bounds and the selected time system."""

    @property
    def bounds(self) -> Bounds | None: ...

    def set_bounds(self, bounds: Bounds) -> Bounds: ...

    @property
    def time_system(self) -> TimeSystem | None: ...

    def set_time_system(self, time_system: TimeSystem, bounds: Bounds) -> TimeSystem: ...

    @property
    def follow(self) -> bool: ...

    def set_follow(self, follow: bool) -> bool: ...

    def on(self, event: str, handler: EventHandler) -> None: ...

    def off(self, event: str, handler: EventHandler) -> None: ...
