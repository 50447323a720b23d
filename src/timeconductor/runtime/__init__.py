"""Runtime components: the shared conductor, mode controllers and tick sources."""

from .clock import MasterClock, RealTimeMasterClock, SteppedMasterClock
from .conductor import EVENT_BOUNDS, EVENT_FOLLOW, EVENT_TIME_SYSTEM, TimeConductor
from .mode import ModeController
from .tick_sources import LatestDataTickSource, LocalClockTickSource
from .time_systems import StaticTimeSystem, UTCTimeSystem
from .view_service import ConductorViewService

__all__ = [
    "ConductorViewService",
    "EVENT_BOUNDS",
    "EVENT_FOLLOW",
    "EVENT_TIME_SYSTEM",
    "LatestDataTickSource",
    "LocalClockTickSource",
    "MasterClock",
    "ModeController",
    "RealTimeMasterClock",
    "StaticTimeSystem",
    "SteppedMasterClock",
    "TimeConductor",
    "UTCTimeSystem",
]
