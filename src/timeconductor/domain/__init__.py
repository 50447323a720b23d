"""Domain types and collaborator contracts."""

from .interfaces import Conductor, TickSource, TimeSystem
from .modes import FIXED_MODE, LAD_MODE, REALTIME_MODE
from .types import (
    Bounds,
    Deltas,
    ModeKey,
    ModeMetadata,
    TickSourceMetadata,
    TimeSystemDefaults,
    TimeSystemMetadata,
)

__all__ = [
    "Bounds",
    "Conductor",
    "Deltas",
    "FIXED_MODE",
    "LAD_MODE",
    "ModeKey",
    "ModeMetadata",
    "REALTIME_MODE",
    "TickSource",
    "TickSourceMetadata",
    "TimeSystem",
    "TimeSystemDefaults",
    "TimeSystemMetadata",
]
