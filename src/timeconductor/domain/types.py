"""Value types shared by the conductor, the mode controller and the view service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..infra.exceptions import ValidationError


class ModeKey(str, Enum):
    """Keys of the three conductor modes."""

    FIXED = "fixed"
    REALTIME = "realtime"
    LAD = "LAD"


@dataclass(frozen=True)
class Bounds:
    """The displayed time window, in time-system units."""

    start: float
    end: float


@dataclass(frozen=True)
class Deltas:
    """Offsets around a reference instant used to derive bounds.

    ``start`` is subtracted from the reference instant and ``end`` is added to
    it. Both are non-negative magnitudes.
    """

    start: float
    end: float

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise ValidationError(
                f"Deltas must be non-negative (start={self.start}, end={self.end})"
            )


@dataclass(frozen=True)
class TimeSystemDefaults:
    bounds: Bounds
    deltas: Deltas


@dataclass(frozen=True)
class TimeSystemMetadata:
    key: str
    name: str = ""


@dataclass(frozen=True)
class TickSourceMetadata:
    key: str
    mode: str
    name: str = ""


@dataclass(frozen=True)
class ModeMetadata:
    """Presentation details describing one conductor mode."""

    key: str
    label: str
    name: str
    description: str
    glyph: str
