"""Metadata for the built-in conductor modes."""

from __future__ import annotations

from .types import ModeKey, ModeMetadata

FIXED_MODE = ModeMetadata(
    key=ModeKey.FIXED.value,
    label="Fixed",
    name="Fixed Timespan Mode",
    description="Query and explore data that falls between two fixed datetimes.",
    glyph="icon-calendar",
)

REALTIME_MODE = ModeMetadata(
    key=ModeKey.REALTIME.value,
    label="Real-time",
    name="Real-time Mode",
    description=(
        "Monitor real-time streaming data as it comes in. The conductor and "
        "displays will automatically advance themselves based on a UTC clock."
    ),
    glyph="icon-clock",
)

LAD_MODE = ModeMetadata(
    key=ModeKey.LAD.value,
    label="LAD",
    name="LAD Mode",
    description=(
        "Latest Available Data mode monitors real-time streaming data as it "
        "comes in. The conductor and displays will only advance when data "
        "becomes available."
    ),
    glyph="icon-database",
)

# Modes that are only offered when a time system has a matching tick source.
TICKING_MODES: tuple[ModeMetadata, ...] = (REALTIME_MODE, LAD_MODE)
