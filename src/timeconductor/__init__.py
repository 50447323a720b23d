"""Time conductor mode engine."""

__version__ = "0.1.0"
