"""
Custom exceptions for time conductor operations.

This module provides the exception classes raised by the conductor, the mode
controller and the view service.
"""


class TimeConductorError(Exception):
    """Base exception for all time conductor errors."""

    pass


class ValidationError(TimeConductorError):
    """Raised when bounds or deltas fail validation."""

    pass


class UnknownModeError(ValidationError):
    """Raised when a mode key is not among the available modes."""

    pass


class ModeError(TimeConductorError):
    """Raised when an operation is not supported by the active mode."""

    pass


class NoActiveModeError(ModeError):
    """Raised when a mode-scoped operation is invoked before any mode is set."""

    pass
