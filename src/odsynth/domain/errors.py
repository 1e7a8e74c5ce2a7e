"""Boundary error taxonomy for vibration parameters and sensor rosters."""

from __future__ import annotations


class InvalidParameterError(ValueError):
    """Raised when a vibration parameter is rejected before reaching the engine."""


class EmptyRosterWarning(UserWarning):
    """Emitted when a roster without sensors is installed; evaluation yields zero vectors."""
