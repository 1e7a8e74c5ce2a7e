"""Roster validation applied before a sensor set reaches the engine."""

from __future__ import annotations

import warnings
from typing import Iterable

from odsynth.domain.errors import EmptyRosterWarning, InvalidParameterError
from odsynth.domain.models import MeasurementPoint


def validate_roster(points: Iterable[MeasurementPoint]) -> tuple[MeasurementPoint, ...]:
    """Freeze a roster into a tuple, rejecting duplicate ids and warning when empty."""
    roster = tuple(points)
    seen: set[str] = set()
    duplicates: list[str] = []
    for point in roster:
        if not isinstance(point, MeasurementPoint):
            raise InvalidParameterError(f"roster entries must be MeasurementPoint, got {type(point).__name__}")
        if point.id in seen:
            duplicates.append(point.id)
        seen.add(point.id)

    if duplicates:
        raise InvalidParameterError(f"duplicate sensor ids in roster: {', '.join(sorted(set(duplicates)))}")

    if not roster:
        warnings.warn(
            "sensor roster is empty; displacement queries will return zero vectors",
            EmptyRosterWarning,
            stacklevel=2,
        )
    return roster
