"""Domain models and boundary validation for vibration field synthesis."""

from odsynth.domain.errors import EmptyRosterWarning, InvalidParameterError
from odsynth.domain.models import (
    AXIS_ORDER,
    AppMode,
    Axis,
    Harmonic,
    MeasurementPoint,
    VibrationComponent,
    harmonics_from_triples,
)
from odsynth.domain.validation import validate_roster

__all__ = [
    "AXIS_ORDER",
    "AppMode",
    "Axis",
    "EmptyRosterWarning",
    "Harmonic",
    "InvalidParameterError",
    "MeasurementPoint",
    "VibrationComponent",
    "harmonics_from_triples",
    "validate_roster",
]
