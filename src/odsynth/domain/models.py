"""Core value types for sensor rosters and per-axis vibration waveforms."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from math import isfinite
from typing import Iterable

from odsynth.domain.errors import InvalidParameterError


class Axis(StrEnum):
    """Measurement axis of one sensor, mapped to x/y/z of the local frame."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    AXIAL = "axial"


class AppMode(StrEnum):
    """Which roster the application is currently visualizing."""

    ODS = "ods"
    ORBIT = "orbit"


AXIS_ORDER: tuple[Axis, ...] = (Axis.HORIZONTAL, Axis.VERTICAL, Axis.AXIAL)


@dataclass(frozen=True, slots=True)
class Harmonic:
    """Harmonic (or sub-synchronous) component relative to the fundamental."""

    order: float
    amplitude_ratio: float
    phase_shift: float = 0.0

    def __post_init__(self) -> None:
        _require_finite("order", self.order)
        _require_finite("amplitude_ratio", self.amplitude_ratio)
        _require_finite("phase_shift", self.phase_shift)
        if self.order <= 0:
            raise InvalidParameterError("harmonic order must be > 0")
        if self.amplitude_ratio < 0:
            raise InvalidParameterError("amplitude_ratio must be >= 0")


@dataclass(frozen=True, slots=True)
class VibrationComponent:
    """Time-domain waveform parameters for one axis at one sensor.

    ``amplitude`` is the fundamental (1X) peak, ``phase`` is in degrees and
    ``noise`` is the amplitude of the fixed non-synchronous buzz component.
    """

    amplitude: float = 0.0
    phase: float = 0.0
    harmonics: tuple[Harmonic, ...] = ()
    noise: float = 0.0

    def __post_init__(self) -> None:
        _require_finite("amplitude", self.amplitude)
        _require_finite("phase", self.phase)
        _require_finite("noise", self.noise)
        if self.amplitude < 0:
            raise InvalidParameterError("amplitude must be >= 0")
        if self.noise < 0:
            raise InvalidParameterError("noise must be >= 0")

        harmonics = tuple(self.harmonics)
        for harmonic in harmonics:
            if not isinstance(harmonic, Harmonic):
                raise InvalidParameterError(f"harmonics must contain Harmonic values, got {type(harmonic).__name__}")
        object.__setattr__(self, "harmonics", harmonics)


@dataclass(frozen=True, slots=True)
class MeasurementPoint:
    """Sensor at a fixed rest position with three measured axes."""

    id: str
    position: tuple[float, float, float]
    horizontal: VibrationComponent = field(default_factory=VibrationComponent)
    vertical: VibrationComponent = field(default_factory=VibrationComponent)
    axial: VibrationComponent = field(default_factory=VibrationComponent)
    label: str = ""
    is_reference: bool = False

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise InvalidParameterError("sensor id must not be empty")

        position = tuple(float(value) for value in self.position)
        if len(position) != 3:
            raise InvalidParameterError(f"position of {self.id} must have exactly 3 coordinates")
        if not all(isfinite(value) for value in position):
            raise InvalidParameterError(f"position of {self.id} must be finite")
        object.__setattr__(self, "position", position)

    def component(self, axis: Axis) -> VibrationComponent:
        """Return the waveform parameters measured on ``axis``."""
        return getattr(self, Axis(axis).value)

    def components(self) -> tuple[VibrationComponent, VibrationComponent, VibrationComponent]:
        """Return horizontal, vertical and axial components in x/y/z order."""
        return (self.horizontal, self.vertical, self.axial)

    def with_components(self, updates: dict[Axis, VibrationComponent]) -> MeasurementPoint:
        """Return a copy with the given axes replaced."""
        return replace(self, **{Axis(axis).value: comp for axis, comp in updates.items()})


def harmonics_from_triples(values: Iterable[tuple[float, float, float]]) -> tuple[Harmonic, ...]:
    """Build harmonics from ``(order, amplitude_ratio, phase_shift)`` triples."""
    return tuple(Harmonic(order=o, amplitude_ratio=r, phase_shift=p) for o, r, p in values)


def _require_finite(name: str, value: float) -> None:
    if not isfinite(value):
        raise InvalidParameterError(f"{name} must be finite")
