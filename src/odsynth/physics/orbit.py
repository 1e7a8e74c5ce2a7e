"""Shaft-orbit (Lissajous) sampling from two orthogonal probe waveforms."""

from __future__ import annotations

from dataclasses import dataclass
from math import pi, radians
from typing import cast

import numpy as np
import numpy.typing as npt

from odsynth.domain.errors import InvalidParameterError
from odsynth.domain.models import VibrationComponent
from odsynth.physics.waveform import component_peak_bound, evaluate_component, sample_component


FloatArray = npt.NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class OrbitPlotPolicy:
    """Sampling window and viewport fit for the orbit plot.

    Two fundamental cycles are the default so sub-synchronous orders such as
    0.45X close a visible loop.
    """

    cycles: float = 2.0
    samples: int = 720
    headroom: float = 1.5
    viewport_size: float = 400.0
    viewport_fill: float = 0.4

    def __post_init__(self) -> None:
        if not self.cycles > 0:
            raise InvalidParameterError("cycles must be > 0")
        if self.samples < 2:
            raise InvalidParameterError("samples must be >= 2")
        if not self.headroom >= 1.0:
            raise InvalidParameterError("headroom must be >= 1")
        if not self.viewport_size > 0:
            raise InvalidParameterError("viewport_size must be > 0")
        if not 0 < self.viewport_fill <= 0.5:
            raise InvalidParameterError("viewport_fill must be in (0, 0.5]")


DEFAULT_ORBIT_POLICY = OrbitPlotPolicy()


@dataclass(frozen=True, slots=True)
class OrbitTrace:
    """Sampled orbit, keyphasor mark and plot scaling."""

    trajectory: FloatArray
    keyphasor_point: FloatArray
    scale: float
    pixels_per_unit: float
    viewport_size: float

    def to_viewport(self, points: npt.ArrayLike | None = None) -> FloatArray:
        """Map orbit coordinates to pixel coordinates, y pointing down."""
        xy = self.trajectory if points is None else np.asarray(points, dtype=np.float64)
        center = self.viewport_size / 2.0
        out = np.empty_like(xy, dtype=np.float64)
        out[..., 0] = center + xy[..., 0] * self.pixels_per_unit
        out[..., 1] = center - xy[..., 1] * self.pixels_per_unit
        return out


def orbit_times(policy: OrbitPlotPolicy = DEFAULT_ORBIT_POLICY) -> FloatArray:
    """Sample instants covering ``[0, cycles * 2*pi)``."""
    duration = policy.cycles * 2.0 * pi
    return cast(FloatArray, np.arange(policy.samples, dtype=np.float64) * (duration / policy.samples))


def sample_orbit(
    x: VibrationComponent,
    y: VibrationComponent,
    keyphasor_phase_deg: float = 0.0,
    policy: OrbitPlotPolicy = DEFAULT_ORBIT_POLICY,
) -> OrbitTrace:
    """Sample the shaft-centerline trajectory traced by probes ``x`` and ``y``.

    Time is expressed directly in radians of the fundamental (angular velocity
    1), so only the probes' phase relationships matter, never the RPM. The
    keyphasor mark sits at ``t = -keyphasor_phase``.
    """
    t = orbit_times(policy)
    trajectory = np.column_stack((sample_component(x, 1.0, t), sample_component(y, 1.0, t)))

    kp_time = -radians(keyphasor_phase_deg)
    keyphasor_point = np.asarray(
        (evaluate_component(x, 1.0, kp_time), evaluate_component(y, 1.0, kp_time)),
        dtype=np.float64,
    )

    scale = max(component_peak_bound(x), component_peak_bound(y)) * policy.headroom
    pixels_per_unit = (policy.viewport_size * policy.viewport_fill) / (scale or 1.0)

    return OrbitTrace(
        trajectory=cast(FloatArray, trajectory),
        keyphasor_point=keyphasor_point,
        scale=scale,
        pixels_per_unit=pixels_per_unit,
        viewport_size=policy.viewport_size,
    )
