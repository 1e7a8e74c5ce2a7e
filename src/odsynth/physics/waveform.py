"""Time-domain waveform of one measurement axis: fundamental, harmonics and buzz."""

from __future__ import annotations

from math import pi, radians, sin
from typing import cast

import numpy as np
import numpy.typing as npt

from odsynth.domain.models import VibrationComponent


FloatArray = npt.NDArray[np.float64]

# Non-synchronous buzz: two incommensurate tones well above the running-speed orders.
NOISE_ORDER = 25.0
NOISE_SECOND_TONE_RATIO = 1.3
NOISE_SECOND_TONE_GAIN = 0.5


def rpm_to_angular_velocity(rpm: float) -> float:
    """Convert revolutions per minute to rad/s."""
    return rpm * 2.0 * pi / 60.0


def evaluate_component(component: VibrationComponent, angular_velocity: float, time: float) -> float:
    """Evaluate the unscaled waveform value of ``component`` at ``time``.

    Gain and unit scaling are applied by callers so one waveform value can
    drive mm/s, micron or volt displays alike.
    """
    phase_rad = radians(component.phase)
    value = component.amplitude * sin(angular_velocity * time + phase_rad)

    for harmonic in component.harmonics:
        value += (component.amplitude * harmonic.amplitude_ratio) * sin(
            angular_velocity * harmonic.order * time + radians(component.phase + harmonic.phase_shift)
        )

    if component.noise > 0:
        noise_omega = angular_velocity * NOISE_ORDER
        value += component.noise * (
            sin(noise_omega * time) + NOISE_SECOND_TONE_GAIN * sin(noise_omega * NOISE_SECOND_TONE_RATIO * time)
        )

    return value


def sample_component(
    component: VibrationComponent,
    angular_velocity: float,
    times: npt.ArrayLike,
) -> FloatArray:
    """Vectorized :func:`evaluate_component` over an array of times."""
    t = np.asarray(times, dtype=np.float64)
    phase_rad = np.deg2rad(component.phase)
    values = component.amplitude * np.sin(angular_velocity * t + phase_rad)

    for harmonic in component.harmonics:
        values = values + (component.amplitude * harmonic.amplitude_ratio) * np.sin(
            angular_velocity * harmonic.order * t + np.deg2rad(component.phase + harmonic.phase_shift)
        )

    if component.noise > 0:
        noise_omega = angular_velocity * NOISE_ORDER
        values = values + component.noise * (
            np.sin(noise_omega * t) + NOISE_SECOND_TONE_GAIN * np.sin(noise_omega * NOISE_SECOND_TONE_RATIO * t)
        )

    return cast(FloatArray, np.asarray(values, dtype=np.float64))


def component_peak_bound(component: VibrationComponent) -> float:
    """Conservative peak envelope: every harmonic counted as if phase-aligned."""
    peak = component.amplitude
    for harmonic in component.harmonics:
        peak += component.amplitude * harmonic.amplitude_ratio
    return peak + component.noise
