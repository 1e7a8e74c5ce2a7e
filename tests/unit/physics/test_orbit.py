"""Tests for shaft-orbit sampling and plot scaling."""

from __future__ import annotations

import math

import numpy as np
import pytest

from odsynth.domain import Harmonic, InvalidParameterError, VibrationComponent
from odsynth.physics import OrbitPlotPolicy, evaluate_component, orbit_times, sample_orbit


def test_quadrature_probes_trace_a_circle() -> None:
    amplitude = 40.0
    trace = sample_orbit(
        VibrationComponent(amplitude=amplitude, phase=0.0),
        VibrationComponent(amplitude=amplitude, phase=90.0),
    )

    radii = np.hypot(trace.trajectory[:, 0], trace.trajectory[:, 1])
    assert trace.trajectory.shape == (720, 2)
    assert float(np.max(np.abs(radii - amplitude))) < 1e-6


def test_sample_window_is_half_open_over_requested_cycles() -> None:
    times = orbit_times(OrbitPlotPolicy(cycles=2.0, samples=720))

    assert times[0] == 0.0
    assert times[-1] < 4.0 * math.pi
    assert times[-1] == pytest.approx(4.0 * math.pi * 719 / 720)
    assert np.all(np.diff(times) > 0)


def test_samples_use_unit_angular_velocity() -> None:
    x = VibrationComponent(amplitude=3.0, phase=15.0, harmonics=(Harmonic(order=0.45, amplitude_ratio=0.8),))
    y = VibrationComponent(amplitude=2.0, phase=105.0, noise=0.5)
    policy = OrbitPlotPolicy(samples=64)
    trace = sample_orbit(x, y, policy=policy)

    for idx, t in enumerate(orbit_times(policy)):
        assert trace.trajectory[idx, 0] == pytest.approx(evaluate_component(x, 1.0, float(t)), abs=1e-12)
        assert trace.trajectory[idx, 1] == pytest.approx(evaluate_component(y, 1.0, float(t)), abs=1e-12)


def test_keyphasor_mark_is_evaluated_at_negative_phase() -> None:
    x = VibrationComponent(amplitude=10.0, phase=0.0)
    y = VibrationComponent(amplitude=10.0, phase=90.0)

    at_zero = sample_orbit(x, y, keyphasor_phase_deg=0.0)
    assert np.allclose(at_zero.keyphasor_point, [0.0, 10.0], atol=1e-12)

    shifted = sample_orbit(x, y, keyphasor_phase_deg=90.0)
    assert np.allclose(shifted.keyphasor_point, [-10.0, 0.0], atol=1e-12)


def test_auto_scale_keeps_trajectory_inside_viewport() -> None:
    policy = OrbitPlotPolicy()
    trace = sample_orbit(
        VibrationComponent(amplitude=40.0),
        VibrationComponent(amplitude=40.0),
        policy=policy,
    )

    assert trace.scale == pytest.approx(60.0)
    max_coordinate = float(np.max(np.abs(trace.trajectory)))
    assert max_coordinate * 1.5 <= trace.scale + 1e-9

    pixels = trace.to_viewport()
    assert np.all(pixels > 0.0)
    assert np.all(pixels < policy.viewport_size)


def test_auto_scale_accounts_for_harmonics_and_noise() -> None:
    rub = (
        Harmonic(order=0.5, amplitude_ratio=0.3),
        Harmonic(order=2.0, amplitude_ratio=0.3, phase_shift=180.0),
        Harmonic(order=3.0, amplitude_ratio=0.2),
    )
    x = VibrationComponent(amplitude=30.0, harmonics=rub, noise=10.0)
    y = VibrationComponent(amplitude=30.0, phase=90.0, harmonics=rub, noise=10.0)
    trace = sample_orbit(x, y)

    assert trace.scale == pytest.approx((30.0 + 24.0 + 10.0) * 1.5)
    assert float(np.max(np.abs(trace.trajectory))) < trace.scale
    assert np.all((trace.to_viewport() > 0.0) & (trace.to_viewport() < 400.0))


def test_larger_axis_sets_the_scale() -> None:
    trace = sample_orbit(VibrationComponent(amplitude=45.0), VibrationComponent(amplitude=10.0, phase=90.0))
    assert trace.scale == pytest.approx(67.5)
    assert trace.pixels_per_unit == pytest.approx(400.0 * 0.4 / 67.5)


def test_silent_probes_fall_back_to_unit_scale() -> None:
    trace = sample_orbit(VibrationComponent(), VibrationComponent())

    assert trace.scale == 0.0
    assert trace.pixels_per_unit == pytest.approx(160.0)
    assert np.allclose(trace.to_viewport(), 200.0)


def test_viewport_mapping_inverts_y() -> None:
    trace = sample_orbit(VibrationComponent(amplitude=1.0), VibrationComponent(amplitude=1.0, phase=90.0))
    mapped = trace.to_viewport(np.asarray([[1.0, 1.0]]))

    assert mapped[0, 0] > 200.0
    assert mapped[0, 1] < 200.0


def test_policy_validation() -> None:
    with pytest.raises(InvalidParameterError, match="samples must be >= 2"):
        OrbitPlotPolicy(samples=1)
    with pytest.raises(InvalidParameterError, match="headroom must be >= 1"):
        OrbitPlotPolicy(headroom=0.9)
    with pytest.raises(InvalidParameterError, match="viewport_fill"):
        OrbitPlotPolicy(viewport_fill=0.75)
