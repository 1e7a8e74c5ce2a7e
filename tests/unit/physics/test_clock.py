"""Tests for the running/paused simulation clock."""

from __future__ import annotations

import math

import pytest

from odsynth.domain import InvalidParameterError
from odsynth.physics import ClockState, SimulationClock


def test_running_clock_accumulates_deltas() -> None:
    clock = SimulationClock(animation_rpm=60.0)
    clock.tick(0.1)
    clock.tick(0.25)

    assert clock.state == ClockState.RUNNING
    assert clock.time == pytest.approx(0.35)


def test_paused_clock_discards_deltas() -> None:
    clock = SimulationClock(playing=False)
    assert clock.tick(1.0) == 0.0

    clock.set_playing(True)
    clock.tick(0.5)
    clock.set_playing(False)
    clock.tick(3.0)

    assert clock.time == pytest.approx(0.5)
    assert not clock.is_running


def test_set_playing_is_idempotent() -> None:
    clock = SimulationClock()
    clock.set_playing(True)
    clock.set_playing(True)
    clock.tick(0.2)

    assert clock.time == pytest.approx(0.2)
    assert clock.toggle() == ClockState.PAUSED
    assert clock.toggle() == ClockState.RUNNING


def test_clock_never_decreases() -> None:
    clock = SimulationClock()
    previous = clock.time
    for delta in (0.0, 0.016, 0.0, 0.033, 1.0):
        current = clock.tick(delta)
        assert current >= previous
        previous = current


def test_rejects_negative_or_non_finite_delta() -> None:
    clock = SimulationClock()
    with pytest.raises(InvalidParameterError, match="tick delta"):
        clock.tick(-0.01)
    with pytest.raises(InvalidParameterError, match="tick delta"):
        clock.tick(math.inf)
    assert clock.time == 0.0


def test_angular_velocity_and_shaft_angle_follow_animation_rpm() -> None:
    clock = SimulationClock(animation_rpm=60.0)
    assert clock.angular_velocity == pytest.approx(2.0 * math.pi)

    clock.tick(0.25)
    clock.set_animation_rpm(120.0)
    clock.tick(0.25)

    assert clock.shaft_angle == pytest.approx(0.5 * math.pi + math.pi)
    assert clock.time == pytest.approx(0.5)


def test_rejects_negative_animation_rpm() -> None:
    with pytest.raises(InvalidParameterError, match="animation_rpm"):
        SimulationClock(animation_rpm=-20.0)


def test_reset_returns_to_time_zero() -> None:
    clock = SimulationClock()
    clock.tick(2.0)
    clock.reset()

    assert clock.time == 0.0
    assert clock.shaft_angle == 0.0
    assert clock.is_running
