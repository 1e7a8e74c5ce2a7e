"""Monotonic simulation clock advanced once per render tick."""

from __future__ import annotations

from enum import StrEnum
from math import isfinite

from odsynth.domain.errors import InvalidParameterError
from odsynth.physics.waveform import rpm_to_angular_velocity


class ClockState(StrEnum):
    """Whether ticks advance the clock."""

    RUNNING = "running"
    PAUSED = "paused"


class SimulationClock:
    """Accumulate frame deltas while running; discard them while paused.

    The clock also integrates the shaft angle so rotating visuals stay in
    phase with the waveforms even when the animation rate changes mid-run.
    """

    def __init__(self, *, animation_rpm: float = 110.0, playing: bool = True) -> None:
        self._time = 0.0
        self._shaft_angle = 0.0
        self._animation_rpm = _validated_rpm(animation_rpm)
        self._state = ClockState.RUNNING if playing else ClockState.PAUSED

    @property
    def time(self) -> float:
        """Accumulated simulation time in seconds."""
        return self._time

    @property
    def shaft_angle(self) -> float:
        """Accumulated shaft rotation in radians."""
        return self._shaft_angle

    @property
    def state(self) -> ClockState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == ClockState.RUNNING

    @property
    def animation_rpm(self) -> float:
        return self._animation_rpm

    @property
    def angular_velocity(self) -> float:
        """Angular velocity in rad/s derived from the animation rate."""
        return rpm_to_angular_velocity(self._animation_rpm)

    def set_animation_rpm(self, animation_rpm: float) -> None:
        self._animation_rpm = _validated_rpm(animation_rpm)

    def set_playing(self, playing: bool) -> None:
        """Enter RUNNING or PAUSED; repeating the current state is a no-op."""
        self._state = ClockState.RUNNING if playing else ClockState.PAUSED

    def toggle(self) -> ClockState:
        self.set_playing(not self.is_running)
        return self._state

    def tick(self, delta: float) -> float:
        """Advance by ``delta`` seconds when running and return the current time."""
        if not isfinite(delta) or delta < 0:
            raise InvalidParameterError(f"tick delta must be a finite value >= 0, got {delta}")
        if self._state == ClockState.RUNNING:
            self._time += delta
            self._shaft_angle += self.angular_velocity * delta
        return self._time

    def reset(self) -> None:
        """Return to time zero; reserved for the owning application."""
        self._time = 0.0
        self._shaft_angle = 0.0


def _validated_rpm(animation_rpm: float) -> float:
    value = float(animation_rpm)
    if not isfinite(value) or value < 0:
        raise InvalidParameterError("animation_rpm must be a finite value >= 0")
    return value
