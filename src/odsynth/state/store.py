"""Application state container: controls, rosters, presets and the clock."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Mapping

from odsynth.domain.errors import InvalidParameterError
from odsynth.domain.models import AppMode, Axis, MeasurementPoint, VibrationComponent
from odsynth.domain.validation import validate_roster
from odsynth.physics.clock import SimulationClock
from odsynth.physics.interpolation import DEFAULT_KERNEL_POLICY, KernelPolicy
from odsynth.presets.catalog import (
    ODSFault,
    OrbitFault,
    apply_ods_fault,
    apply_orbit_fault,
    apply_overrides,
    default_ods_roster,
    default_orbit_roster,
    soft_foot_overrides,
)
from odsynth.state.frame import SimulationFrame
from odsynth.state.settings import SimulationSettings


LOGGER = logging.getLogger(__name__)


class SimulationStore:
    """Own the mutable application state and hand out immutable per-tick frames.

    Rosters are replaced wholesale on every action, so a frame taken before
    an update never observes a partially edited sensor.
    """

    def __init__(
        self,
        settings: SimulationSettings | None = None,
        *,
        sensors: Iterable[MeasurementPoint] | None = None,
        orbit_sensors: Iterable[MeasurementPoint] | None = None,
        kernel_policy: KernelPolicy = DEFAULT_KERNEL_POLICY,
    ) -> None:
        self._settings = settings if settings is not None else SimulationSettings()
        self._kernel_policy = kernel_policy
        self._clock = SimulationClock(
            animation_rpm=self._settings.animation_rpm,
            playing=self._settings.is_playing,
        )
        self._sensors = validate_roster(default_ods_roster() if sensors is None else sensors)
        self._orbit_sensors = validate_roster(default_orbit_roster() if orbit_sensors is None else orbit_sensors)
        if not self._sensors:
            LOGGER.warning("installed an empty ODS roster")
        if not self._orbit_sensors:
            LOGGER.warning("installed an empty orbit roster")
        self._app_mode = AppMode.ODS
        self._ods_fault = ODSFault.MANUAL
        self._orbit_fault = OrbitFault.MANUAL
        self._selected_point_id: str | None = None

    @property
    def settings(self) -> SimulationSettings:
        return self._settings

    @property
    def clock(self) -> SimulationClock:
        return self._clock

    @property
    def sensors(self) -> tuple[MeasurementPoint, ...]:
        return self._sensors

    @property
    def orbit_sensors(self) -> tuple[MeasurementPoint, ...]:
        return self._orbit_sensors

    @property
    def app_mode(self) -> AppMode:
        return self._app_mode

    @property
    def ods_fault(self) -> ODSFault:
        return self._ods_fault

    @property
    def orbit_fault(self) -> OrbitFault:
        return self._orbit_fault

    @property
    def selected_point_id(self) -> str | None:
        return self._selected_point_id

    def set_app_mode(self, mode: AppMode) -> None:
        self._app_mode = AppMode(mode)
        self._selected_point_id = None
        LOGGER.debug("app mode set to %s", self._app_mode.value)

    def set_animation_rpm(self, animation_rpm: float) -> None:
        self._settings = replace(self._settings, animation_rpm=animation_rpm)
        self._clock.set_animation_rpm(animation_rpm)

    def set_global_gain(self, global_gain: float) -> None:
        self._settings = replace(self._settings, global_gain=global_gain)

    def set_machine_rpm(self, machine_rpm: float) -> None:
        self._settings = replace(self._settings, machine_rpm=machine_rpm)
        self._refresh_soft_foot()

    def set_line_freq(self, line_freq_hz: float) -> None:
        self._settings = replace(self._settings, line_freq_hz=line_freq_hz)
        self._refresh_soft_foot()

    def toggle_play(self) -> bool:
        """Flip the play flag and return the new value."""
        playing = not self._settings.is_playing
        self._settings = replace(self._settings, is_playing=playing)
        self._clock.set_playing(playing)
        return playing

    def select_point(self, point_id: str | None) -> None:
        if point_id is not None:
            self._find(point_id)
        self._selected_point_id = point_id

    def update_point(self, point_id: str, updates: Mapping[Axis, VibrationComponent]) -> MeasurementPoint:
        """Replace axis components of one sensor in whichever roster holds it."""
        components = {Axis(axis): component for axis, component in updates.items()}
        if any(point.id == point_id for point in self._orbit_sensors):
            self._orbit_sensors = tuple(
                point.with_components(components) if point.id == point_id else point
                for point in self._orbit_sensors
            )
        elif any(point.id == point_id for point in self._sensors):
            self._sensors = tuple(
                point.with_components(components) if point.id == point_id else point
                for point in self._sensors
            )
        else:
            raise InvalidParameterError(f"unknown sensor id: {point_id}")
        LOGGER.debug("updated %s axes of sensor %s", ",".join(axis.value for axis in components), point_id)
        return self._find(point_id)

    def set_reference_point(self, point_id: str) -> None:
        """Mark exactly one sensor across both rosters as the phase reference."""
        self._find(point_id)
        self._sensors = tuple(replace(point, is_reference=point.id == point_id) for point in self._sensors)
        self._orbit_sensors = tuple(
            replace(point, is_reference=point.id == point_id) for point in self._orbit_sensors
        )
        LOGGER.info("reference point set to %s", point_id)

    def set_all_points(self, points: Iterable[MeasurementPoint]) -> None:
        """Swap the ODS roster wholesale."""
        roster = validate_roster(points)
        if not roster:
            LOGGER.warning("installed an empty ODS roster")
        self._sensors = roster
        LOGGER.info("ODS roster replaced with %d sensors", len(roster))

    def apply_preset(self, fault: ODSFault | OrbitFault) -> None:
        """Reset the matching roster to its baseline and apply a fault preset."""
        if isinstance(fault, OrbitFault):
            self._orbit_sensors = apply_orbit_fault(self._orbit_sensors, fault)
            self._orbit_fault = fault
        else:
            fault = ODSFault(fault)
            self._sensors = apply_ods_fault(
                self._sensors,
                fault,
                machine_rpm=self._settings.machine_rpm,
                line_freq_hz=self._settings.line_freq_hz,
            )
            self._ods_fault = fault
        LOGGER.info("applied preset %r", fault.value)

    def snapshot(self) -> SimulationFrame:
        """Frame at the current clock time without advancing it."""
        return SimulationFrame(
            time=self._clock.time,
            shaft_angle=self._clock.shaft_angle,
            animation_rpm=self._settings.animation_rpm,
            global_gain=self._settings.global_gain,
            sensors=self._sensors,
            orbit_sensors=self._orbit_sensors,
            kernel_policy=self._kernel_policy,
        )

    def tick(self, delta: float) -> SimulationFrame:
        """Advance the clock exactly once and return the frame for this tick."""
        self._clock.tick(delta)
        return self.snapshot()

    def _refresh_soft_foot(self) -> None:
        if self._app_mode != AppMode.ODS or self._ods_fault != ODSFault.SOFT_FOOT:
            return
        self._sensors = apply_overrides(
            self._sensors,
            soft_foot_overrides(self._settings.machine_rpm, self._settings.line_freq_hz),
        )
        LOGGER.debug("soft-foot harmonic order refreshed")

    def _find(self, point_id: str) -> MeasurementPoint:
        for point in (*self._sensors, *self._orbit_sensors):
            if point.id == point_id:
                return point
        raise InvalidParameterError(f"unknown sensor id: {point_id}")
