"""Immutable per-tick snapshot shared by every visual consumer."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from odsynth.domain.models import MeasurementPoint
from odsynth.physics.field import DEFAULT_ARROW_POLICY, ArrowGlyph, ArrowPolicy, deform_vertices, vector_arrows
from odsynth.physics.interpolation import DEFAULT_KERNEL_POLICY, KernelPolicy, displacement_at, displacement_field
from odsynth.physics.orbit import DEFAULT_ORBIT_POLICY, OrbitPlotPolicy, OrbitTrace, sample_orbit
from odsynth.presets.catalog import KEYPHASOR_ID, PROBE_X_ID, PROBE_Y_ID


FloatArray = npt.NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class SimulationFrame:
    """Consistent view of time, controls and rosters for one tick.

    All queries issued against a frame read the same time value, which keeps
    mesh, arrows and orbit plot phase-synchronized.
    """

    time: float
    shaft_angle: float
    animation_rpm: float
    global_gain: float
    sensors: tuple[MeasurementPoint, ...]
    orbit_sensors: tuple[MeasurementPoint, ...]
    kernel_policy: KernelPolicy = DEFAULT_KERNEL_POLICY

    def displacement_at(self, query_point: npt.ArrayLike) -> FloatArray:
        return displacement_at(
            query_point, self.time, self.animation_rpm, self.sensors, self.global_gain, self.kernel_policy
        )

    def displacement_field(self, query_points: npt.ArrayLike) -> FloatArray:
        return displacement_field(
            query_points, self.time, self.animation_rpm, self.sensors, self.global_gain, self.kernel_policy
        )

    def deform_vertices(self, rest_vertices: npt.ArrayLike) -> FloatArray:
        return deform_vertices(
            rest_vertices, self.time, self.animation_rpm, self.sensors, self.global_gain, self.kernel_policy
        )

    def vector_arrows(
        self,
        anchors: npt.ArrayLike | None = None,
        arrow_policy: ArrowPolicy = DEFAULT_ARROW_POLICY,
    ) -> tuple[ArrowGlyph, ...]:
        """Arrows at ``anchors``, defaulting to one per sensor rest position."""
        if anchors is None:
            anchors = np.asarray([sensor.position for sensor in self.sensors], dtype=np.float64).reshape(-1, 3)
        return vector_arrows(
            anchors,
            self.time,
            self.animation_rpm,
            self.sensors,
            self.global_gain,
            self.kernel_policy,
            arrow_policy,
        )

    def orbit_trace(self, policy: OrbitPlotPolicy = DEFAULT_ORBIT_POLICY) -> OrbitTrace | None:
        """Orbit of the two probes, or ``None`` when either probe is absent."""
        by_id = {sensor.id: sensor for sensor in self.orbit_sensors}
        probe_x = by_id.get(PROBE_X_ID)
        probe_y = by_id.get(PROBE_Y_ID)
        if probe_x is None or probe_y is None:
            return None
        keyphasor = by_id.get(KEYPHASOR_ID)
        keyphasor_phase = keyphasor.horizontal.phase if keyphasor is not None else 0.0
        return sample_orbit(probe_x.horizontal, probe_y.horizontal, keyphasor_phase, policy)
