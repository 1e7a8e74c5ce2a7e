"""Vibration field synthesis engine: waveforms, interpolation, clock and orbit sampling."""

from odsynth.physics.clock import ClockState, SimulationClock
from odsynth.physics.field import ArrowGlyph, ArrowPolicy, deform_vertices, vector_arrows
from odsynth.physics.interpolation import (
    DEFAULT_KERNEL_POLICY,
    KernelPolicy,
    displacement_at,
    displacement_field,
    inverse_distance_weights,
    sensor_axis_values,
)
from odsynth.physics.orbit import DEFAULT_ORBIT_POLICY, OrbitPlotPolicy, OrbitTrace, orbit_times, sample_orbit
from odsynth.physics.waveform import (
    component_peak_bound,
    evaluate_component,
    rpm_to_angular_velocity,
    sample_component,
)

__all__ = [
    "DEFAULT_KERNEL_POLICY",
    "DEFAULT_ORBIT_POLICY",
    "ArrowGlyph",
    "ArrowPolicy",
    "ClockState",
    "KernelPolicy",
    "OrbitPlotPolicy",
    "OrbitTrace",
    "SimulationClock",
    "component_peak_bound",
    "deform_vertices",
    "displacement_at",
    "displacement_field",
    "evaluate_component",
    "inverse_distance_weights",
    "orbit_times",
    "rpm_to_angular_velocity",
    "sample_component",
    "sample_orbit",
    "sensor_axis_values",
    "vector_arrows",
]
