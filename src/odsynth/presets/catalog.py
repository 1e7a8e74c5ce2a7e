"""Static fault-preset catalog mapping named faults to per-sensor waveform parameters.

The engine never sees fault names; the state container applies these tables
to a roster before any evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from math import sin
from typing import Sequence

from odsynth.domain.errors import InvalidParameterError
from odsynth.domain.models import Axis, Harmonic, MeasurementPoint, VibrationComponent, harmonics_from_triples


class ODSFault(StrEnum):
    """Operating-deflection-shape fault presets."""

    MANUAL = "Manual Analysis"
    UNBALANCE_STATIC = "Static Unbalance (Force)"
    UNBALANCE_COUPLE = "Couple Unbalance"
    UNBALANCE_DYNAMIC = "Dynamic Unbalance (Most Common)"
    UNBALANCE_OVERHUNG = "Overhung Rotor Unbalance"
    ANGULAR_MISALIGNMENT = "Angular Misalignment"
    PARALLEL_MISALIGNMENT = "Parallel Misalignment"
    MISALIGNMENT_COMBO = "Combined Misalignment"
    BENT_SHAFT = "Bent Shaft"
    ECCENTRIC_ROTOR = "Eccentric Rotor (Var. Air Gap)"
    LOOSENESS_STRUCTURAL = "Structural Looseness (Type A)"
    LOOSENESS_ROCKING = "Rocking Looseness (Type B)"
    LOOSENESS_BEARING = "Loose Bearing Fit (Type C)"
    SOFT_FOOT = "Soft Foot (Distortion)"
    BEARING_WEAR = "Bearing Wear (Late Stage)"
    GEAR_MESH = "Gear Mesh Issue (High Freq)"
    RESONANCE_VERTICAL = "Vertical Resonance"


class OrbitFault(StrEnum):
    """Shaft-orbit fault presets."""

    MANUAL = "Manual Config"
    UNBALANCE = "Unbalance (1X Circle)"
    MISALIGNMENT = "Misalignment (Banana/Ellipse)"
    SHAFT_CRACK = "Shaft Crack (1X + 2X Loop)"
    ROTOR_BOW = "Rotor Bow (High 1X)"
    OIL_WHIRL = "Oil Whirl (0.4X - 0.48X)"
    OIL_WHIP = "Oil Whip (Locked Sub-sync)"
    PRELOAD = "Radial Preload (Flattened)"
    RUB = "Rub (Truncated/Bouncing)"
    LOOSENESS = "Mechanical Looseness"
    RESONANCE = "Resonance (Phase Shift)"


PROBE_X_ID = "probe-x"
PROBE_Y_ID = "probe-y"
KEYPHASOR_ID = "keyphasor"
SOFT_FOOT_SENSOR_ID = "m-foot-de-r"


@dataclass(frozen=True, slots=True)
class ComponentOverride:
    """Replace one axis of one sensor with the given waveform."""

    sensor_id: str
    axis: Axis
    component: VibrationComponent


def _wave(
    amplitude: float,
    phase: float = 0.0,
    harmonics: Sequence[tuple[float, float, float]] = (),
    noise: float = 0.0,
) -> VibrationComponent:
    return VibrationComponent(
        amplitude=amplitude,
        phase=phase,
        harmonics=harmonics_from_triples(harmonics),
        noise=noise,
    )


def _set(sensor_id: str, axis: Axis, component: VibrationComponent) -> ComponentOverride:
    return ComponentOverride(sensor_id=sensor_id, axis=axis, component=component)


H, V, A = Axis.HORIZONTAL, Axis.VERTICAL, Axis.AXIAL

_TWO_X_PARALLEL = ((2.0, 1.5, 0.0),)
_TWO_X_COMBO = ((2.0, 1.0, 0.0),)

ODS_BASELINE: dict[Axis, VibrationComponent] = {
    H: _wave(0.3),
    V: _wave(0.2),
    A: _wave(0.1),
}

ODS_FAULT_TABLE: dict[ODSFault, tuple[ComponentOverride, ...]] = {
    ODSFault.MANUAL: (),
    ODSFault.UNBALANCE_STATIC: (
        _set("m-nde", H, _wave(8.0, 90.0)),
        _set("m-nde", V, _wave(7.5, 0.0)),
        _set("m-de", H, _wave(8.0, 90.0)),
        _set("m-de", V, _wave(7.5, 0.0)),
    ),
    ODSFault.UNBALANCE_COUPLE: (
        _set("m-nde", H, _wave(8.0, 270.0)),
        _set("m-nde", V, _wave(7.5, 180.0)),
        _set("m-de", H, _wave(8.0, 90.0)),
        _set("m-de", V, _wave(7.5, 0.0)),
    ),
    ODSFault.UNBALANCE_DYNAMIC: (
        _set("m-de", H, _wave(8.0, 30.0)),
        _set("m-de", V, _wave(7.0, -60.0)),
        _set("m-nde", H, _wave(6.0, 150.0)),
        _set("m-nde", V, _wave(5.0, 60.0)),
    ),
    ODSFault.UNBALANCE_OVERHUNG: (
        _set("p-de", H, _wave(8.0, 90.0)),
        _set("p-de", V, _wave(8.0, 0.0)),
        _set("p-de", A, _wave(7.0, 0.0)),
        _set("p-nde", A, _wave(7.0, 180.0)),
    ),
    ODSFault.ANGULAR_MISALIGNMENT: (
        _set("m-de", A, _wave(9.0, 0.0, ((2.0, 0.5, 0.0),))),
        _set("p-de", A, _wave(9.0, 180.0, ((2.0, 0.5, 0.0),))),
    ),
    ODSFault.PARALLEL_MISALIGNMENT: (
        _set("m-de", V, _wave(4.0, 0.0, _TWO_X_PARALLEL)),
        _set("m-de", H, _wave(3.0, 90.0, _TWO_X_PARALLEL)),
        _set("p-de", V, _wave(4.0, 180.0, _TWO_X_PARALLEL)),
        _set("p-de", H, _wave(3.0, 270.0, _TWO_X_PARALLEL)),
    ),
    ODSFault.MISALIGNMENT_COMBO: (
        _set("m-de", V, _wave(5.0, 0.0, _TWO_X_COMBO)),
        _set("m-de", A, _wave(5.0, 0.0, _TWO_X_COMBO)),
        _set("p-de", V, _wave(5.0, 0.0, _TWO_X_COMBO)),
        _set("p-de", A, _wave(5.0, 0.0, _TWO_X_COMBO)),
    ),
    ODSFault.BENT_SHAFT: (
        _set("m-de", A, _wave(8.0, 0.0)),
        _set("m-de", V, _wave(3.0, 0.0)),
        _set("m-nde", A, _wave(8.0, 180.0)),
        _set("m-nde", V, _wave(3.0, 0.0)),
    ),
    ODSFault.ECCENTRIC_ROTOR: (
        _set("m-de", V, _wave(8.0, 0.0, ((2.0, 0.4, 0.0),))),
    ),
    ODSFault.LOOSENESS_STRUCTURAL: (
        _set("m-foot-de-l", V, _wave(10.0, 0.0, ((2.0, 0.5, 0.0), (3.0, 0.3, 0.0)))),
        _set("m-foot-de-r", V, _wave(10.0, 0.0, ((2.0, 0.5, 0.0), (3.0, 0.3, 0.0)))),
    ),
    ODSFault.LOOSENESS_ROCKING: (
        _set("m-de", H, _wave(8.0, 0.0, ((2.0, 0.6, 180.0),))),
        _set("m-de", V, _wave(2.0, 90.0)),
    ),
    ODSFault.LOOSENESS_BEARING: (
        _set("p-de", V, _wave(6.0, 0.0, ((0.5, 0.4, 0.0), (1.5, 0.3, 0.0), (2.0, 0.5, 0.0), (3.0, 0.4, 0.0)))),
    ),
    ODSFault.BEARING_WEAR: (
        _set("p-de", V, _wave(1.0, 0.0, noise=5.0)),
        _set("p-de", H, _wave(1.0, 0.0, noise=5.0)),
    ),
    ODSFault.GEAR_MESH: (
        _set("p-de", V, _wave(0.5, 0.0, ((12.0, 8.0, 0.0),))),
    ),
}

# Presets whose values depend on machine settings or sensor geometry.
COMPUTED_ODS_FAULTS: frozenset[ODSFault] = frozenset({ODSFault.SOFT_FOOT, ODSFault.RESONANCE_VERTICAL})

ORBIT_PROBE_BASELINE: dict[Axis, VibrationComponent] = {
    H: _wave(10.0),
    V: _wave(0.0),
    A: _wave(0.0),
}

_MISALIGNMENT_2X = ((2.0, 0.4, 45.0),)
_CRACK_2X = ((2.0, 0.5, 180.0),)
_WHIRL = ((0.45, 0.8, 90.0),)
_WHIP = ((0.48, 1.5, 80.0),)
_RUB = ((0.5, 0.3, 0.0), (2.0, 0.3, 180.0), (3.0, 0.2, 0.0))
_LOOSE = ((2.0, 0.5, 0.0), (3.0, 0.3, 0.0), (4.0, 0.2, 0.0))

# Probes measure on their horizontal component; (probe-x, probe-y).
ORBIT_FAULT_TABLE: dict[OrbitFault, tuple[VibrationComponent, VibrationComponent] | None] = {
    OrbitFault.MANUAL: None,
    OrbitFault.UNBALANCE: (_wave(40.0, 0.0), _wave(40.0, 90.0)),
    OrbitFault.MISALIGNMENT: (_wave(35.0, 0.0, _MISALIGNMENT_2X), _wave(20.0, 120.0, _MISALIGNMENT_2X)),
    OrbitFault.SHAFT_CRACK: (_wave(35.0, 0.0, _CRACK_2X), _wave(35.0, 90.0, _CRACK_2X)),
    OrbitFault.ROTOR_BOW: (_wave(60.0, 0.0), _wave(60.0, 90.0)),
    OrbitFault.OIL_WHIRL: (_wave(30.0, 0.0, _WHIRL), _wave(30.0, 90.0, _WHIRL)),
    OrbitFault.OIL_WHIP: (_wave(50.0, 0.0, _WHIP), _wave(50.0, 90.0, _WHIP)),
    OrbitFault.PRELOAD: (_wave(45.0, 0.0), _wave(10.0, 90.0)),
    OrbitFault.RUB: (_wave(30.0, 0.0, _RUB, noise=10.0), _wave(30.0, 90.0, _RUB, noise=10.0)),
    OrbitFault.LOOSENESS: (_wave(25.0, 0.0, _LOOSE), _wave(30.0, 90.0, _LOOSE)),
    OrbitFault.RESONANCE: (_wave(80.0, 180.0), _wave(80.0, 270.0)),
}


def _sensor(
    sensor_id: str,
    label: str,
    position: tuple[float, float, float],
    *,
    is_reference: bool = False,
) -> MeasurementPoint:
    return MeasurementPoint(
        id=sensor_id,
        label=label,
        position=position,
        horizontal=_wave(0.2),
        vertical=_wave(0.1),
        axial=_wave(0.1),
        is_reference=is_reference,
    )


def default_ods_roster() -> tuple[MeasurementPoint, ...]:
    """Eight-point motor/pump train rig used at application start."""
    return (
        _sensor("m-foot-de-l", "Motor Foot DE-L", (0.6, 0.2, 0.8)),
        _sensor("m-foot-de-r", "Motor Foot DE-R", (-0.6, 0.2, 0.8)),
        _sensor("m-foot-nde-l", "Motor Foot NDE-L", (0.6, 0.2, -0.8)),
        _sensor("m-foot-nde-r", "Motor Foot NDE-R", (-0.6, 0.2, -0.8)),
        _sensor("m-nde", "Motor NDE Brg", (0.0, 1.4, -0.8)),
        _sensor("m-de", "Motor DE Brg", (0.0, 1.4, 1.0), is_reference=True),
        _sensor("p-de", "Pump Inboard Brg", (0.0, 1.35, 5.5)),
        _sensor("p-nde", "Pump Outboard Brg", (0.0, 1.35, 6.5)),
    )


def default_orbit_roster() -> tuple[MeasurementPoint, ...]:
    """Two proximity probes and a keyphasor; positions only place them in the scene."""
    return (
        _sensor(PROBE_X_ID, "Probe X", (1.0, 1.0, 0.0)),
        _sensor(PROBE_Y_ID, "Probe Y", (-1.0, 1.0, 0.0)),
        _sensor(KEYPHASOR_ID, "Keyphasor", (0.0, 1.5, -0.5), is_reference=True),
    )


def soft_foot_order(machine_rpm: float, line_freq_hz: float) -> float:
    """Harmonic order of twice line frequency relative to running speed."""
    if not machine_rpm > 0:
        raise InvalidParameterError("machine_rpm must be > 0")
    if not line_freq_hz > 0:
        raise InvalidParameterError("line_freq_hz must be > 0")
    return (2.0 * line_freq_hz * 60.0) / machine_rpm


def soft_foot_overrides(machine_rpm: float, line_freq_hz: float) -> tuple[ComponentOverride, ...]:
    """Soft-foot distortion: strong 2x line-frequency component on one motor foot."""
    harmonic = Harmonic(order=soft_foot_order(machine_rpm, line_freq_hz), amplitude_ratio=1.2, phase_shift=180.0)
    return (
        _set(SOFT_FOOT_SENSOR_ID, V, VibrationComponent(amplitude=6.0, phase=0.0, harmonics=(harmonic,))),
    )


def resonance_overrides(roster: Sequence[MeasurementPoint]) -> tuple[ComponentOverride, ...]:
    """Vertical mode shape sampled along the shaft axis at every sensor."""
    return tuple(
        _set(point.id, V, _wave(abs(sin(point.position[2] / 2.0)) * 10.0, 90.0))
        for point in roster
    )


def ods_overrides(
    fault: ODSFault,
    roster: Sequence[MeasurementPoint],
    *,
    machine_rpm: float,
    line_freq_hz: float,
) -> tuple[ComponentOverride, ...]:
    """Resolve the override records of one ODS fault for ``roster``."""
    fault = ODSFault(fault)
    if fault == ODSFault.SOFT_FOOT:
        return soft_foot_overrides(machine_rpm, line_freq_hz)
    if fault == ODSFault.RESONANCE_VERTICAL:
        return resonance_overrides(roster)
    return ODS_FAULT_TABLE[fault]


def apply_overrides(
    roster: Sequence[MeasurementPoint],
    overrides: Sequence[ComponentOverride],
) -> tuple[MeasurementPoint, ...]:
    """Apply override records; ids absent from the roster are skipped."""
    by_sensor: dict[str, dict[Axis, VibrationComponent]] = {}
    for override in overrides:
        by_sensor.setdefault(override.sensor_id, {})[override.axis] = override.component
    return tuple(
        point.with_components(by_sensor[point.id]) if point.id in by_sensor else point
        for point in roster
    )


def apply_ods_fault(
    roster: Sequence[MeasurementPoint],
    fault: ODSFault,
    *,
    machine_rpm: float,
    line_freq_hz: float,
) -> tuple[MeasurementPoint, ...]:
    """Reset every sensor to the ODS baseline, then apply ``fault``."""
    baseline = tuple(point.with_components(ODS_BASELINE) for point in roster)
    overrides = ods_overrides(fault, baseline, machine_rpm=machine_rpm, line_freq_hz=line_freq_hz)
    return apply_overrides(baseline, overrides)


def apply_orbit_fault(roster: Sequence[MeasurementPoint], fault: OrbitFault) -> tuple[MeasurementPoint, ...]:
    """Reset both probes to the orbit baseline, then apply ``fault``; the keyphasor is untouched."""
    baseline = tuple(
        point if point.id == KEYPHASOR_ID else point.with_components(ORBIT_PROBE_BASELINE)
        for point in roster
    )
    probes = ORBIT_FAULT_TABLE[OrbitFault(fault)]
    if probes is None:
        return baseline
    probe_x, probe_y = probes
    return apply_overrides(baseline, (_set(PROBE_X_ID, H, probe_x), _set(PROBE_Y_ID, H, probe_y)))
