"""Inverse-distance blending of sparse sensor motion into a continuous displacement field."""

from __future__ import annotations

from dataclasses import dataclass
from math import hypot
from typing import Sequence, cast

import numpy as np
import numpy.typing as npt
from scipy.spatial.distance import cdist

from odsynth.domain.errors import InvalidParameterError
from odsynth.domain.models import MeasurementPoint
from odsynth.physics.waveform import evaluate_component, rpm_to_angular_velocity


FloatArray = npt.NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class KernelPolicy:
    """Locality and unit constants of the interpolation kernel."""

    power: float = 3.5
    epsilon: float = 0.1
    unit_scalar: float = 0.015

    def __post_init__(self) -> None:
        if not self.power > 0:
            raise InvalidParameterError("power must be > 0")
        if not self.epsilon > 0:
            raise InvalidParameterError("epsilon must be > 0")
        if not self.unit_scalar > 0:
            raise InvalidParameterError("unit_scalar must be > 0")


DEFAULT_KERNEL_POLICY = KernelPolicy()


def inverse_distance_weights(
    distances: npt.ArrayLike,
    policy: KernelPolicy = DEFAULT_KERNEL_POLICY,
) -> FloatArray:
    """Weights ``1 / (d**power + epsilon)``, decreasing with distance.

    Weights are strictly positive until ``d**power`` overflows, where they
    become 0.0.
    """
    d = np.asarray(distances, dtype=np.float64)
    with np.errstate(over="ignore"):
        powered = np.power(d, policy.power)
    return cast(FloatArray, 1.0 / (powered + policy.epsilon))


def sensor_axis_values(
    sensors: Sequence[MeasurementPoint],
    time: float,
    angular_velocity: float,
    global_gain: float,
    policy: KernelPolicy = DEFAULT_KERNEL_POLICY,
) -> FloatArray:
    """Scaled instantaneous (horizontal, vertical, axial) value per sensor, shape ``(S, 3)``."""
    scale = global_gain * policy.unit_scalar
    values = np.zeros((len(sensors), 3), dtype=np.float64)
    for idx, sensor in enumerate(sensors):
        for axis_idx, component in enumerate(sensor.components()):
            values[idx, axis_idx] = evaluate_component(component, angular_velocity, time) * scale
    return values


def displacement_at(
    query_point: Sequence[float] | npt.ArrayLike,
    time: float,
    animation_rpm: float,
    sensors: Sequence[MeasurementPoint],
    global_gain: float,
    policy: KernelPolicy = DEFAULT_KERNEL_POLICY,
) -> FloatArray:
    """Blend every sensor's instantaneous motion into one displacement vector at ``query_point``.

    The result is the weight-normalized average of the sensors' scaled axis
    values (horizontal -> x, vertical -> y, axial -> z). No sensor is ever
    excluded; distant sensors simply carry negligible weight. An empty roster
    yields the zero vector.
    """
    if not sensors:
        return np.zeros((3,), dtype=np.float64)

    omega = rpm_to_angular_velocity(animation_rpm)
    qx, qy, qz = (float(v) for v in np.asarray(query_point, dtype=np.float64).reshape(3))
    scale = global_gain * policy.unit_scalar

    dx_sum = 0.0
    dy_sum = 0.0
    dz_sum = 0.0
    total_weight = 0.0

    for sensor in sensors:
        px, py, pz = sensor.position
        distance = hypot(qx - px, qy - py, qz - pz)
        try:
            weight = 1.0 / (distance**policy.power + policy.epsilon)
        except OverflowError:
            weight = 0.0

        mag_h = evaluate_component(sensor.horizontal, omega, time) * scale
        mag_v = evaluate_component(sensor.vertical, omega, time) * scale
        mag_a = evaluate_component(sensor.axial, omega, time) * scale

        dx_sum += mag_h * weight
        dy_sum += mag_v * weight
        dz_sum += mag_a * weight
        total_weight += weight

    if total_weight <= 0:
        return np.zeros((3,), dtype=np.float64)
    return np.asarray((dx_sum, dy_sum, dz_sum), dtype=np.float64) / total_weight


def displacement_field(
    query_points: npt.ArrayLike,
    time: float,
    animation_rpm: float,
    sensors: Sequence[MeasurementPoint],
    global_gain: float,
    policy: KernelPolicy = DEFAULT_KERNEL_POLICY,
) -> FloatArray:
    """Batched :func:`displacement_at` for an ``(N, 3)`` array of query points."""
    points = np.asarray(query_points, dtype=np.float64)
    if points.ndim != 2 or points.shape[1] != 3:
        raise InvalidParameterError("query_points must have shape (N, 3)")
    if not sensors:
        return np.zeros(points.shape, dtype=np.float64)

    omega = rpm_to_angular_velocity(animation_rpm)
    positions = np.asarray([sensor.position for sensor in sensors], dtype=np.float64)
    weights = inverse_distance_weights(cdist(points, positions), policy)
    values = sensor_axis_values(sensors, time, omega, global_gain, policy)

    blended = weights @ values
    totals = np.sum(weights, axis=1, keepdims=True)
    # Rows too far from every sensor for a finite weight stay at rest.
    return cast(FloatArray, np.divide(blended, totals, out=np.zeros_like(blended), where=totals > 0))
