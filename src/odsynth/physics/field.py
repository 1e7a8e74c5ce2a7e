"""Field consumers: mesh-vertex deformation and displacement arrows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, cast

import numpy as np
import numpy.typing as npt

from odsynth.domain.errors import InvalidParameterError
from odsynth.domain.models import MeasurementPoint
from odsynth.physics.interpolation import DEFAULT_KERNEL_POLICY, KernelPolicy, displacement_field


FloatArray = npt.NDArray[np.float64]


@dataclass(frozen=True, slots=True)
class ArrowPolicy:
    """Display constants for displacement arrows."""

    visual_scale: float = 4.0
    min_magnitude: float = 0.001

    def __post_init__(self) -> None:
        if not self.visual_scale > 0:
            raise InvalidParameterError("visual_scale must be > 0")
        if self.min_magnitude < 0:
            raise InvalidParameterError("min_magnitude must be >= 0")


DEFAULT_ARROW_POLICY = ArrowPolicy()


@dataclass(frozen=True, slots=True, eq=False)
class ArrowGlyph:
    """One displacement arrow anchored on the deformed surface."""

    base: FloatArray
    direction: FloatArray
    length: float
    magnitude: float
    visible: bool


def deform_vertices(
    rest_vertices: npt.ArrayLike,
    time: float,
    animation_rpm: float,
    sensors: Sequence[MeasurementPoint],
    global_gain: float,
    policy: KernelPolicy = DEFAULT_KERNEL_POLICY,
) -> FloatArray:
    """Displace world-space rest vertices by the blended field."""
    rest = np.asarray(rest_vertices, dtype=np.float64)
    offsets = displacement_field(rest, time, animation_rpm, sensors, global_gain, policy)
    return cast(FloatArray, rest + offsets)


def vector_arrows(
    anchors: npt.ArrayLike,
    time: float,
    animation_rpm: float,
    sensors: Sequence[MeasurementPoint],
    global_gain: float,
    policy: KernelPolicy = DEFAULT_KERNEL_POLICY,
    arrow_policy: ArrowPolicy = DEFAULT_ARROW_POLICY,
) -> tuple[ArrowGlyph, ...]:
    """Build one arrow per anchor pointing along its instantaneous displacement."""
    points = np.asarray(anchors, dtype=np.float64)
    offsets = displacement_field(points, time, animation_rpm, sensors, global_gain, policy)

    glyphs: list[ArrowGlyph] = []
    for anchor, offset in zip(points, offsets):
        magnitude = float(np.linalg.norm(offset))
        base = anchor + offset
        if magnitude == 0.0 or magnitude < arrow_policy.min_magnitude:
            glyphs.append(
                ArrowGlyph(
                    base=base,
                    direction=np.zeros((3,), dtype=np.float64),
                    length=0.0,
                    magnitude=magnitude,
                    visible=False,
                )
            )
            continue

        glyphs.append(
            ArrowGlyph(
                base=base,
                direction=offset / magnitude,
                length=magnitude * arrow_policy.visual_scale,
                magnitude=magnitude,
                visible=True,
            )
        )
    return tuple(glyphs)
