"""Global scalar controls of the simulation."""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite

from odsynth.domain.errors import InvalidParameterError


ANIMATION_RPM_PRESETS: dict[str, int] = {
    "slow": 20,
    "normal": 110,
    "fast": 350,
}


@dataclass(frozen=True, slots=True)
class SimulationSettings:
    """User-facing controls consumed by the engine and the preset tables.

    ``machine_rpm`` and ``line_freq_hz`` only feed the fault presets; the
    engine animates at ``animation_rpm``.
    """

    animation_rpm: float = 110.0
    machine_rpm: float = 1480.0
    global_gain: float = 10.0
    line_freq_hz: float = 50.0
    is_playing: bool = True

    def __post_init__(self) -> None:
        for name in ("animation_rpm", "machine_rpm", "global_gain", "line_freq_hz"):
            if not isfinite(getattr(self, name)):
                raise InvalidParameterError(f"{name} must be finite")
        if self.animation_rpm < 0:
            raise InvalidParameterError("animation_rpm must be >= 0")
        if self.machine_rpm <= 0:
            raise InvalidParameterError("machine_rpm must be > 0")
        if self.global_gain <= 0:
            raise InvalidParameterError("global_gain must be > 0")
        if self.line_freq_hz <= 0:
            raise InvalidParameterError("line_freq_hz must be > 0")
