"""Application state container and per-tick frame snapshots."""

from odsynth.state.frame import SimulationFrame
from odsynth.state.settings import ANIMATION_RPM_PRESETS, SimulationSettings
from odsynth.state.store import SimulationStore

__all__ = [
    "ANIMATION_RPM_PRESETS",
    "SimulationFrame",
    "SimulationSettings",
    "SimulationStore",
]
