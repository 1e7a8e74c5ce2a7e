"""CLI runner that simulates a fixed number of ticks and emits a JSON report."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Sequence

from odsynth.domain.models import AppMode
from odsynth.physics.field import ArrowPolicy
from odsynth.physics.interpolation import KernelPolicy
from odsynth.physics.orbit import OrbitPlotPolicy
from odsynth.presets.catalog import ODSFault, OrbitFault
from odsynth.state.frame import SimulationFrame
from odsynth.state.settings import ANIMATION_RPM_PRESETS, SimulationSettings
from odsynth.state.store import SimulationStore


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunnerArtifacts:
    """Report location and summary of one CLI execution."""

    report_path: Path
    mode: AppMode
    frames: int
    final_time: float


def build_parser() -> argparse.ArgumentParser:
    """Create CLI parser for a headless simulation run."""
    parser = argparse.ArgumentParser(
        prog="odsynth-runner",
        description="Simulate ODS deflection or shaft orbit for N ticks and write a JSON report.",
    )
    parser.add_argument("--mode", choices=[mode.value for mode in AppMode], default=AppMode.ODS.value)
    parser.add_argument(
        "--preset",
        type=str,
        default=None,
        help="Fault preset label (an ODS fault in ods mode, an orbit fault in orbit mode).",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="Print the preset labels available for --mode and exit.",
    )
    parser.add_argument(
        "--workspace-root",
        type=Path,
        default=Path.cwd(),
        help="Workspace root path used to resolve a relative output directory.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("artifacts/odsynth"),
        help="Directory for report.json.",
    )
    parser.add_argument("--frames", type=int, default=30, help="Number of ticks to simulate.")
    parser.add_argument("--frame-delta", type=float, default=1.0 / 60.0, help="Seconds per tick.")
    parser.add_argument(
        "--animation-rpm",
        type=float,
        default=float(ANIMATION_RPM_PRESETS["normal"]),
        help="Visual rotation speed; presets are 20 / 110 / 350.",
    )
    parser.add_argument("--global-gain", type=float, default=10.0, help="Master displacement gain.")
    parser.add_argument("--machine-rpm", type=float, default=1480.0, help="Running speed used by presets.")
    parser.add_argument("--line-freq", type=float, default=50.0, help="Line frequency in Hz used by presets.")
    parser.add_argument(
        "--playing",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Advance the clock on each tick.",
    )
    parser.add_argument("--kernel-power", type=float, default=3.5, help="Inverse-distance locality exponent.")
    parser.add_argument("--kernel-epsilon", type=float, default=0.1, help="Weight denominator offset.")
    parser.add_argument("--orbit-cycles", type=float, default=2.0, help="Fundamental cycles per orbit plot.")
    parser.add_argument("--orbit-samples", type=int, default=720, help="Samples per orbit plot.")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
    )
    return parser


def run_from_args(args: argparse.Namespace) -> RunnerArtifacts:
    """Execute the simulation described by ``args`` and persist the report."""
    if args.frames <= 0:
        raise ValueError("frames must be > 0")

    mode = AppMode(args.mode)
    workspace_root = args.workspace_root.resolve()
    output_dir = _resolve_path(workspace_root, args.output_dir)

    settings = SimulationSettings(
        animation_rpm=args.animation_rpm,
        machine_rpm=args.machine_rpm,
        global_gain=args.global_gain,
        line_freq_hz=args.line_freq,
        is_playing=bool(args.playing),
    )
    kernel_policy = KernelPolicy(power=args.kernel_power, epsilon=args.kernel_epsilon)
    orbit_policy = OrbitPlotPolicy(cycles=args.orbit_cycles, samples=args.orbit_samples)
    arrow_policy = ArrowPolicy()

    store = SimulationStore(settings, kernel_policy=kernel_policy)
    store.set_app_mode(mode)
    if args.preset is not None:
        store.apply_preset(resolve_preset(mode, args.preset))

    frames_payload: list[dict[str, Any]] = []
    frame: SimulationFrame = store.snapshot()
    for _ in range(args.frames):
        frame = store.tick(args.frame_delta)
        if mode == AppMode.ODS:
            frames_payload.append(_ods_frame_payload(frame, arrow_policy))

    payload: dict[str, Any] = {
        "mode": mode.value,
        "preset": (store.ods_fault if mode == AppMode.ODS else store.orbit_fault).value,
        "settings": asdict(settings),
        "kernel_policy": asdict(kernel_policy),
        "frame_delta": args.frame_delta,
        "frame_count": args.frames,
        "final_time": frame.time,
        "final_shaft_angle": frame.shaft_angle,
    }
    if mode == AppMode.ODS:
        payload["sensor_ids"] = [sensor.id for sensor in frame.sensors]
        payload["frames"] = frames_payload
    else:
        payload["orbit"] = _orbit_payload(frame, orbit_policy)

    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / "report.json"
    _write_json(report_path, payload)
    LOGGER.info("wrote %s report with %d frames to %s", mode.value, args.frames, report_path)

    return RunnerArtifacts(report_path=report_path, mode=mode, frames=args.frames, final_time=frame.time)


def resolve_preset(mode: AppMode, label: str) -> ODSFault | OrbitFault:
    """Match a preset by label or enum member name, case-insensitively."""
    fault_type: type[ODSFault] | type[OrbitFault] = ODSFault if mode == AppMode.ODS else OrbitFault
    needle = label.strip().lower()
    for fault in fault_type:
        if needle in (fault.value.lower(), fault.name.lower()):
            return fault
    raise ValueError(f"unknown {mode.value} preset: {label!r}")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.list_presets:
        fault_type = ODSFault if args.mode == AppMode.ODS.value else OrbitFault
        for fault in fault_type:
            print(f"{fault.name.lower()}: {fault.value}")
        return 0

    try:
        artifacts = run_from_args(args)
    except Exception as exc:
        print(f"[ERROR] odsynth runner failed: {exc}", file=sys.stderr)
        return 2

    print(f"report: {artifacts.report_path}")
    print(f"mode: {artifacts.mode.value}")
    print(f"frames: {artifacts.frames}")
    print(f"final_time: {artifacts.final_time:.6f}")
    return 0


def _ods_frame_payload(frame: SimulationFrame, arrow_policy: ArrowPolicy) -> dict[str, Any]:
    arrows = frame.vector_arrows(arrow_policy=arrow_policy)
    return {
        "time": frame.time,
        "arrows": [
            {
                "base": [float(v) for v in glyph.base],
                "direction": [float(v) for v in glyph.direction],
                "length": glyph.length,
                "visible": glyph.visible,
            }
            for glyph in arrows
        ],
    }


def _orbit_payload(frame: SimulationFrame, policy: OrbitPlotPolicy) -> dict[str, Any] | None:
    trace = frame.orbit_trace(policy)
    if trace is None:
        return None
    return {
        "trajectory": trace.trajectory.tolist(),
        "keyphasor_point": trace.keyphasor_point.tolist(),
        "scale": trace.scale,
        "pixels_per_unit": trace.pixels_per_unit,
        "viewport_size": trace.viewport_size,
    }


def _resolve_path(base_dir: Path, path_value: Path) -> Path:
    if path_value.is_absolute():
        return path_value.resolve()
    return (base_dir / path_value).resolve()


def _write_json(path: Path, payload: dict[str, Any]) -> None:
    path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


if __name__ == "__main__":
    raise SystemExit(main())
