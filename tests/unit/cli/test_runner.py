"""Tests for the headless simulation CLI runner."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from odsynth.cli import runner
from odsynth.domain import AppMode
from odsynth.presets import ODSFault, OrbitFault


def test_main_writes_ods_report_and_returns_zero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = runner.main(
        [
            "--workspace-root",
            str(tmp_path),
            "--output-dir",
            "out",
            "--frames",
            "5",
            "--frame-delta",
            "0.02",
            "--preset",
            "unbalance_static",
        ]
    )

    assert exit_code == 0
    report = json.loads((tmp_path / "out" / "report.json").read_text(encoding="utf-8"))
    assert report["mode"] == "ods"
    assert report["preset"] == ODSFault.UNBALANCE_STATIC.value
    assert report["final_time"] == pytest.approx(0.1)
    assert len(report["frames"]) == 5
    assert [frame["time"] for frame in report["frames"]] == pytest.approx([0.02, 0.04, 0.06, 0.08, 0.1])
    assert len(report["frames"][0]["arrows"]) == len(report["sensor_ids"]) == 8
    assert "report:" in capsys.readouterr().out


def test_main_writes_orbit_trace(tmp_path: Path) -> None:
    exit_code = runner.main(
        [
            "--workspace-root",
            str(tmp_path),
            "--mode",
            "orbit",
            "--preset",
            OrbitFault.UNBALANCE.value,
            "--frames",
            "2",
            "--orbit-samples",
            "90",
        ]
    )

    assert exit_code == 0
    report = json.loads((tmp_path / "artifacts" / "odsynth" / "report.json").read_text(encoding="utf-8"))
    assert report["preset"] == OrbitFault.UNBALANCE.value
    assert len(report["orbit"]["trajectory"]) == 90
    assert report["orbit"]["scale"] == pytest.approx(60.0)


def test_paused_run_keeps_time_at_zero(tmp_path: Path) -> None:
    exit_code = runner.main(["--workspace-root", str(tmp_path), "--frames", "3", "--no-playing"])

    assert exit_code == 0
    report = json.loads((tmp_path / "artifacts" / "odsynth" / "report.json").read_text(encoding="utf-8"))
    assert report["final_time"] == 0.0


def test_single_frame_run_reports_its_time(tmp_path: Path) -> None:
    exit_code = runner.main(["--workspace-root", str(tmp_path), "--frames", "1", "--frame-delta", "0.25"])

    assert exit_code == 0
    report = json.loads((tmp_path / "artifacts" / "odsynth" / "report.json").read_text(encoding="utf-8"))
    assert report["frame_count"] == 1
    assert report["final_time"] == pytest.approx(0.25)


def test_main_returns_two_for_unknown_preset(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = runner.main(["--workspace-root", str(tmp_path), "--preset", "warp-drive"])

    assert exit_code == 2
    assert "unknown ods preset" in capsys.readouterr().err


def test_main_returns_two_for_invalid_settings(tmp_path: Path) -> None:
    assert runner.main(["--workspace-root", str(tmp_path), "--global-gain", "0"]) == 2
    assert runner.main(["--workspace-root", str(tmp_path), "--frames", "0"]) == 2


def test_list_presets_prints_labels(capsys: pytest.CaptureFixture[str]) -> None:
    assert runner.main(["--mode", "orbit", "--list-presets"]) == 0
    out = capsys.readouterr().out
    assert "oil_whirl: Oil Whirl (0.4X - 0.48X)" in out


def test_resolve_preset_matches_name_or_label() -> None:
    assert runner.resolve_preset(AppMode.ODS, "Soft Foot (Distortion)") == ODSFault.SOFT_FOOT
    assert runner.resolve_preset(AppMode.ODS, "GEAR_MESH") == ODSFault.GEAR_MESH
    with pytest.raises(ValueError, match="unknown orbit preset"):
        runner.resolve_preset(AppMode.ORBIT, ODSFault.BENT_SHAFT.value)
