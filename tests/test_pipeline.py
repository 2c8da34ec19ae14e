from __future__ import annotations

import runpy
import sys
from pathlib import Path

import pandas as pd
import pytest

from flagsets.config import load_config
from flagsets.pipeline import run_workshop
from flagsets.reporting import _sanitize_text, create_handout


@pytest.fixture
def summary(tmp_path: Path, bundled_csv: Path, monkeypatch: pytest.MonkeyPatch) -> dict:
    monkeypatch.delenv("FLAGSETS_SOURCE", raising=False)
    cfg = load_config(str(bundled_csv.parents[1] / "config" / "flagsets.yaml"))
    cfg["source"] = str(bundled_csv)
    cfg["output_dir"] = str(tmp_path / "workshop")
    return run_workshop(cfg)


def test_run_workshop_summary(summary: dict, bundled_csv: Path) -> None:
    flags = pd.read_csv(bundled_csv)
    assert summary["rows"] == len(flags)
    assert summary["membership_ok"] is True
    assert summary["roundtrip_ok"] is True
    assert summary["set_sizes"]["red"] == int(flags["red"].sum())
    assert sum(summary["intersections"].values()) == len(flags)


def test_run_workshop_writes_artefacts(summary: dict) -> None:
    assert set(summary["figures"]) == {
        "color_frequency",
        "bars_stripes",
        "colors_per_flag",
        "long_form",
        "venn",
        "euler",
        "upset",
    }
    for path in list(summary["figures"].values()) + list(summary["tables"].values()):
        assert Path(path).exists()
    long_df = pd.read_csv(summary["tables"]["long"])
    assert list(long_df.columns) == ["country", "attribute", "value"]


def test_create_handout(summary: dict, tmp_path: Path) -> None:
    out = create_handout(summary, str(tmp_path / "handout" / "flags.pdf"))
    data = Path(out).read_bytes()
    assert data.startswith(b"%PDF")


def test_sanitize_text() -> None:
    assert _sanitize_text("“red” – white…") == '"red" - white...'
    assert _sanitize_text(None) == ""


def _config_path(bundled_csv: Path) -> str:
    return str(bundled_csv.parents[1] / "config" / "flagsets.yaml")


def test_pipeline_cli(
    tmp_path: Path, bundled_csv: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.delenv("FLAGSETS_SOURCE", raising=False)
    out_dir = tmp_path / "cli"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "flagsets.pipeline",
            "--config", _config_path(bundled_csv),
            "--source", str(bundled_csv),
            "--output-dir", str(out_dir),
            "--venn-colors", "red", "white",
        ],
    )
    runpy.run_module("flagsets.pipeline", run_name="__main__")
    printed = capsys.readouterr().out
    assert "'roundtrip_ok': True" in printed
    assert (out_dir / "venn.png").exists()


def test_pipeline_cli_reports_missing_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.setattr(sys, "argv", ["flagsets.pipeline", "--config", str(tmp_path / "missing.yaml")])
    with pytest.raises(SystemExit) as exc:
        runpy.run_module("flagsets.pipeline", run_name="__main__")
    assert exc.value.code == 1
    assert "Workshop failed: Config file not found" in capsys.readouterr().err


def test_render_workshop_script(
    tmp_path: Path, bundled_csv: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    monkeypatch.delenv("FLAGSETS_SOURCE", raising=False)
    script = bundled_csv.parents[1] / "scripts" / "render_workshop.py"
    handout = tmp_path / "handout.pdf"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            str(script),
            "--config", _config_path(bundled_csv),
            "--source", str(bundled_csv),
            "--output-dir", str(tmp_path / "rendered"),
            "--handout", str(handout),
        ],
    )
    runpy.run_path(str(script), run_name="__main__")
    assert "Wrote 7 figures" in capsys.readouterr().out
    assert handout.read_bytes().startswith(b"%PDF")
