from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from scripts.render_blueprint import main

FIXTURE_PATH = Path(__file__).resolve().parents[1] / "fixtures" / "blueprint_payload.json"


def test_renders_svg_file(tmp_path: Path) -> None:
    source = tmp_path / "tony.json"
    shutil.copy(FIXTURE_PATH, source)
    output = tmp_path / "tony.svg"

    exit_code = main([str(source), "--output", str(output), "--width", "1000", "--height", "700"])

    assert exit_code == 0
    svg = output.read_text(encoding="utf-8")
    assert svg.startswith("<svg")
    assert 'width="1000.00"' in svg
    assert "<title>tony</title>" in svg
    assert "TONY HK LTD" in svg


def test_writes_scene_json_to_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "payload.json"
    source.write_text(
        json.dumps({"nodes": [{"id": "A"}, {"id": "B"}], "edges": [{"source": "A", "target": "B"}]}),
        encoding="utf-8",
    )

    exit_code = main([str(source), "--format", "json"])

    assert exit_code == 0
    scene = json.loads(capsys.readouterr().out)
    assert [node["id"] for node in scene["nodes"]] == ["A", "B"]
    assert len(scene["edges"]) == 1


def test_invalid_payload_returns_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "bad.json"
    source.write_text("{not json", encoding="utf-8")

    assert main([str(source)]) == 1
    assert "Invalid graph payload" in capsys.readouterr().err


def test_missing_input_returns_error(tmp_path: Path) -> None:
    assert main([str(tmp_path / "nope.json")]) == 1
