from __future__ import annotations

import json
from pathlib import Path

import pytest

from layerstore.cli._dispatcher import main as cli_main


def test_convert_yaml_file_to_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "system.core.yml"
    source.write_text("site_name: Example\nmenu:\n  - home\n", encoding="utf-8")

    assert cli_main(["convert", str(source)]) == 0
    assert json.loads(capsys.readouterr().out) == {"menu": ["home"], "site_name": "Example"}


def test_convert_json_to_yaml_file(tmp_path: Path) -> None:
    source = tmp_path / "in.json"
    source.write_text('{"b": 2, "a": 1}', encoding="utf-8")
    target = tmp_path / "out.yml"

    assert cli_main(["convert", str(source), "--to", "yaml", "--output", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == "a: 1\nb: 2\n"


def test_convert_rejects_malformed_input(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "bad.yml"
    source.write_text("key: [unterminated\n", encoding="utf-8")

    assert cli_main(["convert", str(source)]) == 1
    assert "Cannot decode yaml" in capsys.readouterr().err


def test_convert_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["convert", str(tmp_path / "missing.yml")]) == 1
    assert "Error:" in capsys.readouterr().err
