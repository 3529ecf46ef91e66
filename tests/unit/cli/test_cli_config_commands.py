from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from layerstore.cli._dispatcher import main as cli_main

SRC_ROOT = Path(__file__).resolve().parents[3] / "src"


@pytest.fixture
def project(tmp_path: Path, write_layers_file) -> Path:
    """Two file layers: immutable defaults below a mutable active layer."""
    defaults = tmp_path / "defaults"
    defaults.mkdir()
    (defaults / "system.core.yml").write_text("site_name: Default\ntheme: basic\n", encoding="utf-8")
    (defaults / "node.1.yml").write_text("title: Locked\n", encoding="utf-8")
    (tmp_path / "active").mkdir()
    (tmp_path / "active" / "system.core.yml").write_text("site_name: Active\n", encoding="utf-8")
    return write_layers_file(
        "layers:\n"
        "  defaults:\n    kind: file\n    path: defaults\n    immutable: true\n"
        "  active:\n    kind: file\n    path: active\n"
        "storage: 'layered:/active/defaults'\n"
    )


def test_show_prints_merged_yaml(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["config", "show", "system.core", "--config", str(project)])

    assert code == 0
    assert capsys.readouterr().out == "site_name: Active\ntheme: basic\n"


def test_show_json(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["config", "show", "system.core", "--config", str(project), "--json"])

    assert code == 0
    assert json.loads(capsys.readouterr().out) == {
        "system.core": {"site_name": "Active", "theme": "basic"}
    }


def test_show_missing_object_fails(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["config", "show", "missing", "--config", str(project)])

    assert code == 1
    assert "not found" in capsys.readouterr().err


def test_list_and_exists(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["config", "list", "--config", str(project)]) == 0
    assert capsys.readouterr().out.split() == ["node.1", "system.core"]

    assert cli_main(["config", "exists", "node.1", "--config", str(project)]) == 0
    assert cli_main(["config", "exists", "node.2", "--config", str(project)]) == 1


def test_set_writes_to_active_layer(project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = tmp_path / "payload.json"
    payload.write_text('{"site_name": "From CLI", "slogan": "hi"}', encoding="utf-8")

    code = cli_main(["config", "set", "system.core", str(payload), "--config", str(project), "--json"])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["keys"] == ["site_name", "slogan"]
    assert (tmp_path / "active" / "system.core.yml").read_text(encoding="utf-8") == (
        "site_name: From CLI\nslogan: hi\n"
    )


def test_set_on_immutable_storage_fails(project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    payload = tmp_path / "payload.yml"
    payload.write_text("site_name: X\n", encoding="utf-8")

    code = cli_main([
        "config", "set", "system.core", str(payload),
        "--config", str(project), "--storage", "layered:/defaults", "--json",
    ])

    assert code == 1
    error = json.loads(capsys.readouterr().err)
    assert error["code"] == "ImmutableStoreError"
    assert error["context"]["operation"] == "write"


def test_delete_leaves_lower_layer_visible(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main(["config", "delete", "system.core", "--config", str(project)]) == 0
    capsys.readouterr()

    assert cli_main(["config", "show", "system.core", "--config", str(project), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["system.core"]["site_name"] == "Default"


def test_rename_without_qualifying_layer_succeeds(project: Path) -> None:
    assert cli_main(["config", "rename", "nothing.here", "other", "--config", str(project)]) == 0


def test_import_archive(project: Path, tmp_path: Path) -> None:
    export = tmp_path / "export"
    export.mkdir()
    (export / "views.front.yml").write_text("path: /front\n", encoding="utf-8")

    assert cli_main(["config", "import-archive", str(export), "--config", str(project)]) == 0
    assert (tmp_path / "active" / "views.front.yml").exists()


def test_missing_layers_file_is_reported(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli_main(["config", "list", "--config", str(tmp_path / "nope.yaml")])

    assert code == 1
    assert "Layers file not found" in capsys.readouterr().err


def test_storage_from_environment(project: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("LAYERSTORE_CONFIG", str(project))
    monkeypatch.setenv("LAYERSTORE_STORAGE", "layer:defaults")

    assert cli_main(["config", "show", "system.core", "--format", "json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"site_name": "Default", "theme": "basic"}


def test_no_arguments_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main([]) == 0
    assert "layerstore" in capsys.readouterr().out


def test_json_errors_are_the_only_stderr_output(project: Path, tmp_path: Path) -> None:
    """Warnings logged on the way to an error must not precede the JSON document."""
    payload = tmp_path / "payload.yml"
    payload.write_text("site_name: X\n", encoding="utf-8")
    env = dict(os.environ, PYTHONPATH=str(SRC_ROOT))

    result = subprocess.run(
        [
            sys.executable, "-m", "layerstore.cli._dispatcher",
            "config", "set", "system.core", str(payload),
            "--config", str(project), "--storage", "layered:/defaults", "--json",
        ],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )

    assert result.returncode == 1
    error = json.loads(result.stderr)
    assert error["code"] == "ImmutableStoreError"
    assert result.stdout == ""
