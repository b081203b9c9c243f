"""Tests for the ``layers`` command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from layerctl.cli import cli
from tests.conftest import write_definitions

_DEFS = [
    {"name": "vpc", "dependencies": []},
    {"name": "eks", "dependencies": ["vpc"]},
    {"name": "preview", "dependencies": ["eks"]},
]


@pytest.mark.usefixtures("_isolated_workspace")
class TestLayersCommands:
    def test_list_empty(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["layers", "list"])
        assert result.exit_code == 0
        assert "No layers defined." in result.output

    def test_list_json(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        write_definitions(workspace_root, _DEFS)
        result = cli_runner.invoke(cli, ["--json", "layers", "list"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["count"] == 3

    def test_show(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        write_definitions(workspace_root, _DEFS)
        result = cli_runner.invoke(cli, ["--json", "layers", "show", "vpc"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["data"]["dependants"] == ["eks"]

    def test_show_missing_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["layers", "show", "ghost"])
        assert result.exit_code == 1

    def test_resolve_quiet(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        write_definitions(workspace_root, _DEFS)
        result = cli_runner.invoke(cli, ["-q", "layers", "resolve", "preview"])
        assert result.exit_code == 0
        assert result.output.split() == ["eks", "vpc"]

    def test_resolve_missing_dependency(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        write_definitions(workspace_root, [{"name": "a", "dependencies": ["gone"]}])
        result = cli_runner.invoke(cli, ["--json", "layers", "resolve", "a"])
        assert result.exit_code == 1

    def test_update_then_list(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        source = workspace_root / "layers.json"
        source.write_text(json.dumps(_DEFS), encoding="utf-8")
        result = cli_runner.invoke(cli, ["layers", "update", str(source)])
        assert result.exit_code == 0

        stored = json.loads(
            (workspace_root / ".layerctl" / "definitions.json").read_text(encoding="utf-8")
        )
        assert stored == _DEFS

        listed = cli_runner.invoke(cli, ["-q", "layers", "list"])
        assert listed.output.split() == ["vpc", "eks", "preview"]

    def test_update_invalid_exits_1(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        source = workspace_root / "layers.json"
        source.write_text('[{"dependencies": []}]', encoding="utf-8")
        result = cli_runner.invoke(cli, ["layers", "update", str(source)])
        assert result.exit_code == 1

    def test_update_missing_file(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["layers", "update", "nope.json"])
        assert result.exit_code == 2

    def test_check_clean(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        write_definitions(workspace_root, _DEFS)
        result = cli_runner.invoke(cli, ["layers", "check"])
        assert result.exit_code == 0
        assert "no issues found" in result.output

    def test_check_cycle_exits_1(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        write_definitions(
            workspace_root,
            [{"name": "a", "dependencies": ["b"]}, {"name": "b", "dependencies": ["a"]}],
        )
        result = cli_runner.invoke(cli, ["--json", "layers", "check"])
        assert result.exit_code == 1

    def test_custom_definitions_path(self, cli_runner: CliRunner, workspace_root: Path) -> None:
        (workspace_root / "layerctl.toml").write_text('[definitions]\npath = "defs.json"\n')
        (workspace_root / "defs.json").write_text(json.dumps(_DEFS), encoding="utf-8")
        result = cli_runner.invoke(cli, ["-q", "layers", "list"])
        assert result.exit_code == 0
        assert result.output.split() == ["vpc", "eks", "preview"]

    def test_undecodable_store_reports_storage_error(
        self, cli_runner: CliRunner, workspace_root: Path
    ) -> None:
        store = workspace_root / ".layerctl" / "definitions.json"
        store.parent.mkdir(parents=True)
        store.write_bytes(b"\xff\xfe[]")
        result = cli_runner.invoke(cli, ["--json", "layers", "list"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "STORAGE_ERROR" in result.output
