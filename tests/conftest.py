"""Shared pytest fixtures and test helpers for layerctl tests."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from layerctl.config.settings import LayerctlSettings
from layerctl.infrastructure.workspace import Workspace


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's LAYERCTL_* environment out of the tests."""
    for var in ("LAYERCTL_CONFIG", "LAYERCTL_DEFINITIONS__PATH", "LAYERCTL_INSTANCES__PATH"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary workspace directory with an empty ``layerctl.toml``."""
    (tmp_path / "layerctl.toml").write_text("", encoding="utf-8")
    return tmp_path


@pytest.fixture
def workspace(workspace_root: Path) -> Iterator[Workspace]:
    """Workspace rooted at a temp directory with default storage paths."""
    settings = LayerctlSettings.from_cli(workspace_root=workspace_root)
    ws = Workspace(settings)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp workspace so CLI invocations use it."""
    monkeypatch.chdir(workspace_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_definitions(root: Path, records: list[dict[str, Any]]) -> Path:
    """Write a definitions file at the default location under *root*."""
    path = root / ".layerctl" / "definitions.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def write_instances(root: Path, records: list[dict[str, Any]]) -> Path:
    """Write an instances file at the default location under *root*."""
    path = root / ".layerctl" / "instances.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(records), encoding="utf-8")
    return path
