"""Tests for LayerctlSettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from layerctl.config.settings import LayerctlSettings


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = LayerctlSettings.from_cli(workspace_root=tmp_path)
        assert settings.workspace_root == tmp_path
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.verbose is False
        assert settings.definitions.path == Path(".layerctl/definitions.json")
        assert settings.instances.path == Path(".layerctl/instances.json")

    def test_frozen(self, tmp_path: Path) -> None:
        settings = LayerctlSettings.from_cli(workspace_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "layerctl.toml").write_text('[definitions]\npath = "layers.json"\n')
        settings = LayerctlSettings.from_cli(workspace_root=tmp_path)
        assert settings.definitions.path == Path("layers.json")
        assert settings.instances.path == Path(".layerctl/instances.json")

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "my.toml"
        custom.parent.mkdir()
        custom.write_text('[instances]\npath = "/srv/instances.json"\n')
        settings = LayerctlSettings.from_cli(config_path=str(custom), workspace_root=tmp_path)
        assert settings.instances.path == Path("/srv/instances.json")
        assert settings.config_path == custom

    def test_root_derived_from_config_location(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "layerctl.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        settings = LayerctlSettings.from_cli()
        assert settings.workspace_root.resolve() == tmp_path.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "layerctl.toml").write_text("[definitions\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            LayerctlSettings.from_cli(workspace_root=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "layerctl.toml").write_text('[definitions]\npath = "toml.json"\n')
        monkeypatch.setenv("LAYERCTL_DEFINITIONS__PATH", "env.json")
        settings = LayerctlSettings.from_cli(workspace_root=tmp_path)
        assert settings.definitions.path == Path("env.json")

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "layerctl.toml").write_text("verbose = true\n")
        settings = LayerctlSettings.from_cli(workspace_root=tmp_path, verbose=False)
        assert settings.verbose is False

    def test_cli_flags(self, tmp_path: Path) -> None:
        settings = LayerctlSettings.from_cli(
            workspace_root=tmp_path, json_output=True, quiet=True, log_json=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.log_json is True
