"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, layerctl.toml only carries
overrides. An empty (or absent) layerctl.toml is a valid workspace.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class DefinitionsConfig(BaseModel):
    """[definitions] section."""

    model_config = {"frozen": True}

    path: Path = Path(".layerctl/definitions.json")


class InstancesConfig(BaseModel):
    """[instances] section."""

    model_config = {"frozen": True}

    path: Path = Path(".layerctl/instances.json")

