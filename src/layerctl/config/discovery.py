"""Locate the workspace's layerctl.toml.

The LAYERCTL_CONFIG env var names the file directly; otherwise the
finder walks up from the working directory, the way git finds .git/.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "layerctl.toml"
CONFIG_ENV_VAR = "LAYERCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest layerctl.toml at or above *start* (default: cwd).

    A LAYERCTL_CONFIG that points at a missing file yields None rather
    than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
