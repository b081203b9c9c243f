"""Workspace — the resource owner injected into every service.

Holds the definitions store, the instance registry, and the dependency
graph for one workspace root. Nothing here is a process-wide singleton:
create a Workspace, pass it to services, and :meth:`close` it (or use
it as a context manager) when done.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from layerctl.infrastructure.definitions import FileDefinitionsBackend
from layerctl.infrastructure.graph.engine import DependencyGraph
from layerctl.infrastructure.instances import FileInstancesBackend

if TYPE_CHECKING:
    from layerctl.config.settings import LayerctlSettings

logger = logging.getLogger(__name__)


class Workspace:
    """File-backed definitions and instances rooted at one directory."""

    def __init__(self, settings: LayerctlSettings) -> None:
        self._settings = settings
        self._root = settings.workspace_root
        self._definitions = FileDefinitionsBackend(self._resolve(settings.definitions.path))
        self._instances = FileInstancesBackend(self._resolve(settings.instances.path))
        self._graph = DependencyGraph(self._definitions)
        logger.debug(
            "Workspace at %s (definitions=%s, instances=%s)",
            self._root,
            self._definitions.path,
            self._instances.path,
        )

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self._root / path

    @property
    def root(self) -> Path:
        return self._root

    @property
    def settings(self) -> LayerctlSettings:
        return self._settings

    @property
    def definitions(self) -> FileDefinitionsBackend:
        return self._definitions

    @property
    def instances(self) -> FileInstancesBackend:
        return self._instances

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    def close(self) -> None:
        """Drop cached state held by the backends."""
        self._definitions.close()
        self._graph.invalidate()

    def __enter__(self) -> Workspace:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
