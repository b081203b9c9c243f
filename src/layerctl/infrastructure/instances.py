"""Instance registry interface and a read-only file-backed implementation.

The registry is owned by the provisioning workflow; layerctl only reads
it. :class:`FileInstancesBackend` parses a JSON array of instance
records so the dependant check can run without a remote state backend.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from layerctl.domain.errors import RegistryError
from layerctl.domain.layers import LayerInstance
from layerctl.infrastructure.filesystem import read_json_document

logger = logging.getLogger(__name__)


class InstancesBackend(Protocol):
    """Read access to deployed layer instances."""

    def list_instances_by_layer(self, definition_name: str) -> list[LayerInstance]: ...


class FileInstancesBackend:
    """Instance registry read from a JSON file.

    The file is re-read on every listing so the registry always reflects
    what the provisioning workflow last wrote. A missing file means no
    instances are deployed.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[LayerInstance]:
        try:
            raw = read_json_document(self._path)
        except (OSError, ValueError) as exc:
            msg = f"Cannot read layer instances from {self._path}: {exc}"
            raise RegistryError(msg) from exc

        if raw is None:
            return []
        if not isinstance(raw, list):
            msg = f"Malformed instances file {self._path}: expected a JSON array"
            raise RegistryError(msg)

        try:
            return [LayerInstance.model_validate(item) for item in raw]
        except ValidationError as exc:
            msg = f"Malformed instances file {self._path}: {exc}"
            raise RegistryError(msg) from exc

    def list_instances(self) -> list[LayerInstance]:
        """Return every known instance."""
        return self._load()

    def list_instances_by_layer(self, definition_name: str) -> list[LayerInstance]:
        """Return the instances deployed from *definition_name*."""
        instances = [i for i in self._load() if i.definition_name == definition_name]
        logger.debug("Found %d instances of layer %s", len(instances), definition_name)
        return instances
