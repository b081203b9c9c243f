"""Layer definition store backed by a single JSON file.

The file holds the complete definition set as a JSON array and is
replaced wholesale on every update. In memory the set is an immutable
snapshot (name -> definition, in file order). :meth:`update_layers`
builds a new snapshot, persists it atomically, and only then publishes
it, so readers see either the old set or the new one, never a mix.

There is no in-process locking. If several processes share the file,
mutual exclusion is the caller's responsibility.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, TypeAlias

from pydantic import ValidationError

from layerctl.domain.errors import NotFoundError, StorageError
from layerctl.domain.layers import LayerDefinition
from layerctl.infrastructure.filesystem import read_json_document, write_json_atomic

logger = logging.getLogger(__name__)

_Snapshot: TypeAlias = Mapping[str, LayerDefinition]


class DefinitionsBackend(Protocol):
    """Read/replace access to the layer definition set."""

    def list_layers(self) -> list[LayerDefinition]: ...

    def get_layer(self, name: str) -> LayerDefinition: ...

    def resolve_dependencies(self, layer: LayerDefinition) -> list[LayerDefinition]: ...

    def update_layers(self, definitions: Iterable[LayerDefinition]) -> None: ...


def _build_snapshot(definitions: Iterable[LayerDefinition]) -> _Snapshot:
    """Index *definitions* by name. Later duplicates replace earlier ones."""
    index: dict[str, LayerDefinition] = {}
    for definition in definitions:
        index[definition.name] = definition
    return MappingProxyType(index)


class FileDefinitionsBackend:
    """Definition store persisted as one JSON document.

    The snapshot is loaded lazily on first read, or explicitly via
    :meth:`open`. A missing file is an empty definition set.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._snapshot: _Snapshot | None = None

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Load the current definition set from disk."""
        self._snapshot = self._load()

    def reload(self) -> None:
        """Discard the in-memory snapshot and read the file again."""
        self.open()

    def close(self) -> None:
        """Release the in-memory snapshot."""
        self._snapshot = None

    def _current(self) -> _Snapshot:
        if self._snapshot is None:
            self._snapshot = self._load()
        return self._snapshot

    def _load(self) -> _Snapshot:
        try:
            raw = read_json_document(self._path)
        except (OSError, ValueError) as exc:
            msg = f"Cannot read layer definitions from {self._path}: {exc}"
            raise StorageError(msg, path=self._path) from exc

        if raw is None:
            logger.debug("No definitions file at %s, starting empty", self._path)
            return _build_snapshot([])
        if not isinstance(raw, list):
            msg = f"Malformed definitions file {self._path}: expected a JSON array"
            raise StorageError(msg, path=self._path)

        try:
            definitions = [LayerDefinition.model_validate(item) for item in raw]
        except ValidationError as exc:
            msg = f"Malformed definitions file {self._path}: {exc}"
            raise StorageError(msg, path=self._path) from exc

        logger.debug("Loaded %d layer definitions from %s", len(definitions), self._path)
        return _build_snapshot(definitions)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update_layers(self, definitions: Iterable[LayerDefinition]) -> None:
        """Replace the entire definition set with *definitions*.

        The new set is written to disk first; the in-memory snapshot is
        swapped only after the atomic rename succeeds.
        """
        snapshot = _build_snapshot(definitions)
        payload = [definition.model_dump(mode="json") for definition in snapshot.values()]
        try:
            write_json_atomic(self._path, payload)
        except OSError as exc:
            msg = f"Cannot write layer definitions to {self._path}: {exc}"
            raise StorageError(msg, path=self._path) from exc

        self._snapshot = snapshot
        logger.debug("Replaced definition set with %d layers", len(snapshot))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_layer(self, name: str) -> LayerDefinition:
        """Return the definition named *name*."""
        definition = self._current().get(name)
        if definition is None:
            raise NotFoundError(name)
        return definition

    def list_layers(self) -> list[LayerDefinition]:
        """Return every definition, in file order."""
        return list(self._current().values())

    def resolve_dependencies(self, layer: LayerDefinition) -> list[LayerDefinition]:
        """Return all transitive dependencies of *layer*.

        Depth-first, in declaration order. Each layer appears once, at its
        first encounter; an already-visited name is not expanded again, so
        dependency cycles terminate instead of recursing forever. *layer*
        itself counts as visited and is never part of the result.

        Raises:
            NotFoundError: a referenced layer is absent. No partial result
                is returned.
        """
        snapshot = self._current()
        resolved: list[LayerDefinition] = []
        visited: set[str] = {layer.name}

        # Explicit stack of iterators keeps deep chains off the call stack.
        stack = [iter(layer.dependencies)]
        while stack:
            name = next(stack[-1], None)
            if name is None:
                stack.pop()
                continue
            if name in visited:
                continue
            dependency = snapshot.get(name)
            if dependency is None:
                raise NotFoundError(name)
            visited.add(name)
            resolved.append(dependency)
            stack.append(iter(dependency.dependencies))

        return resolved
