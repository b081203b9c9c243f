"""LayerService — listing, lookup, resolution, and replacement of definitions."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from layerctl.domain.errors import LayerctlError
from layerctl.domain.layers import LayerDefinition
from layerctl.services.base import BaseService
from layerctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _layer_payload(layer: LayerDefinition) -> dict[str, Any]:
    return layer.model_dump(mode="json")


class LayerService(BaseService):
    """Read and replace the workspace's layer definitions."""

    def list_layers(self) -> ServiceResult:
        try:
            layers = self._workspace.definitions.list_layers()
        except LayerctlError as exc:
            return ServiceResult.failure("list_layers", exc)

        items = [_layer_payload(layer) for layer in layers]
        return ServiceResult(
            ok=True,
            op="list_layers",
            data={"count": len(items), "items": items},
        )

    def get_layer(self, name: str) -> ServiceResult:
        """Look up one definition, with the layers that directly depend on it."""
        try:
            layer = self._workspace.definitions.get_layer(name)
            dependants = self._workspace.graph.children(name)
        except LayerctlError as exc:
            return ServiceResult.failure("get_layer", exc)

        return ServiceResult(
            ok=True,
            op="get_layer",
            data={**_layer_payload(layer), "dependants": dependants},
        )

    def resolve(self, name: str) -> ServiceResult:
        """Resolve the full, ordered transitive dependency list of *name*."""
        definitions = self._workspace.definitions
        try:
            layer = definitions.get_layer(name)
            resolved = definitions.resolve_dependencies(layer)
        except LayerctlError as exc:
            return ServiceResult.failure("resolve", exc)

        return ServiceResult(
            ok=True,
            op="resolve",
            data={
                "layer": name,
                "count": len(resolved),
                "items": [_layer_payload(dep) for dep in resolved],
            },
        )

    def update_layers(self, records: list[dict[str, Any]]) -> ServiceResult:
        """Validate *records* and replace the whole definition set with them.

        Nothing is written unless every record is a valid definition.
        """
        try:
            definitions = [LayerDefinition.model_validate(record) for record in records]
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False, include_input=False)
            return ServiceResult(
                ok=False,
                op="update_layers",
                error=ServiceError(
                    code="INVALID_INPUT",
                    message=f"Invalid layer definition: {exc.error_count()} error(s)",
                    detail={"errors": errors},
                ),
            )

        warnings: list[str] = []
        seen: set[str] = set()
        for definition in definitions:
            if definition.name in seen:
                warnings.append(f"Duplicate layer '{definition.name}': last definition wins")
            seen.add(definition.name)

        try:
            self._workspace.definitions.update_layers(definitions)
        except LayerctlError as exc:
            return ServiceResult.failure("update_layers", exc)
        finally:
            self._workspace.graph.invalidate()

        logger.info("Replaced layer definitions (%d layers)", len(seen))
        return ServiceResult(
            ok=True,
            op="update_layers",
            data={"count": len(seen), "names": sorted(seen)},
            warnings=warnings,
        )

    def update_from_file(self, path: Path) -> ServiceResult:
        """Replace the definition set with the JSON array stored at *path*."""
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            return ServiceResult(
                ok=False,
                op="update_layers",
                error=ServiceError(
                    code="INVALID_INPUT",
                    message=f"Cannot read definitions from {path}: {exc}",
                    detail={"path": str(path)},
                ),
            )

        if not isinstance(raw, list):
            return ServiceResult(
                ok=False,
                op="update_layers",
                error=ServiceError(
                    code="INVALID_INPUT",
                    message=f"{path} must contain a JSON array of layer definitions",
                    detail={"path": str(path)},
                ),
            )
        return self.update_layers(raw)
