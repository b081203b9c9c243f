"""InstanceService — read-only queries against the instance registry."""

from __future__ import annotations

from layerctl.domain.errors import LayerctlError
from layerctl.services.base import BaseService
from layerctl.services.dependants import find_dependants
from layerctl.services.result import ServiceError, ServiceResult


class InstanceService(BaseService):
    """Inspect deployed instances and gate their deletion."""

    def list_instances(self, *, layer: str | None = None) -> ServiceResult:
        registry = self._workspace.instances
        try:
            if layer is None:
                instances = registry.list_instances()
            else:
                instances = registry.list_instances_by_layer(layer)
        except LayerctlError as exc:
            return ServiceResult.failure("list_instances", exc)

        items = [instance.model_dump(mode="json") for instance in instances]
        return ServiceResult(
            ok=True,
            op="list_instances",
            data={"count": len(items), "items": items},
        )

    def dependants(self, layer: str, instance: str) -> ServiceResult:
        """Decide whether instance *instance* of *layer* can be deleted.

        Fail-closed: the result is ``ok`` only when the check completed and
        found no dependant instance. Existing dependants are reported as a
        ``HAS_DEPENDANTS`` error listing every match.
        """
        definitions = self._workspace.definitions
        registry = self._workspace.instances
        try:
            matches = find_dependants(registry, definitions, layer, instance)
        except LayerctlError as exc:
            return ServiceResult.failure("dependants", exc)

        if matches:
            items = [{"layer": name, "instance": inst} for name, inst in matches]
            return ServiceResult(
                ok=False,
                op="dependants",
                data={"layer": layer, "instance": instance, "count": len(items), "items": items},
                error=ServiceError(
                    code="HAS_DEPENDANTS",
                    message=f"Instance '{instance}' of layer '{layer}' has dependants",
                    detail={"dependants": items},
                ),
            )

        return ServiceResult(
            ok=True,
            op="dependants",
            data={"layer": layer, "instance": instance, "count": 0, "items": []},
        )
