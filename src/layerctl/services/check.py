"""CheckService — read-only validation of the definition set.

Resolution tolerates cycles and only fails on missing names when it
reaches them. This check reports both problems for the whole set up
front, without modifying anything:

- ``MISSING_DEPENDENCY``: a layer references an undefined layer
- ``CYCLE``: an elementary dependency cycle (self-dependency included)
"""

from __future__ import annotations

from typing import Any

from layerctl.domain.errors import LayerctlError
from layerctl.services.base import BaseService
from layerctl.services.result import ServiceError, ServiceResult


class CheckService(BaseService):
    """Report configuration errors in the layer dependency graph."""

    def check(self) -> ServiceResult:
        graph = self._workspace.graph
        graph.invalidate()
        try:
            missing = graph.missing()
            cycles = graph.cycles()
            layer_count = len(self._workspace.definitions.list_layers())
        except LayerctlError as exc:
            return ServiceResult.failure("check", exc)

        issues: list[dict[str, Any]] = [
            {
                "code": "MISSING_DEPENDENCY",
                "layer": layer,
                "dependency": dependency,
                "message": f"Layer '{layer}' depends on undefined layer '{dependency}'",
            }
            for layer, dependency in missing
        ]
        issues.extend(
            {
                "code": "CYCLE",
                "layers": cycle,
                "message": "Dependency cycle: " + " -> ".join([*cycle, cycle[0]]),
            }
            for cycle in cycles
        )

        data = {"layers": layer_count, "count": len(issues), "issues": issues}
        if issues:
            return ServiceResult(
                ok=False,
                op="check",
                data=data,
                error=ServiceError(
                    code="INVALID_DEFINITIONS",
                    message=f"{len(issues)} problem(s) in layer definitions",
                ),
            )
        return ServiceResult(ok=True, op="check", data=data)
