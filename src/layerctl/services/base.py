"""BaseService — shared foundation for layerctl services.

Every service receives a :class:`Workspace` at construction time and
reaches the definitions store, instance registry, and dependency graph
only through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from layerctl.infrastructure.workspace import Workspace


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class LayerService(BaseService):
            def list_layers(self) -> ServiceResult:
                layers = self._workspace.definitions.list_layers()
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace
