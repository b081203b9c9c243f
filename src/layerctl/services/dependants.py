"""Dependant detection for a single layer instance.

Deleting an instance is only safe when no live instance of a child layer
was built on top of it. The check is deliberately not transitive: only
direct children are inspected, and chained deletions re-check at every
step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from layerctl.infrastructure.definitions import DefinitionsBackend
    from layerctl.infrastructure.instances import InstancesBackend

log = structlog.get_logger(__name__)


def has_dependants(
    instances_backend: InstancesBackend,
    definitions_backend: DefinitionsBackend,
    layer_name: str,
    instance_name: str,
) -> bool:
    """Return True if any instance of a child layer uses *instance_name*.

    Only definitions that list *layer_name* as a dependency are looked up
    in the registry, so a layer without children never touches it.
    Store and registry failures propagate; callers must treat them as
    "deletion not safe".
    """
    log.debug("Checking if layer has dependants", layer=layer_name, instance=instance_name)

    for definition in definitions_backend.list_layers():
        if not definition.depends_on(layer_name):
            continue

        for instance in instances_backend.list_instances_by_layer(definition.name):
            if instance.get_dependency_instance_name(layer_name) == instance_name:
                log.debug(
                    "Found dependant instance",
                    layer=layer_name,
                    instance=instance_name,
                    dependant_layer=definition.name,
                    dependant_instance=instance.instance_name,
                )
                return True

    return False


def find_dependants(
    instances_backend: InstancesBackend,
    definitions_backend: DefinitionsBackend,
    layer_name: str,
    instance_name: str,
) -> list[tuple[str, str]]:
    """Like :func:`has_dependants` but collect every ``(layer, instance)`` match."""
    found: list[tuple[str, str]] = []
    for definition in definitions_backend.list_layers():
        if not definition.depends_on(layer_name):
            continue
        for instance in instances_backend.list_instances_by_layer(definition.name):
            if instance.get_dependency_instance_name(layer_name) == instance_name:
                found.append((definition.name, instance.instance_name))
    return found
