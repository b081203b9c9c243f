"""Layer definitions and deployed layer instances.

A :class:`LayerDefinition` is a named provisioning unit with an ordered
list of dependency names. A :class:`LayerInstance` is one deployed
occurrence of a definition, recording which instance of each parent
layer it was built against. That mapping is the join key used to decide
whether an instance still has dependants.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class InstanceStatus(StrEnum):
    """Deployment state reported by the instance registry."""

    ALIVE = "alive"
    FAULTY = "faulty"


class LayerDefinition(BaseModel):
    """A reusable layer with declared dependencies on other layers."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    dependencies: list[str] = Field(default_factory=list)

    def depends_on(self, layer_name: str) -> bool:
        """Return True if *layer_name* is a direct dependency."""
        return layer_name in self.dependencies


class LayerInstance(BaseModel):
    """A deployed occurrence of a layer definition."""

    model_config = {"frozen": True}

    definition_name: str = Field(min_length=1)
    instance_name: str = Field(min_length=1)
    dependencies_instance: dict[str, str] = Field(default_factory=dict)
    status: InstanceStatus = InstanceStatus.ALIVE

    def get_dependency_instance_name(self, parent_layer: str) -> str | None:
        """Instance of *parent_layer* this instance was built on, if recorded."""
        return self.dependencies_instance.get(parent_layer) or None
