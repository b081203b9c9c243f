"""Command group: deployed layer instances."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerctl.commands._base import LayerctlGroup
from layerctl.services.instances import InstanceService

if TYPE_CHECKING:
    from layerctl.commands._context import AppContext

_INSTANCES_EXAMPLES = """\
  layerctl instances list
  layerctl instances list --layer eks
  layerctl instances dependants eks default"""


@click.group(cls=LayerctlGroup, examples=_INSTANCES_EXAMPLES)
def instances() -> None:
    """Inspect deployed layer instances."""


@instances.command(
    name="list",
    examples="""\
  layerctl instances list
  layerctl instances list --layer eks""",
)
@click.option("--layer", default=None, help="Only instances of this layer.")
@click.pass_obj
def list_cmd(app: AppContext, layer: str | None) -> None:
    """List deployed instances."""
    app.emit(InstanceService(app.workspace).list_instances(layer=layer))


@instances.command(
    examples="""\
  layerctl instances dependants eks default
  layerctl instances dependants eks default && terraform destroy""",
)
@click.argument("layer")
@click.argument("instance")
@click.pass_obj
def dependants(app: AppContext, layer: str, instance: str) -> None:
    """Check whether an instance can be deleted.

    Exits 0 only when no instance of a child layer is built on it.
    """
    app.emit(InstanceService(app.workspace).dependants(layer, instance))
