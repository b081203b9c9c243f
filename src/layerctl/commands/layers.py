"""Command group: layer definitions."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from layerctl.commands._base import LayerctlGroup
from layerctl.services.layers import LayerService

if TYPE_CHECKING:
    from layerctl.commands._context import AppContext

_LAYERS_EXAMPLES = """\
  layerctl layers list
  layerctl layers show eks
  layerctl layers resolve preview
  layerctl layers update layers.json
  layerctl layers check"""


@click.group(cls=LayerctlGroup, examples=_LAYERS_EXAMPLES)
def layers() -> None:
    """Inspect and replace layer definitions."""


@layers.command(
    name="list",
    examples="""\
  layerctl layers list
  layerctl --json layers list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List all layer definitions."""
    app.emit(LayerService(app.workspace).list_layers())


@layers.command(
    examples="""\
  layerctl layers show eks
  layerctl --json layers show eks""",
)
@click.argument("name")
@click.pass_obj
def show(app: AppContext, name: str) -> None:
    """Show one definition and the layers that depend on it."""
    app.emit(LayerService(app.workspace).get_layer(name))


@layers.command(
    examples="""\
  layerctl layers resolve preview
  layerctl -q layers resolve preview""",
)
@click.argument("name")
@click.pass_obj
def resolve(app: AppContext, name: str) -> None:
    """List every transitive dependency of a layer, in resolution order."""
    app.emit(LayerService(app.workspace).resolve(name))


@layers.command(
    examples="""\
  layerctl layers update layers.json""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def update(app: AppContext, file: Path) -> None:
    """Replace the whole definition set with the JSON array in FILE."""
    app.emit(LayerService(app.workspace).update_from_file(file))


@layers.command(
    examples="""\
  layerctl layers check
  layerctl --json layers check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Report missing dependencies and dependency cycles."""
    from layerctl.services.check import CheckService

    app.emit(CheckService(app.workspace).check())
