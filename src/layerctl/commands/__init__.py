"""Subcommand modules for layerctl."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups on the root CLI group."""
    from layerctl.commands.instances import instances
    from layerctl.commands.layers import layers

    cli.add_command(layers)
    cli.add_command(instances)
