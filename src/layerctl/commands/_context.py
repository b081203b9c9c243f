"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Opens the workspace lazily, so ``--help`` and
``--version`` never touch the definitions file, and centralizes result
emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from layerctl.config.logging import bind_workspace, configure_logging
from layerctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from layerctl.config.settings import LayerctlSettings
    from layerctl.infrastructure.workspace import Workspace
    from layerctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: LayerctlSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def workspace(self) -> Workspace:
        """The workspace (created on first access)."""
        if self._workspace is None:
            from layerctl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
            bind_workspace(self._workspace.root)
        return self._workspace

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, normal return. Warnings go to stderr so they
          don't pollute piped output.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
