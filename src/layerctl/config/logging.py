"""structlog configuration for layerctl.

Everything is written to stderr so stdout stays reserved for results:
colored console lines by default, one JSON object per line with
``--log-json``. Stdlib loggers (``logging.getLogger(__name__)``) are
routed through the same processor chain, so infrastructure modules and
structlog-native callers produce identical records.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog


def _level_for(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Safe to call repeatedly; the root handler is replaced, not stacked.

    Args:
        verbose: DEBUG-level output for ``layerctl.*`` loggers.
        quiet: Only ERROR and above. Ignored when *verbose* is set.
        log_json: Use the JSON renderer instead of the console renderer.
    """
    shared = _shared_processors()

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("layerctl").setLevel(_level_for(verbose=verbose, quiet=quiet))


def bind_workspace(root: Path) -> None:
    """Attach the workspace root to every subsequent log record."""
    structlog.contextvars.bind_contextvars(workspace=str(root))
