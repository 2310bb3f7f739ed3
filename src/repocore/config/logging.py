"""structlog configuration for repocore.

Two output modes:
- Human (default): colored console output to stderr
- JSON (log_json=True): structured JSON lines to stderr

Library modules log with ``structlog.get_logger(__name__)``. Until the
embedding application calls :func:`configure_logging` (or
:func:`configure_from_settings`), records follow whatever the host set up.
Configuring only touches the ``repocore`` logger: its handler is replaced,
it stops propagating, and the root logger is left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from repocore.config.settings import RepocoreSettings

PACKAGE_LOGGER = "repocore"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _build_handler(log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route ``repocore`` log records to stderr through structlog.

    Args:
        verbose: Emit DEBUG records from ``repocore``. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in package_logger.handlers[:]:
        package_logger.removeHandler(existing)
    package_logger.addHandler(_build_handler(log_json))
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def configure_from_settings(settings: RepocoreSettings) -> None:
    """Apply the logging flags carried by *settings*."""
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
