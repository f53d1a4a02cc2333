"""Structured log output for the ``filterbuilder`` logger.

Library modules log through stdlib ``logging.getLogger(__name__)`` and
pass structured fields via ``extra=``. Host applications that want those
records rendered call :func:`configure_logging` (or
:meth:`FilterBuilderSettings.configure_logging`) with the ``[logging]``
settings section:

- Human (default): console renderer, colored when the stream is a TTY
- JSON: one JSON object per record

Only the ``filterbuilder`` logger is touched; the host's root logger and
handlers are left alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from filterbuilder.config.models import LoggingConfig

PACKAGE_LOGGER = "filterbuilder"


class _PackageHandler(logging.StreamHandler):
    """Marker type so repeated configuration replaces rather than stacks."""


def _renderer(config: LoggingConfig, stream: TextIO) -> structlog.types.Processor:
    if config.log_json:
        return structlog.processors.JSONRenderer()
    isatty = getattr(stream, "isatty", None)
    return structlog.dev.ConsoleRenderer(colors=bool(isatty and isatty()))


def build_formatter(config: LoggingConfig, stream: TextIO) -> logging.Formatter:
    """Return a formatter that renders stdlib records through structlog."""
    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.UnicodeDecoder(),
    ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config, stream),
        ],
    )


def configure_logging(
    config: LoggingConfig | None = None,
    *,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route ``filterbuilder`` records to *stream* (default: stderr).

    ``config.verbose`` sets the package logger to DEBUG, otherwise WARNING.
    Records stop at the package logger. Calling this again replaces the
    handler installed by the previous call.

    Returns the installed handler.
    """
    config = config or LoggingConfig()
    stream = stream or sys.stderr

    handler = _PackageHandler(stream)
    handler.setFormatter(build_formatter(config, stream))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if isinstance(existing, _PackageHandler):
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if config.verbose else logging.WARNING)
    package_logger.propagate = False
    return handler
