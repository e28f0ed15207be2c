"""Structured logging for the searchlink package using structlog.

Only the ``searchlink`` logger is configured; the root logger and structlog's
global configuration belong to the host service. When the host has already
installed root handlers, searchlink records propagate to them unchanged.
Otherwise a stdout handler rendering through structlog is attached to the
package logger.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from searchlink.config.settings import ObservabilitySettings

PACKAGE_LOGGER = "searchlink"

_HANDLER_NAME = "searchlink.stdout"


def build_formatter(log_format: str = "json") -> structlog.stdlib.ProcessorFormatter:
    """Return a formatter rendering stdlib records as JSON or console lines."""
    pre_chain: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    processors: list = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    return structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processors=processors)


def setup_logging(settings: ObservabilitySettings | None = None) -> logging.Logger:
    """Configure the ``searchlink`` logger.

    Safe to call more than once; a handler attached by an earlier call is
    replaced rather than duplicated.

    Args:
        settings: Observability settings. Uses defaults if None.

    Returns:
        The configured package logger.
    """
    log_level = settings.log_level.upper() if settings else "INFO"
    log_format = settings.log_format if settings else "json"

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, log_level, logging.INFO))

    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)
            handler.close()

    if logging.getLogger().handlers:
        package_logger.propagate = True
        return package_logger

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(build_formatter(log_format))
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger
