"""structlog based logger setup.

Events are rendered by structlog and written through a stdlib handler on the
``vende_client`` logger, so every module logger (``vende_client.retry``,
``vende_client.http_client``) shares one level and one output stream.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from .config import LogSection

ROOT_LOGGER = "vende_client"


def _install_handler(level: int, stream: TextIO) -> None:
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


def new_logger(
    level: str = "INFO",
    format: str = "json",
    stream: TextIO | None = None,
) -> structlog.stdlib.BoundLogger:
    """Configure structlog for the client and return its root logger.

    Args:
        level: log level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: output format ("json" or "text")
        stream: destination of rendered lines, stdout by default
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    _install_handler(log_level, stream if stream is not None else sys.stdout)

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if format == "json":
        processors += [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # Module loggers are created at import time; they must pick up later reconfiguration.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    return structlog.stdlib.get_logger(ROOT_LOGGER)


def configure_logging(
    section: LogSection, stream: TextIO | None = None
) -> structlog.stdlib.BoundLogger:
    """Configure logging from a :class:`LogSection`."""
    return new_logger(level=section.level, format=section.format, stream=stream)
