"""structlog configuration shared by the API, the CLI and the lint engine."""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Debug mode renders coloured key/value lines for humans; otherwise every
    event is emitted as one JSON object per line.  *level* overrides the
    default threshold (DEBUG in debug mode, INFO otherwise).
    """
    if level is not None:
        level = logging.getLevelName(level.upper())
    else:
        level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None):
    return structlog.get_logger(name)
