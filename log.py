"""
Structured logging for the dashboard.

Console output while developing, JSON lines when deployed behind a log
collector. Call ``setup_logging`` once at startup, then grab loggers with
``get_logger``.
"""

import logging
import sys
from typing import Optional

import structlog


def setup_logging(log_level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure structlog for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: If True, output JSON logs. If False, use console format.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Dash/Flask still log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.typing.FilteringBoundLogger:
    """
    Get a configured logger instance.

    Example:
        log = get_logger("pipeline")
        log.info("season_filtered", season=2023, rows=1312)
    """
    return structlog.get_logger(name)
