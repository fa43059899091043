"""
Structured logging infrastructure using structlog.

Segment readers, writers and tools log through loggers obtained from
get_logger(). configure_logging() selects:
- JSON output for shipping pipelines
- Console output for interactive tools such as the segment printer
- Output to stdout, stderr or an append-only log file
- Log level

configure_logging_from_config() reads the same settings from the logging
section of a Config, with explicit arguments taking precedence.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

LOG_FORMATS = ("json", "console")


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log entries."""
    event_dict["app"] = "delimitedlog"
    return event_dict


def _build_handler(log_output: str) -> logging.Handler:
    if log_output == "stdout":
        return logging.StreamHandler(sys.stdout)
    if log_output == "stderr":
        return logging.StreamHandler(sys.stderr)
    return logging.FileHandler(log_output, mode="a", encoding="utf-8")


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_output: str = "stdout",
) -> None:
    """
    Configure structured logging for the application.

    Calling it again replaces the previous configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or console)
        log_output: Output destination (stdout, stderr, or file path)

    Raises:
        ValueError: If the level or format is unknown
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {log_format!r} (expected one of {list(LOG_FORMATS)})")

    handler = _build_handler(log_output)
    logging.basicConfig(
        format="%(message)s",
        handlers=[handler],
        level=level,
        force=True,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_app_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # no ANSI escapes in files or pipes
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=handler.stream.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_config(
    config,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_output: str = "stdout",
) -> None:
    """
    Configure logging from the logging section of a Config.

    Args:
        config: Config providing logging.level and logging.format
        log_level: Level overriding the configured one
        log_format: Format overriding the configured one
        log_output: Output destination (stdout, stderr, or file path)
    """
    configure_logging(
        log_level=log_level or config.get("logging.level", "INFO"),
        log_format=log_format or config.get("logging.format", "json"),
        log_output=log_output,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
