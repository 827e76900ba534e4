"""
Structured Logging Configuration
Event-style logging with structlog for the interpreter and its hosts.

Log output never goes to stdout: the CLI prints render trees there.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from pythonjsonlogger import jsonlogger

from .config import Settings

JSON_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _processors(json_logs: bool) -> list[Any]:
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    return [
        # session_id / batch_id bound by LogContext
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False, stream: TextIO | None = None) -> None:
    """
    Configure structured logging for the interpreter.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Emit one JSON object per line via python-json-logger
        stream: Destination stream (defaults to stderr)
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        jsonlogger.JsonFormatter(JSON_LOG_FORMAT) if json_logs else logging.Formatter(TEXT_LOG_FORMAT)
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=_processors(json_logs),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: Settings, stream: TextIO | None = None) -> None:
    """Configure logging from the A2UI_LOG_LEVEL / A2UI_JSON_LOGS settings."""
    configure_logging(settings.log_level, settings.json_logs, stream)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class LogContext:
    """
    Bind key/value pairs to every log event emitted inside the block.

    Exiting restores the previous values, so nested contexts (a batch inside
    a session) unwind correctly.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self.tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self.tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self.tokens)
