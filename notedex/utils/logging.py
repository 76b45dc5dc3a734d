"""
Logging utilities for the notedex CLI tool.

Log records are emitted either as one JSON object per line (the default) or
as plain text.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, Dict, Optional, TextIO

# Third-party loggers that are too chatty at INFO during bulk ingestion.
NOISY_LOGGERS = ("aiohttp.access", "asyncio")

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as JSON lines.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            A JSON string representation of the log record.
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        # Context attached through log_with_context
        context = getattr(record, "context", None)
        if context:
            log_data.update(context)

        # Paths and other non-JSON values are stringified
        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO", structured: bool = True, stream: Optional[TextIO] = None
) -> None:
    """
    Configure the root logger with a single console handler.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        structured: Emit JSON lines when True, plain text otherwise.
        stream: Stream to write to. Defaults to stderr so that command output
            on stdout stays clean.

    Raises:
        ValueError: If the log level is invalid.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(numeric_level)
    if structured:
        console_handler.setFormatter(StructuredLogFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a notedex module."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    context: Optional[Dict[str, Any]] = None,
    exc_info: bool = False,
) -> None:
    """
    Log a message with additional structured context.

    Args:
        logger: Logger instance.
        level: Log level (debug, info, warning, error, critical).
        message: Log message.
        context: Key/value pairs merged into the structured record.
        exc_info: Attach the active exception to the record.
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra={"context": context or {}}, exc_info=exc_info)
