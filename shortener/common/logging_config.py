"""Logging configuration for URL shortener."""

import json
import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "url_shortener"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Setup logging configuration.

    Configures the ``url_shortener`` logger and the ``shortener`` package
    logger with the same handlers, so module loggers created with
    ``logging.getLogger(__name__)`` are emitted too.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON format
        stream: Console stream (defaults to stdout)

    Returns:
        Configured logger
    """
    # Convert level string to logging constant
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Create formatter
    if json_format:
        # JSON formatter for structured logging
        formatter = JsonFormatter()
    else:
        # Standard formatter
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers = []

    # Console handler
    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    # File handler (if specified)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in (LOGGER_NAME, "shortener", "web_app"):
        configured = logging.getLogger(name)
        configured.setLevel(numeric_level)
        # Remove existing handlers
        configured.handlers.clear()
        for handler in handlers:
            configured.addHandler(handler)
        configured.propagate = False

    return logging.getLogger(LOGGER_NAME)
