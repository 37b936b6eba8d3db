"""
Structured logging configuration for govaudit.

This module provides a logging setup with console and optional file output,
with optional JSON formatting. Console logs go to stderr so that stdout only
ever carries the audit report.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union, cast

from pythonjsonlogger.json import JsonFormatter

from ..config import get_settings

ROOT_LOGGER_NAME = "govaudit"


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter that includes additional context."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord,
                   message_dict: Dict[str, Any]) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)
        log_record["logger"] = record.name
        log_record["level"] = record.levelname
        log_record["timestamp"] = record.created


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    log_level: Optional[Union[str, int]] = None,
    log_file: Optional[Union[str, Path]] = None,
    json_format: Optional[bool] = None,
) -> logging.Logger:
    """
    Configure and return a logger with the specified settings.

    Args:
        name: Logger name (default: "govaudit")
        log_level: Logging level (default: from settings)
        log_file: Optional file path for logging (default: from settings)
        json_format: Whether to use JSON formatting (default: from settings)

    Returns:
        Configured logger instance
    """
    settings = get_settings()
    if log_level is None:
        log_level = settings.LOG_LEVEL.value
    if json_format is None:
        json_format = settings.JSON_LOGS
    if log_file is None:
        log_file = settings.LOG_FILE

    if isinstance(log_level, str):
        log_level = getattr(logging, log_level.upper(), logging.WARNING)

    logger = logging.getLogger(name)
    logger.setLevel(cast(int, log_level))

    # Remove existing handlers to avoid duplicate logs
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if json_format:
        formatter: logging.Formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
        )
    else:
        formatter = logging.Formatter(settings.LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(cast(int, log_level))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(cast(int, log_level))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the govaudit namespace.

    Args:
        name: Dotted suffix (default: None, returns the package logger)

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
