"""
Logging setup for the MRZ decoder.

The package logs through module-level loggers below ``mrz_decoder`` and ships
with a NullHandler only. ``configure_logging`` attaches one console handler to
the package logger; the root logger and the host application's handlers are
never touched.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Optional, TextIO

PACKAGE_LOGGER_NAME = "mrz_decoder"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

LOG_OFF_LEVEL = "OFF"  # Silences the package logger
LOG_FORMATS = frozenset({"text", "json"})


class MRZJSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


class _PackageHandler(logging.StreamHandler):
    """Marks the handler installed by ``configure_logging`` so it can be replaced."""


def install_null_handler() -> None:
    """Keep records of an unconfigured host application off ``logging.lastResort``."""
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not any(isinstance(handler, logging.NullHandler) for handler in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())


def configure_logging(
    level: str = "INFO", log_format: str = "text", stream: Optional[TextIO] = None
) -> Optional[logging.Handler]:
    """
    Send the decoder's log records to a console stream.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: One of LOG_LEVELS, or ``OFF`` to silence the package logger
        log_format: ``text`` or ``json``
        stream: Target stream, stdout if None

    Returns:
        The installed handler, or None when logging was turned off
    """
    level_name = level.upper()
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    for handler in package_logger.handlers[:]:
        if isinstance(handler, _PackageHandler):
            package_logger.removeHandler(handler)

    if level_name == LOG_OFF_LEVEL:
        package_logger.setLevel(logging.CRITICAL + 1)
        package_logger.propagate = False
        return None

    handler = _PackageHandler(stream or sys.stdout)
    if log_format.lower() == "json":
        handler.setFormatter(MRZJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))

    package_logger.addHandler(handler)
    package_logger.setLevel(LOG_LEVELS.get(level_name, logging.INFO))
    package_logger.propagate = False

    package_logger.debug("Logging configured. Level: %s, format: %s", level_name, log_format)
    return handler
