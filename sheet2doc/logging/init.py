from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every line is ``<LABEL> <message>`` with LABEL one of
DEBUG|INFO|WARN|ALERT|ERROR|CRITICAL|SUMMARY.

- ALERT carries user-facing alerts from the console UI
- SUMMARY carries the single end-of-run summary line

Module loggers (``logging.getLogger(__name__)`` under ``sheet2doc.*``) propagate
into the application logger configured here.
"""

__all__ = [
    "setup_logging",
    "get_logger",
    "log_alert",
    "log_summary",
    "reset_logging",
    "ALERT_LEVEL",
    "SUMMARY_LEVEL",
]

LOGGER_NAME = "sheet2doc"

# Custom levels: SUMMARY between INFO and WARNING, ALERT between WARNING and ERROR
SUMMARY_LEVEL = 25
ALERT_LEVEL = 35

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formatter that prefixes each message with a short level label."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
        ALERT_LEVEL: "ALERT",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging() -> logging.Logger:
    """Configure the application logger (idempotent).

    Output goes to stdout so the SUMMARY line lands next to the rest of the
    CLI output.

    Returns:
        Configured logger instance for the application
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logging.addLevelName(ALERT_LEVEL, "ALERT")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # Prevent duplicate output through the root logger
    logger.propagate = False

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured application logger, configuring it on first use."""
    if _logger is None:
        return setup_logging()
    return _logger


def enable_debug() -> None:
    logger = get_logger()
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)
    logger.debug("debug mode enabled")


def log_alert(message: str) -> None:
    get_logger().log(ALERT_LEVEL, message)


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level.

    Args:
        message: summary content without the ``SUMMARY`` prefix
    """
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
