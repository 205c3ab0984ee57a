"""Logging configuration for mdchangelog."""

from __future__ import annotations

import logging
import sys

_PACKAGE_LOGGER = "mdchangelog"

_LEVEL_PREFIXES = {
    logging.DEBUG: "[DEBUG]",
    logging.INFO: "[INFO]",
    logging.WARNING: "[WARN]",
    logging.ERROR: "[ERROR]",
    logging.CRITICAL: "[CRITICAL]",
}


class PrefixFormatter(logging.Formatter):
    """Formatter that prefixes each record with a short level tag."""

    def format(self, record: logging.LogRecord) -> str:
        prefix = _LEVEL_PREFIXES.get(record.levelno, "[LOG]")
        message = f"{prefix} {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` (typically ``__name__``)."""
    return logging.getLogger(name)


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Args:
        verbose: If True, show DEBUG messages.
        quiet: If True, show only WARNING and above.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(PrefixFormatter())
        logger.addHandler(handler)

    if verbose:
        logger.setLevel(logging.DEBUG)
    elif quiet:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.INFO)

    return logger
