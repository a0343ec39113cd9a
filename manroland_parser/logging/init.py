from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Logging initialization with labeled prefixes.

Every line carries a label (DEBUG|INFO|WARN|ERROR|SUMMARY) instead of the
usual ``levelname:name:`` prefix. The handler writes to stderr: stdout is
reserved for the JSON document printed by the CLI.

Library modules log via ``logging.getLogger(__name__)``; they are children of
the ``manroland_parser`` logger configured here. Without ``setup_logging`` the
package stays silent like any other library.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "set_debug",
    "reset_logging",
]

LOGGER_NAME = "manroland_parser"

# between INFO=20 and WARNING=30, so --debug is not needed to see it
SUMMARY_LEVEL = 25


class LabeledFormatter(logging.Formatter):
    """Formats records as ``LABEL message``, followed by the traceback if any."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        text = f"{label} {record.getMessage()}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


def _labeled_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h.formatter, LabeledFormatter)]


def setup_logging(level: int = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach a labeled handler to the package logger.

    Idempotent: if a labeled handler is already attached, the logger is
    returned as is and ``level``/``stream`` are ignored.

    Args:
        level: level of both the logger and the handler
        stream: target of the handler, defaults to the current ``sys.stderr``

    Returns:
        The ``manroland_parser`` logger
    """
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    if _labeled_handlers(logger):
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    # the root logger would print every line a second time
    logger.propagate = False
    return logger


def set_debug(logger: logging.Logger) -> None:
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)


def reset_logging() -> None:
    """Detach the labeled handlers and hand the logger back to the root. Used by tests."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in _labeled_handlers(logger):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
