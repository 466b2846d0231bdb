"""
Logging configuration for spatialctx.

Library modules log through children of the "spatialctx" logger, which
carries a NullHandler so nothing is printed unless an application asks
for it. setup_logging() attaches console and file handlers to that
package logger only; the root logger is left to the embedding
application.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from spatialctx.core.config import settings

PACKAGE_LOGGER = "spatialctx"

_RECORD_KEYS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with any ``extra={...}`` fields inlined."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        log_data.update((k, v) for k, v in vars(record).items() if k not in _RECORD_KEYS)
        return json.dumps(log_data, default=str)


def get_log_level(level_name: str) -> int:
    """
    Convert a level name such as "debug" or "WARNING" to its constant.

    Unknown names fall back to INFO.
    """
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_logs: bool = False,
    enable_console: bool = True,
) -> logging.Logger:
    """
    Attach handlers to the spatialctx package logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        log_level: Level name; defaults to settings.log_level
        log_file: Optional file to append records to
        json_logs: Write the file as JSON lines
        enable_console: Log to stderr

    Returns:
        The configured package logger
    """
    level = get_log_level(log_level or settings.log_level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(level)

    if enable_console:
        if settings.environment == "development":
            fmt = "%(levelname)s | %(name)s:%(lineno)d | %(message)s"
        else:
            fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            JSONFormatter() if json_logs else logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")
        )
        logger.addHandler(file_handler)

    if logger.handlers:
        # Handled here; don't print twice through the root logger
        logger.propagate = False
    else:
        logger.addHandler(logging.NullHandler())
        logger.propagate = True

    logger.debug(f"Logging initialized: level={logging.getLevelName(level)}, file={log_file}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Module logger, typically ``get_logger(__name__)``."""
    return logging.getLogger(name)
