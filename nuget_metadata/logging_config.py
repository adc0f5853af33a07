"""Logging configuration for nuget-metadata.

The package logs through the ``nuget_metadata`` logger. Its level and
format can be set from the environment:

- ``NUGET_METADATA_LOG_LEVEL``: DEBUG, INFO, WARNING or ERROR (default INFO)
- ``NUGET_METADATA_LOG_FORMAT``: ``json`` for one JSON object per record

Records go to stderr so they never mix with an SBOM written to stdout.
"""

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional

LOGGER_NAME = "nuget_metadata"
LOG_LEVEL_ENV = "NUGET_METADATA_LOG_LEVEL"
LOG_FORMAT_ENV = "NUGET_METADATA_LOG_FORMAT"
DEFAULT_LOG_LEVEL = logging.INFO


def resolve_log_level(level: Optional[str]) -> int:
    """Map a level name to its logging constant, falling back to INFO."""
    if not level:
        return DEFAULT_LOG_LEVEL
    value = getattr(logging, level.strip().upper(), None)
    return value if isinstance(value, int) else DEFAULT_LOG_LEVEL


def setup_logging(level: Optional[str] = None, structured: Optional[bool] = None) -> logging.Logger:
    """
    Set up the package logger.

    Args:
        level: Logging level name. Defaults to NUGET_METADATA_LOG_LEVEL.
        structured: Whether to emit JSON records. Defaults to
                    NUGET_METADATA_LOG_FORMAT being ``json``.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Already configured by an earlier call or by the host application
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv(LOG_LEVEL_ENV)
    if structured is None:
        structured = os.getenv(LOG_FORMAT_ENV, "").strip().lower() == "json"

    logger.setLevel(resolve_log_level(level))

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
    logger.addHandler(handler)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


logger = setup_logging()
