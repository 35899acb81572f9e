# -*- coding: utf-8 -*-
"""Logging configuration for pandas-ta-series.

The library itself only emits records through ``get_logger``; the package
logger carries a ``NullHandler`` so nothing is printed unless the
application (or one of the scripts) calls ``setup_logging``.
"""
import json
import logging
import sys
from datetime import datetime, timezone

ROOT_LOGGER_NAME = "pandas_ta_series"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "indicator"):
            log_entry["indicator"] = record.indicator
        if hasattr(record, "version"):
            log_entry["version"] = record.version
        return json.dumps(log_entry)


def setup_logging(level: str = "INFO", json_format: bool = False) -> logging.Logger:
    """Attach a stdout handler to the package logger."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove handlers installed by a previous call
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
