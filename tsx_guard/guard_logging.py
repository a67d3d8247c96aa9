"""Centralized logging configuration for tsx-guard.

Provides:
- Console logging on stderr so findings on stdout stay machine readable
- Optional rotating file log in text or structured JSON form
- Category loggers for the parser, rule engine and fixer
"""

import json
import logging
import logging.handlers
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

ROOT_LOGGER = "tsx_guard"


class LogCategory(Enum):
    """Log categories for per-component debugging."""

    PARSER = "analysis"
    RULES = "rules"
    FIXER = "fixer"
    CLI = "cli"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Produces one JSON object per record with consistent fields and
    any rule-engine context passed through ``extra``.
    """

    EXTRA_FIELDS = ("duration_ms", "operation", "file_path", "rule_id", "finding_count")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(
    level: str = "WARNING",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 10485760,
) -> logging.Logger:
    """Setup global logging configuration.

    Args:
        level: Base console log level (DEBUG, INFO, WARNING, ERROR).
        quiet: Only ERROR level reaches the console.
        verbose: Enable debug-level console output.
        log_file: Log file path; debug records are written there in full.
        log_format: File log format ("text" or "json").
        rotation_count: Number of backup files.
        max_bytes: Max file size before rotation.

    Returns:
        The configured package logger.
    """
    import logging.config

    if quiet:
        effective_level = "ERROR"
    elif verbose:
        effective_level = "DEBUG"
    else:
        effective_level = level.upper()

    config: dict = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {"format": "%(levelname)s | %(message)s"},
            "json": {
                "()": JSONFormatter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "simple",
                "level": effective_level,
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            ROOT_LOGGER: {"handlers": ["console"], "level": "DEBUG", "propagate": False}
        },
    }

    if log_file:
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "json" if log_format == "json" else "detailed",
            "level": "DEBUG",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": rotation_count,
        }
        config["loggers"][ROOT_LOGGER]["handlers"].append("file")

    logging.config.dictConfig(config)
    return logging.getLogger(ROOT_LOGGER)


def get_logger() -> logging.Logger:
    """Get the package logger."""
    return logging.getLogger(ROOT_LOGGER)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Get a logger for a specific category.

    Module loggers created with ``logging.getLogger(__name__)`` inside the
    matching subpackage are children of the category logger.

    Example:
        >>> logger = get_category_logger(LogCategory.FIXER)
        >>> logger.info("Fix pass completed")
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{category.value}")

