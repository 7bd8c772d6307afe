"""Structured logging configuration."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from prompt_history.core.config import settings


class PromptHistoryJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with service-specific fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["service"] = "prompt-history"

        if record.pathname:
            log_record["file"] = f"{record.pathname}:{record.lineno}"

        # Remove redundant fields
        for field in ["asctime", "levelname", "name"]:
            log_record.pop(field, None)


def setup_logging(
    level: Optional[str] = None,
    format_type: Optional[str] = None,
) -> None:
    """
    Set up structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ('json' or 'text')
    """
    level = level or settings.LOG_LEVEL
    format_type = format_type or settings.LOG_FORMAT

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level.upper()))

    if format_type.lower() == "json":
        formatter = PromptHistoryJsonFormatter(
            "%(timestamp)s %(level)s %(logger)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Set levels for noisy libraries
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("aiobotocore").setLevel(logging.WARNING)
    logging.getLogger("aioboto3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def log_event(
    logger: logging.Logger,
    level: int,
    message: str,
    prompt_id: Optional[str] = None,
    **extra,
) -> None:
    """
    Log a message with structured extra fields.

    Args:
        logger: Logger instance
        level: Log level
        message: Log message
        prompt_id: Optional prompt ID for tracing
        **extra: Additional fields to include
    """
    if prompt_id:
        extra["prompt_id"] = prompt_id
    logger.log(level, message, extra=extra)
