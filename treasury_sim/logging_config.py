"""
Structured Logging Configuration Module

JSON (or plain text) logging for treasury operations.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional

_STRUCTURED_FIELDS = ("correlation_id", "action", "resource", "extra")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }
        for name in _STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter; appends action/resource when present"""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-8s %(name)s: %(message)s")

    def format(self, record):
        line = super().format(record)
        action = getattr(record, "action", None)
        resource = getattr(record, "resource", None)
        if action or resource:
            line += f" [{action or '-'} {resource or '-'}]"
        return line


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    logger_name: str = "treasury"
) -> logging.Logger:
    """
    Setup logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "json" or "text"
        logger_name: Name of the root application logger

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = "treasury") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               correlation_id: Optional[str] = None, extra: Optional[dict] = None):
    """
    Log an action with structured data.

    Args:
        logger: Logger instance
        level: Log level (info, warning, error, etc.)
        message: Log message
        action: Action being performed (e.g. "execute_transfer")
        resource: Resource being acted upon (e.g. "account:Bank_USD_1")
        correlation_id: Correlation ID linking related records
        extra: Additional structured data
    """
    fields = {
        "action": action,
        "resource": resource,
        "correlation_id": correlation_id,
        "extra": extra,
    }
    logger.log(
        getattr(logging, level.upper()),
        message,
        extra={key: value for key, value in fields.items() if value is not None}
    )
