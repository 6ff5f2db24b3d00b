"""Structured JSON logging for uirouter."""

import json
import logging
from datetime import UTC, datetime
from typing import Any

# Derived at import time so attributes added by newer Pythons (taskName...)
# are never mistaken for extra fields
_STANDARD_LOGRECORD_KEYS: frozenset[str] = frozenset(
    logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None
    ).__dict__.keys()
)

ROUTER_LOGGER_NAME = "uirouter.router"


class JSONFormatter(logging.Formatter):
    """JSON formatter with UTC ISO8601 timestamps."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        for field in ("event", "group", "kind", "handler"):
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        for key, value in vars(record).items():
            if key not in _STANDARD_LOGRECORD_KEYS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        try:
            return json.dumps(log_data, default=repr)
        except Exception:
            return str(log_data)


def _setup_json_handler(logger: logging.Logger, level: int) -> None:
    """Configure a logger with JSON formatting.

    Args:
        logger: The logger to configure.
        level: The logging level to set.
    """
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def configure_router_logger(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the router logger with JSON formatting.

    Args:
        level: The logging level to set. Defaults to logging.INFO.
    """
    logger = logging.getLogger(ROUTER_LOGGER_NAME)
    _setup_json_handler(logger, level)
    return logger


def get_router_logger(namespace: str, debug: bool = False) -> logging.Logger:
    """Return the logger for one router, a child of the router logger.

    The shared router logger is configured on first use and its level is
    left alone afterwards. Debug mode only lowers the child's level, so one
    router's setting never changes what another router logs.

    Args:
        namespace: The router's attach namespace, used as the child name.
        debug: Emit DEBUG diagnostics for this router.
    """
    parent = logging.getLogger(ROUTER_LOGGER_NAME)
    if not parent.handlers:
        _setup_json_handler(parent, logging.INFO)
    logger = parent.getChild(namespace)
    logger.setLevel(logging.DEBUG if debug else logging.NOTSET)
    return logger
