"""Central logging configuration for repairflow.

JSON records in prod, a compact human-readable line elsewhere. The order
currently being driven is kept in a context variable and stamped onto every
record, so transition logs from nested driver calls stay attributable.

Usage:
    from repairflow.core.logging_config import get_logger
    logger = get_logger(__name__)
    logger.debug("validate -> %s", label, extra={"label": label})
"""

from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

order_number_var: ContextVar[int | None] = ContextVar("order_number", default=None)

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "order_number"}


class OrderNumberFilter(logging.Filter):
    """Adds the order number from context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        value = order_number_var.get()
        record.order_number = "-" if value is None else value  # type: ignore[attr-defined]
        return True


class JsonFormatter(logging.Formatter):
    """Format log records as JSON for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        order_number = getattr(record, "order_number", "-")
        if order_number != "-":
            log_obj["order_number"] = order_number

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Anything passed via extra=
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or value is None:
                continue
            try:
                json.dumps(value)
                log_obj[key] = value
            except (TypeError, ValueError):
                log_obj[key] = str(value)

        return json.dumps(log_obj)


def _create_dev_formatter() -> logging.Formatter:
    return logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] order=%(order_number)s %(message)s",
        datefmt="%H:%M:%S",
    )


def configure_logging(*, log_level: str = "INFO", environment: str = "dev") -> None:
    """Configure the package logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        environment: ``prod`` switches to JSON output.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger("repairflow")
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates on reconfigure
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(OrderNumberFilter())
    if environment == "prod":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(_create_dev_formatter())

    logger.addHandler(handler)

    logging.getLogger("botocore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
