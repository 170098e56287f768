"""JSON-lines logging for processes embedding the indicators.

The library only emits records through the ``barspeed.*`` module loggers;
call ``configure_logging`` once from the host process to get one JSON object
per record on stdout. Indicator fields passed through ``extra`` (symbol,
reference time, window, bar count, error code) are lifted to the top level of
the payload, and a logged ``BarSpeedError`` contributes its code and retry hint.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from barspeed.errors import BarSpeedError

LOGGER_NAME = "barspeed"

# Promoted out of "context" when present on a record
FIELDS = ("symbol", "reference_time", "window_minutes", "bar_count", "code")

_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys())


class JsonFormatter(logging.Formatter):
    """Serialize log records as compact JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED and not key.startswith("_")
        }
        for key in FIELDS:
            if key in extras:
                payload[key] = extras.pop(key)
        if extras:
            payload["context"] = extras

        if record.exc_info:
            exc = record.exc_info[1]
            if isinstance(exc, BarSpeedError):
                payload["code"] = exc.code.value
                payload["retryable"] = exc.retryable
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True, separators=(",", ":"), default=str)


def configure_logging(level: str = "INFO", logger_name: str = LOGGER_NAME) -> logging.Logger:
    """Attach a stdout JSON handler to the package logger.

    Only ``logger_name`` and its children are affected; the host's root
    logger is left alone and the package logger stops propagating to it.
    Calling again only updates the level.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level.upper())
    if any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.propagate = False
    return logger
