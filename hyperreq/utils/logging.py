"""Logging helpers."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

LIBRARY_LOGGER = "hyperreq"

_RESERVED_ATTRS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render log records as compact JSON, keeping ``extra`` fields such as method and url."""

    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03dZ"

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.default_time_format),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        }
        if extras:
            data.update(extras)

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False, default=str)


def configure_logging(
    *,
    level: int = logging.INFO,
    structured: bool = False,
    stream: Any = None,
) -> logging.Handler:
    """Attach a stream handler to the ``hyperreq`` logger and return it.

    Calling it again replaces the handler installed by the previous call.
    """

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(level)

    for existing in list(logger.handlers):
        if getattr(existing, "_hyperreq_managed", False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter() if structured else logging.Formatter(_PLAIN_FORMAT))
    handler._hyperreq_managed = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return handler


def get_logger(name: str = LIBRARY_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter", "LIBRARY_LOGGER"]
