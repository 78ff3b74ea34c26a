"""Utility exports."""

from .logging import LIBRARY_LOGGER, JsonFormatter, configure_logging, get_logger

__all__ = [
    "LIBRARY_LOGGER",
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
