"""Fluent builder for issuing HTTP requests and decoding JSON responses."""

import logging

from .core import (
    BodyConsumedError,
    Clienter,
    ConfigurationError,
    Context,
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
    DecodeError,
    HttpRequest,
    HyperError,
    Request,
    RequestFailedError,
    Response,
    ResponseCheck,
    SessionClient,
    StatusError,
    TransportError,
    check_200,
    default_client,
    new,
)
from .settings import ClientSettings, load_settings

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "new",
    "Request",
    "Response",
    "ResponseCheck",
    "check_200",
    "Clienter",
    "HttpRequest",
    "SessionClient",
    "default_client",
    "Context",
    "ClientSettings",
    "load_settings",
    "HyperError",
    "ConfigurationError",
    "TransportError",
    "StatusError",
    "DecodeError",
    "BodyConsumedError",
    "ContextError",
    "ContextCancelledError",
    "DeadlineExceededError",
    "RequestFailedError",
]
