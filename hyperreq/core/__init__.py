"""Core primitives: request builder, response wrapper and transport."""

from .client import Clienter, HttpRequest, SessionClient, default_client
from .context import Context
from .errors import (
    BodyConsumedError,
    ConfigurationError,
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
    DecodeError,
    HyperError,
    RequestFailedError,
    StatusError,
    TransportError,
)
from .request import Request, ResponseCheck, new
from .response import Response, check_200

__all__ = [
    "Clienter",
    "HttpRequest",
    "SessionClient",
    "default_client",
    "Context",
    "Request",
    "ResponseCheck",
    "new",
    "Response",
    "check_200",
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
