"""Exception hierarchy shared by the builder, transport and response helpers."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:  # pragma: no cover
    import requests


class HyperError(RuntimeError):
    """Base class for every error raised by hyperreq."""

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = dict(details or {})

    def __str__(self) -> str:
        base = super().__str__()
        if not self.details:
            return base
        try:
            detail_repr = json.dumps(self.details, ensure_ascii=False)
        except TypeError:
            detail_repr = str(self.details)
        return f"{base} | details: {detail_repr}"


class ConfigurationError(HyperError):
    """A builder step failed; raised once the request is executed."""


class TransportError(HyperError):
    """The underlying HTTP client could not complete the exchange."""


class StatusError(HyperError):
    """A response check rejected the response status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        response: "requests.Response | None" = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code
        self.response = response


class DecodeError(HyperError):
    """The response body could not be read or decoded."""


class BodyConsumedError(HyperError):
    """The response body was already read."""


class ContextError(HyperError):
    """The attached context ended before the request completed."""


class ContextCancelledError(ContextError):
    pass


class DeadlineExceededError(ContextError):
    pass


class RequestFailedError(HyperError):
    """Execution failed while running ``do_and_parse_json``."""


__all__ = [
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
