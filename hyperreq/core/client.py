"""Transport capability and its ``requests``-backed default implementation."""

from __future__ import annotations

import io
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import IO, Protocol, runtime_checkable

import requests
from urllib3 import HTTPHeaderDict

from ..settings import ClientSettings, load_settings
from .context import Context
from .errors import DeadlineExceededError, TransportError

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpRequest:
    """Everything a transport needs to issue one HTTP exchange."""

    method: str = "GET"
    url: str | None = None
    headers: HTTPHeaderDict = field(default_factory=HTTPHeaderDict)
    body: IO[bytes] | None = None
    context: Context = field(default_factory=Context.background)

    def clone(self, context: Context | None = None) -> "HttpRequest":
        """Copy with independent headers; in-memory bodies are duplicated, other streams shared."""
        body = self.body
        if isinstance(body, io.BytesIO):
            duplicate = io.BytesIO(body.getvalue())
            duplicate.seek(body.tell())
            body = duplicate
        return HttpRequest(
            method=self.method,
            url=self.url,
            headers=self.headers.copy(),
            body=body,
            context=context if context is not None else self.context,
        )


@runtime_checkable
class Clienter(Protocol):
    """Anything able to turn one :class:`HttpRequest` into one response."""

    def do(self, request: HttpRequest) -> requests.Response:
        """Issue the request and return the response, raising on transport failure."""


class SessionClient:
    """Issue requests through ``requests``.

    Without an explicit session every call runs in a short-lived
    ``requests.Session``, so a single instance can be shared between threads.
    Responses are streamed; the body is read by :class:`~hyperreq.core.response.Response`.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._session = session

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def do(self, request: HttpRequest) -> requests.Response:
        if not request.url:
            raise TransportError("request has no url", details={"method": request.method})

        timeout = self._settings.effective_timeout(request.context.remaining())
        outgoing = requests.Request(
            method=request.method,
            url=request.url,
            headers=self._build_headers(request.headers),
            data=request.body,
        )
        _LOGGER.debug(
            "sending request",
            extra={"method": request.method, "url": request.url, "timeout": timeout},
        )

        start_time = time.monotonic()
        try:
            if self._session is not None:
                response = self._send(self._session, outgoing, timeout)
            else:
                with requests.Session() as session:
                    response = self._send(session, outgoing, timeout)
        except requests.Timeout as exc:
            context_err = request.context.err()
            if isinstance(context_err, DeadlineExceededError):
                raise context_err from exc
            raise TransportError(
                "request timed out",
                details={"method": request.method, "url": request.url, "reason": str(exc)},
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(
                "request failed",
                details={"method": request.method, "url": request.url, "reason": str(exc)},
            ) from exc

        _LOGGER.debug(
            "received response",
            extra={
                "method": request.method,
                "url": request.url,
                "status": response.status_code,
                "elapsed": time.monotonic() - start_time,
            },
        )
        return response

    def _send(
        self,
        session: requests.Session,
        outgoing: requests.Request,
        timeout: float | None,
    ) -> requests.Response:
        prepared = session.prepare_request(outgoing)
        return session.send(
            prepared,
            stream=True,
            timeout=timeout,
            verify=self._settings.verify,
        )

    def _build_headers(self, headers: HTTPHeaderDict) -> dict[str, str]:
        merged = dict(headers.itermerged())
        if self._settings.user_agent and "user-agent" not in headers:
            merged["User-Agent"] = self._settings.user_agent
        return merged


_DEFAULT_CLIENT: SessionClient | None = None
_DEFAULT_LOCK = threading.Lock()


def default_client() -> SessionClient:
    """Return the process-wide client used when no client was injected."""
    global _DEFAULT_CLIENT
    if _DEFAULT_CLIENT is None:
        with _DEFAULT_LOCK:
            if _DEFAULT_CLIENT is None:
                _DEFAULT_CLIENT = SessionClient(load_settings())
    return _DEFAULT_CLIENT


__all__ = ["Clienter", "HttpRequest", "SessionClient", "default_client"]
