"""Fluent request builder."""

from __future__ import annotations

import io
import json
import logging
import re
import urllib.parse
from typing import IO, Any, Callable, Optional

import requests
from urllib3 import HTTPHeaderDict

from .client import Clienter, HttpRequest, default_client
from .context import Context
from .errors import ConfigurationError, ContextCancelledError, RequestFailedError
from .response import Response, read_text

_LOGGER = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

ResponseCheck = Callable[[requests.Response], Optional[BaseException]]


def _parse_url(raw: str) -> str:
    if _CONTROL_CHARS.search(raw):
        raise ValueError(f"invalid control character in url {raw!r}")
    match = _BAD_ESCAPE.search(raw)
    if match:
        raise ValueError(f"invalid url escape {raw[match.start():match.start() + 3]!r}")
    parts = urllib.parse.urlsplit(raw)
    # Out-of-range or non-numeric ports only fail on access.
    _ = parts.port
    return raw


def _add_query_param(url: str, key: str, value: str) -> str:
    parts = urllib.parse.urlsplit(url)
    query = urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    query.append((key, value))
    query.sort(key=lambda item: item[0])
    return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(query)))


class Request:
    """Chainable HTTP request configuration executed by :meth:`do`.

    Configuration failures do not raise immediately. The first one is kept
    and raised by :meth:`do`, before any network I/O happens::

        payload = (
            Request()
            .post()
            .url("https://api.example.org/items")
            .json({"name": "widget"})
            .on_response_check(check_200)
            .do_and_parse_json()
        )
    """

    def __init__(self) -> None:
        self._request = HttpRequest()
        self._err: BaseException | None = None
        self._client: Clienter | None = None
        self._on_response_check: ResponseCheck | None = None

    @property
    def error(self) -> BaseException | None:
        """The pending configuration error, if any."""
        return self._err

    def _fail(self, err: BaseException) -> "Request":
        if self._err is None:
            self._err = err
        else:
            _LOGGER.debug("ignoring configuration error after an earlier one: %s", err)
        return self

    def _method(self, method: str) -> "Request":
        self._request.method = method
        return self

    def get(self) -> "Request":
        return self._method("GET")

    def post(self) -> "Request":
        return self._method("POST")

    def put(self) -> "Request":
        return self._method("PUT")

    def patch(self) -> "Request":
        return self._method("PATCH")

    def delete(self) -> "Request":
        return self._method("DELETE")

    def options(self) -> "Request":
        return self._method("OPTIONS")

    def get_method(self) -> str:
        return self._request.method

    def url(self, url: str) -> "Request":
        try:
            self._request.url = _parse_url(url)
        except ValueError as exc:
            err = ConfigurationError(f"invalid url: {exc}", details={"url": url})
            err.__cause__ = exc
            return self._fail(err)
        return self

    def get_url(self) -> str | None:
        return self._request.url

    def set_query_param(self, key: str, value: str) -> "Request":
        """Append ``key=value`` to the query string; requires :meth:`url` first."""
        if self._request.url is None:
            return self._fail(ConfigurationError("cannot add query param to nil url"))
        self._request.url = _add_query_param(self._request.url, key, value)
        return self

    def set_header(self, key: str, *values: str) -> "Request":
        """Replace ``key`` with the first value and append the rest."""
        if not values:
            return self._fail(ConfigurationError(f'missing values for set header "{key}"'))
        first, *rest = values
        self._request.headers[key] = first
        for value in rest:
            self._request.headers.add(key, value)
        return self

    def get_header(self) -> HTTPHeaderDict:
        return self._request.headers

    def body(self, stream: IO[bytes] | None) -> "Request":
        self._request.body = stream
        return self

    def json(self, value: Any) -> "Request":
        """Serialize ``value`` as the request body and mark it ``application/json``."""
        self.set_header("content-type", "application/json")
        try:
            data = json.dumps(
                value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
            )
        except (TypeError, ValueError) as exc:
            err = ConfigurationError("failed to encode json body", details={"reason": str(exc)})
            err.__cause__ = exc
            return self._fail(err)
        self._request.body = io.BytesIO(data.encode("utf-8"))
        return self

    def set_client(self, client: Clienter) -> "Request":
        self._client = client
        return self

    def on_response_check(self, check: ResponseCheck | None) -> "Request":
        """Install a hook that rejects a response by raising or returning an exception."""
        self._on_response_check = check
        return self

    def context(self, ctx: Context) -> "Request":
        self._request.context = ctx
        return self

    def get_context(self) -> Context:
        return self._request.context

    def clone(self) -> "Request":
        return self.clone_with_context(self._request.context)

    def clone_with_context(self, ctx: Context) -> "Request":
        clone = Request()
        clone._request = self._request.clone(ctx)
        clone._err = self._err
        clone._client = self._client
        clone._on_response_check = self._on_response_check
        return clone

    def do(self) -> Response:
        if self._err is not None:
            _LOGGER.debug(
                "request not sent: configuration failed",
                extra={"method": self._request.method, "url": self._request.url},
            )
            raise self._err

        context_err = self._request.context.err()
        if context_err is not None:
            raise context_err

        client = self._client if self._client is not None else default_client()
        resp = client.do(self._request)

        if self._request.context.cancelled:
            resp.close()
            raise ContextCancelledError(
                "context cancelled", details={"url": self._request.url}
            )

        if self._on_response_check is not None:
            try:
                rejection = self._on_response_check(resp)
            except Exception as exc:
                self._release(resp, exc)
                raise
            if rejection is not None:
                self._release(resp, rejection)
                raise rejection

        return Response(resp)

    def do_and_parse_json(self, into: Callable[[Any], Any] | None = None) -> Any:
        """Execute and decode the JSON body, or raise with the response text attached."""
        try:
            response = self.do()
        except Exception as exc:
            raise self._enrich(exc) from exc
        return response.parse_json(into)

    def _release(self, resp: requests.Response, err: BaseException) -> None:
        _LOGGER.debug(
            "response rejected by check: %s",
            err,
            extra={"url": self._request.url, "status": resp.status_code},
        )
        if getattr(err, "response", None) is not resp:
            resp.close()

    def _enrich(self, err: BaseException) -> RequestFailedError:
        resp = getattr(err, "response", None)
        if not isinstance(resp, requests.Response):
            return RequestFailedError(f"error: {err}")
        try:
            content = read_text(resp)
        except (requests.RequestException, OSError, ValueError, RuntimeError) as read_err:
            return RequestFailedError(f"error: {err}, content={read_err}")
        return RequestFailedError(f"error: {err}, content={content}")

    def __repr__(self) -> str:
        return f"<Request {self._request.method} {self._request.url}>"


def new() -> Request:
    return Request()


__all__ = ["Request", "ResponseCheck", "new"]
