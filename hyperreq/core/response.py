"""Response wrapper with single-use body helpers."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, TypeVar

import requests

from .errors import BodyConsumedError, DecodeError, HyperError, StatusError

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def status_line(response: requests.Response) -> str:
    """Render ``"<code> <reason>"`` for a response."""
    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


def check_200(response: requests.Response) -> None:
    """Response check accepting only ``200 OK``."""
    if response.status_code != 200:
        raise StatusError(
            f"[{response.status_code}] {status_line(response)}",
            status_code=response.status_code,
            response=response,
        )


class Response:
    """Successful result of :meth:`Request.do`.

    The body can be consumed once, either as bytes via :meth:`raw` or as JSON
    via :meth:`parse_json`. Both close the underlying connection.
    """

    def __init__(self, response: requests.Response) -> None:
        self._response = response
        self._consumed = False

    @property
    def raw_response(self) -> requests.Response:
        return self._response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason(self) -> str | None:
        return self._response.reason

    @property
    def status(self) -> str:
        return status_line(self._response)

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    @property
    def url(self) -> str | None:
        return self._response.url

    @property
    def consumed(self) -> bool:
        return self._consumed

    def raw(self) -> bytes:
        """Read the entire body and close it."""
        try:
            return self._read()
        finally:
            self.close()

    def parse_json(self, into: Callable[[Any], T] | None = None) -> Any:
        """Decode the body as JSON, close it, and optionally convert the value.

        ``into`` receives the decoded value; a ``TypeError`` or ``ValueError``
        from it means the payload does not fit the destination.
        """
        try:
            data = json.loads(self._read())
        except ValueError as exc:
            self.close()
            raise DecodeError(
                "response body is not valid JSON",
                details={"reason": str(exc), "status": self.status_code},
            ) from exc
        except HyperError:
            self.close()
            raise
        self.close()

        if into is None:
            return data
        try:
            return into(data)
        except (TypeError, ValueError) as exc:
            raise DecodeError(
                "response JSON does not match destination",
                details={"reason": str(exc), "destination": getattr(into, "__name__", repr(into))},
            ) from exc

    def close(self) -> None:
        self._response.close()

    def _read(self) -> bytes:
        if self._consumed:
            raise BodyConsumedError("response body already consumed", details={"url": self.url})
        self._consumed = True
        try:
            return self._response.content or b""
        except requests.RequestException as exc:
            raise DecodeError(
                "failed to read response body",
                details={"url": self.url, "reason": str(exc)},
            ) from exc

    def __repr__(self) -> str:
        return f"<Response [{self.status}]>"


def read_text(response: requests.Response) -> str:
    """Best-effort body text used to enrich error messages."""
    try:
        data = response.content or b""
    finally:
        response.close()
    if not data:
        return ""
    encoding = response.encoding or "utf-8"
    try:
        return data.decode(encoding, errors="replace")
    except LookupError:
        _LOGGER.debug("unknown response encoding %s; falling back to utf-8", encoding)
        return data.decode("utf-8", errors="replace")


__all__ = ["Response", "check_200", "read_text", "status_line"]
