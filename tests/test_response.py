"""Tests for the response wrapper and status check."""

from __future__ import annotations

import io
from dataclasses import dataclass

import pytest
import requests
from urllib3.exceptions import ProtocolError

from hyperreq import BodyConsumedError, DecodeError, Response, StatusError, check_200


def _response(status: int = 200, body: bytes = b"", *, reason: str = "OK") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.raw = io.BytesIO(body)
    resp.url = "http://x/"
    resp.encoding = "utf-8"
    return resp


class BrokenStream:
    def __init__(self) -> None:
        self.closed = False

    def stream(self, chunk_size: int, decode_content: bool = True):
        raise ProtocolError("connection reset")
        yield b""  # pragma: no cover

    def close(self) -> None:
        self.closed = True


@dataclass
class Item:
    id: int
    name: str


def test_raw_reads_and_closes() -> None:
    resp = _response(body=b"payload")
    wrapped = Response(resp)

    assert wrapped.raw() == b"payload"
    assert wrapped.consumed


def test_body_can_only_be_consumed_once() -> None:
    wrapped = Response(_response(body=b'{"a": 1}'))
    wrapped.raw()

    with pytest.raises(BodyConsumedError):
        wrapped.parse_json()
    with pytest.raises(BodyConsumedError):
        wrapped.raw()


def test_parse_json_returns_value() -> None:
    wrapped = Response(_response(body=b'{"a": [1, 2]}'))

    assert wrapped.parse_json() == {"a": [1, 2]}


def test_parse_json_into_converter() -> None:
    wrapped = Response(_response(body=b'{"id": 3, "name": "bolt"}'))

    assert wrapped.parse_json(lambda data: Item(**data)) == Item(id=3, name="bolt")


def test_parse_json_shape_mismatch_is_decode_error() -> None:
    wrapped = Response(_response(body=b'{"id": 3}'))

    with pytest.raises(DecodeError, match="does not match destination"):
        wrapped.parse_json(lambda data: Item(**data))


def test_invalid_json_is_decode_error_and_closes() -> None:
    resp = _response(body=b"<html>oops</html>")
    wrapped = Response(resp)

    with pytest.raises(DecodeError, match="not valid JSON") as excinfo:
        wrapped.parse_json()
    assert excinfo.value.details["status"] == 200


def test_read_failure_is_decode_error() -> None:
    resp = _response()
    stream = BrokenStream()
    resp.raw = stream

    with pytest.raises(DecodeError, match="failed to read response body"):
        Response(resp).raw()
    assert stream.closed


def test_status_properties() -> None:
    wrapped = Response(_response(201, reason="Created"))

    assert wrapped.status_code == 201
    assert wrapped.reason == "Created"
    assert wrapped.status == "201 Created"
    assert wrapped.url == "http://x/"
    assert repr(wrapped) == "<Response [201 Created]>"


def test_check_200_accepts_ok() -> None:
    assert check_200(_response(200)) is None


@pytest.mark.parametrize(
    ("status", "reason"),
    [(201, "Created"), (404, "Not Found"), (500, "Internal Server Error")],
)
def test_check_200_rejects_other_statuses(status: int, reason: str) -> None:
    resp = _response(status, reason=reason)

    with pytest.raises(StatusError) as excinfo:
        check_200(resp)
    assert str(excinfo.value) == f"[{status}] {status} {reason}"
    assert excinfo.value.status_code == status
    assert excinfo.value.response is resp
