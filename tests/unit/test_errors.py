"""Tests for error types and status classification."""

import pytest

from src.raglite.errors import (
    APIError,
    DecodeError,
    EncodeError,
    RAGLiteError,
    TransportError,
)


class TestAPIError:
    def test_message_format(self) -> None:
        err = APIError(404, "model not found")
        assert str(err) == "API error (status 404): model not found"
        assert err.status_code == 404
        assert err.message == "model not found"

    @pytest.mark.parametrize(
        "status,not_found,bad_request,server_error",
        [
            (404, True, False, False),
            (400, False, True, False),
            (500, False, False, True),
            (503, False, False, True),
            (599, False, False, True),
            (600, False, False, False),
            (401, False, False, False),
            (200, False, False, False),
            (499, False, False, False),
        ],
    )
    def test_classification(
        self, status: int, not_found: bool, bad_request: bool, server_error: bool
    ) -> None:
        err = APIError(status, "x")
        assert err.is_not_found() is not_found
        assert err.is_bad_request() is bad_request
        assert err.is_server_error() is server_error

    def test_equality(self) -> None:
        assert APIError(400, "bad") == APIError(400, "bad")
        assert APIError(400, "bad") != APIError(400, "worse")
        assert APIError(400, "bad") != APIError(422, "bad")


class TestHierarchy:
    @pytest.mark.parametrize(
        "err",
        [
            TransportError("refused"),
            EncodeError("bad body"),
            DecodeError("bad json"),
            APIError(500, "boom"),
        ],
    )
    def test_all_errors_share_base(self, err: Exception) -> None:
        assert isinstance(err, RAGLiteError)

    def test_transport_error_has_no_status(self) -> None:
        err = TransportError("timed out")
        assert not hasattr(err, "status_code")

    def test_transport_error_keeps_cause(self) -> None:
        cause = OSError("dns failure")
        err = TransportError("failed", cause)
        assert err.cause is cause

    def test_decode_error_keeps_body(self) -> None:
        err = DecodeError("failed to unmarshal", b"<html>")
        assert err.body == b"<html>"
