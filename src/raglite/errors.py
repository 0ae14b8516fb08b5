"""Error types produced by the RAGLite client.

Four kinds of failure can come out of a call:

- ``TransportError``: the request never produced a response (DNS, refused
  connection, timeout, cancellation). It carries no status code.
- ``EncodeError``: the request body could not be serialized locally.
- ``DecodeError``: the server answered 2xx but the body does not match the
  envelope or the requested type.
- ``APIError``: the server reported a failure, either through a non-2xx
  status or through ``success: false`` in the envelope.
"""

from __future__ import annotations

from typing import Optional


class RAGLiteError(Exception):
    """Base class for all client errors."""


class TransportError(RAGLiteError):
    """The HTTP exchange failed before a response was received."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class EncodeError(RAGLiteError):
    """The request body could not be serialized."""


class DecodeError(RAGLiteError):
    """The response body violates the envelope contract."""

    def __init__(self, message: str, body: bytes = b"") -> None:
        super().__init__(message)
        self.message = message
        self.body = body


class APIError(RAGLiteError):
    """A failure reported by the server, with its HTTP status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"API error (status {status_code}): {message}")
        self.status_code = status_code
        self.message = message

    def is_not_found(self) -> bool:
        return self.status_code == 404

    def is_bad_request(self) -> bool:
        return self.status_code == 400

    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return (self.status_code, self.message) == (other.status_code, other.message)

    def __hash__(self) -> int:
        return hash((self.status_code, self.message))

    def __repr__(self) -> str:
        return f"APIError(status_code={self.status_code!r}, message={self.message!r})"
