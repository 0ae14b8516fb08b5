"""Response envelope decoding.

Every JSON response from the RAGLite service is wrapped as::

    {"success": true, "message": "...", "data": <payload>}

The payload type is bound into the envelope before parsing, so the body is
decoded in a single pass straight into the caller's model.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from src.raglite.errors import APIError, DecodeError

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Uniform success/error wrapper around response payloads."""

    success: bool = False
    message: str = ""
    data: Optional[T] = None

    def payload(self, destination: Any) -> Any:
        """Return ``data``, or an empty destination model when it was omitted."""
        if self.data is None and isinstance(destination, type) and issubclass(destination, BaseModel):
            return destination()
        return self.data


class ErrorBody(BaseModel):
    """Best-effort shape of a non-2xx response body."""

    message: str = ""


def decode_envelope(raw: bytes, destination: Any) -> Envelope[Any]:
    """Decode ``raw`` into ``Envelope[destination]``.

    Raises:
        DecodeError: malformed JSON or a payload that does not fit
            ``destination``.
    """
    try:
        return Envelope[destination].model_validate_json(raw)  # type: ignore[valid-type]
    except ValidationError as e:
        raise DecodeError(f"failed to unmarshal response: {e}", raw) from e


def parse_error_body(status_code: int, raw: bytes) -> APIError:
    """Build an ``APIError`` for a non-2xx response.

    The status always comes from the HTTP status line. The message is taken
    from a JSON object body when there is one, otherwise the raw body text is
    used verbatim.
    """
    try:
        body = ErrorBody.model_validate_json(raw)
    except ValidationError:
        return APIError(status_code, raw.decode("utf-8", errors="replace"))
    return APIError(status_code, body.message)
