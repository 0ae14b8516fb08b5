"""Multipart encoding for document uploads.

The upload endpoint takes ``multipart/form-data`` instead of a JSON body:

- ``file``: the document bytes under the caller's filename, passed through
  unchanged. File objects are streamed by httpx rather than buffered here.
- ``tags``: JSON array text, only when at least one tag is given.
- ``metadata``: JSON object text whenever metadata is not ``None``; an
  empty mapping is still sent as ``{}``.
- ``document_id``: plain text, only when updating an existing document.

The boundary and the matching ``Content-Type`` header come from httpx.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import IO, Any, Mapping, Optional, Sequence, Union

import httpx

from src.raglite.errors import EncodeError

FileContent = Union[bytes, str, IO[bytes]]


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class UploadForm:
    """Fields of a single document upload."""

    filename: str
    file: Optional[FileContent]
    tags: Optional[Sequence[str]] = None
    metadata: Optional[Mapping[str, Any]] = None
    document_id: Optional[str] = None

    def data_fields(self) -> dict[str, str]:
        """Non-file form fields, serialized."""
        fields: dict[str, str] = {}
        try:
            if self.tags:
                fields["tags"] = _compact_json(list(self.tags))
            if self.metadata is not None:
                fields["metadata"] = _compact_json(dict(self.metadata))
        except (TypeError, ValueError) as e:
            raise EncodeError(f"failed to encode upload fields: {e}") from e
        if self.document_id:
            fields["document_id"] = self.document_id
        return fields

    def file_part(self) -> tuple[str, Union[bytes, IO[bytes]]]:
        if self.file is None:
            raise EncodeError("upload requires file content")
        content = self.file.encode("utf-8") if isinstance(self.file, str) else self.file
        return (self.filename, content)


def build_upload_request(
    engine: httpx.Client,
    url: str,
    form: UploadForm,
    *,
    headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[httpx.Timeout] = None,
) -> httpx.Request:
    """Build the POST request carrying ``form`` as multipart/form-data.

    Raises:
        EncodeError: missing file content or fields that are not JSON
            serializable.
    """
    files = {"file": form.file_part()}
    data = form.data_fields()
    kwargs: dict[str, Any] = {}
    if timeout is not None:
        kwargs["timeout"] = timeout
    return engine.build_request(
        "POST", url, data=data, files=files, headers=dict(headers or {}), **kwargs
    )
