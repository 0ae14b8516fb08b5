"""Tests for multipart upload encoding."""

import io

import httpx
import pytest

from src.raglite.errors import EncodeError
from src.raglite.multipart import UploadForm, build_upload_request

URL = "http://rag.test/api/v1/datasets/ds-1/documents"


@pytest.fixture
def engine() -> httpx.Client:
    return httpx.Client()


def encode(engine: httpx.Client, form: UploadForm) -> tuple[httpx.Request, bytes]:
    request = build_upload_request(engine, URL, form)
    return request, request.read()


class TestUploadForm:
    def test_guide_upload(self, engine: httpx.Client) -> None:
        form = UploadForm(
            filename="guide.md",
            file=b"# Guide\n",
            tags=["a", "b"],
            metadata={"k": "v"},
        )
        request, body = encode(engine, form)

        assert request.method == "POST"
        assert b'name="file"; filename="guide.md"' in body
        assert b"# Guide\n" in body
        assert b'name="tags"\r\n\r\n["a","b"]\r\n' in body
        assert b'name="metadata"\r\n\r\n{"k":"v"}\r\n' in body
        assert b'name="document_id"' not in body

    def test_boundary_matches_header(self, engine: httpx.Client) -> None:
        request, body = encode(engine, UploadForm(filename="a.txt", file=b"abc"))
        content_type = request.headers["Content-Type"]
        assert content_type.startswith("multipart/form-data; boundary=")
        boundary = content_type.split("boundary=", 1)[1].encode()
        assert body.startswith(b"--" + boundary + b"\r\n")
        assert body.endswith(b"--" + boundary + b"--\r\n")

    def test_no_tags_omits_field(self, engine: httpx.Client) -> None:
        _, body = encode(engine, UploadForm(filename="a.txt", file=b"abc"))
        assert b'name="tags"' not in body
        assert b'name="metadata"' not in body

    def test_empty_tags_omits_field(self, engine: httpx.Client) -> None:
        _, body = encode(engine, UploadForm(filename="a.txt", file=b"abc", tags=[]))
        assert b'name="tags"' not in body

    def test_empty_metadata_is_sent(self, engine: httpx.Client) -> None:
        _, body = encode(engine, UploadForm(filename="a.txt", file=b"abc", metadata={}))
        assert b'name="metadata"\r\n\r\n{}\r\n' in body

    def test_document_id_for_update(self, engine: httpx.Client) -> None:
        form = UploadForm(filename="a.txt", file=b"abc", document_id="doc-42")
        _, body = encode(engine, form)
        assert b'name="document_id"\r\n\r\ndoc-42\r\n' in body

    def test_non_ascii_tags_kept_as_utf8(self, engine: httpx.Client) -> None:
        form = UploadForm(filename="a.txt", file=b"abc", tags=["文档", "指南"])
        _, body = encode(engine, form)
        assert '["文档","指南"]'.encode("utf-8") in body

    def test_binary_content_preserved(self, engine: httpx.Client) -> None:
        payload = bytes(range(256)) * 4
        _, body = encode(engine, UploadForm(filename="blob.bin", file=payload))
        assert payload in body

    def test_file_object_is_streamed(self, engine: httpx.Client) -> None:
        form = UploadForm(filename="notes.txt", file=io.BytesIO(b"streamed content"))
        _, body = encode(engine, form)
        assert b"streamed content" in body

    def test_text_content_encoded_as_utf8(self, engine: httpx.Client) -> None:
        _, body = encode(engine, UploadForm(filename="zh.md", file="你好"))
        assert "你好".encode("utf-8") in body

    def test_caller_headers_are_kept(self, engine: httpx.Client) -> None:
        request = build_upload_request(
            engine,
            URL,
            UploadForm(filename="a.txt", file=b"abc"),
            headers={"Authorization": "Bearer k"},
        )
        assert request.headers["Authorization"] == "Bearer k"
        assert request.headers["Content-Type"].startswith("multipart/form-data")


class TestUploadFormErrors:
    def test_missing_file(self, engine: httpx.Client) -> None:
        with pytest.raises(EncodeError, match="file content"):
            build_upload_request(engine, URL, UploadForm(filename="a.txt", file=None))

    def test_unserializable_metadata(self, engine: httpx.Client) -> None:
        form = UploadForm(filename="a.txt", file=b"abc", metadata={"when": object()})
        with pytest.raises(EncodeError):
            build_upload_request(engine, URL, form)
