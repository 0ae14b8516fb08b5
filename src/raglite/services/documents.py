"""Document endpoints of a dataset, including multipart upload."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from pydantic import Field

from src.raglite.config import HTTPMethod
from src.raglite.context import RequestContext
from src.raglite.errors import RAGLiteError
from src.raglite.multipart import FileContent, UploadForm
from src.raglite.query import build_url, segment
from src.raglite.result import Ok, Result
from src.raglite.services.base import Service
from src.raglite.services.datasets import DATASETS_PATH
from src.raglite.types import Document, ListMeta, RequestModel, ResponseModel


@dataclass(frozen=True)
class UploadDocumentRequest:
    """A file to upload into a dataset.

    Setting ``document_id`` replaces the content of an existing document
    instead of creating a new one.
    """

    dataset_id: str
    filename: str
    file: Optional[FileContent]
    tags: Optional[Sequence[str]] = None
    metadata: Optional[dict[str, Any]] = None
    document_id: Optional[str] = None

    @classmethod
    def from_path(
        cls, dataset_id: str, path: Union[str, Path], **kwargs: Any
    ) -> UploadDocumentRequest:
        """Read ``path`` and use its name as the upload filename."""
        file_path = Path(path)
        return cls(
            dataset_id=dataset_id,
            filename=file_path.name,
            file=file_path.read_bytes(),
            **kwargs,
        )

    def to_form(self) -> UploadForm:
        return UploadForm(
            filename=self.filename,
            file=self.file,
            tags=self.tags,
            metadata=self.metadata,
            document_id=self.document_id,
        )


class UploadDocumentResponse(ResponseModel):
    document_id: str = ""
    status: str = ""
    message: str = ""
    filename: str = ""
    title: str = ""
    size: int = 0


class ListDocumentsRequest(RequestModel):
    """Selects the dataset and, optionally, a page of its documents."""

    dataset_id: str
    page: Optional[int] = None
    page_size: Optional[int] = None


class ListDocumentsResponse(ListMeta):
    documents: list[Document] = Field(default_factory=list)


class UpdateDocumentRequest(RequestModel):
    """New metadata and/or tags; a field left at ``None`` is not changed."""

    dataset_id: str
    document_id: str
    metadata: Optional[dict[str, Any]] = None
    tags: Optional[list[str]] = None


class BatchDeleteDocumentsRequest(RequestModel):
    dataset_id: str
    document_ids: list[str] = Field(default_factory=list)


def _documents_path(dataset_id: str) -> str:
    return f"{DATASETS_PATH}/{segment(dataset_id)}/documents"


class DocumentsService(Service):
    """Operations on ``/api/v1/datasets/{id}/documents``."""

    def upload(
        self, request: UploadDocumentRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[UploadDocumentResponse, RAGLiteError]:
        return self._transport.upload(
            _documents_path(request.dataset_id),
            request.to_form(),
            UploadDocumentResponse,
            ctx,
        )

    def list(
        self, request: ListDocumentsRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[ListDocumentsResponse, RAGLiteError]:
        path = build_url(
            _documents_path(request.dataset_id),
            {
                "page": str(request.page) if request.page else "",
                "page_size": str(request.page_size) if request.page_size else "",
            },
        )
        return self._transport.request(HTTPMethod.GET, path, None, ListDocumentsResponse, ctx)

    def get(
        self, dataset_id: str, document_id: str, *, ctx: Optional[RequestContext] = None
    ) -> Result[Document, RAGLiteError]:
        path = f"{_documents_path(dataset_id)}/{segment(document_id)}"
        return self._transport.request(HTTPMethod.GET, path, None, Document, ctx)

    def update(
        self, request: UpdateDocumentRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[Document, RAGLiteError]:
        path = f"{_documents_path(request.dataset_id)}/{segment(request.document_id)}"
        body: dict[str, Any] = {}
        if request.metadata is not None:
            body["metadata"] = request.metadata
        if request.tags is not None:
            body["tags"] = request.tags
        return self._transport.request(HTTPMethod.PATCH, path, body, Document, ctx)

    def delete(
        self, dataset_id: str, document_id: str, *, ctx: Optional[RequestContext] = None
    ) -> Result[None, RAGLiteError]:
        path = f"{_documents_path(dataset_id)}/{segment(document_id)}"
        return self._transport.request(HTTPMethod.DELETE, path, None, None, ctx)

    def batch_delete(
        self, request: BatchDeleteDocumentsRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[None, RAGLiteError]:
        """Delete several documents at once. An empty id list is a no-op."""
        if not request.document_ids:
            return Ok(None)
        path = f"{_documents_path(request.dataset_id)}/batch-delete"
        body = {"document_ids": request.document_ids}
        return self._transport.request(HTTPMethod.POST, path, body, None, ctx)
