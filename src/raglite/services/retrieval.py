"""Search, question answering and generation endpoints."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from src.raglite.config import HTTPMethod
from src.raglite.context import RequestContext
from src.raglite.errors import RAGLiteError
from src.raglite.result import Result
from src.raglite.services.base import Service
from src.raglite.types import ChatMessage, RequestModel, ResponseModel, SearchResult

DEFAULT_TOP_K = 10


class RetrieveRequest(RequestModel):
    """Body of ``POST /api/v1/search``.

    ``retrieval_mode`` is ``"full"`` or ``"smart"``; ``metadata`` and
    ``tags`` restrict the candidate chunks.
    """

    query: str
    dataset_id: str
    top_k: Optional[int] = None
    retrieval_mode: Optional[str] = None
    similarity_threshold: Optional[float] = None
    metadata: Optional[dict[str, Any]] = None
    tags: Optional[list[str]] = None
    chat_history: Optional[list[ChatMessage]] = None


class SearchResponse(ResponseModel):
    query: str = ""
    results: list[SearchResult] = Field(default_factory=list)
    total: int = 0
    latency_ms: int = 0


class QARequest(RequestModel):
    """Body of ``POST /api/v1/qa``."""

    query: str
    dataset_id: str
    top_k: Optional[int] = None
    retrieval_mode: Optional[str] = None
    stream: Optional[bool] = None
    similarity_threshold: Optional[float] = None


class QAResponse(ResponseModel):
    answer: str = ""
    context: list[SearchResult] = Field(default_factory=list)


class GenerateRequest(RequestModel):
    """Answer from caller-supplied context, without retrieval."""

    query: str
    context: str = ""
    dataset_id: str = ""


class GenerateResponse(ResponseModel):
    answer: str = ""


def _with_default_top_k(request: Any) -> Any:
    if request.top_k is None or request.top_k <= 0:
        return request.model_copy(update={"top_k": DEFAULT_TOP_K})
    return request


class SearchService(Service):
    def retrieve(
        self, request: RetrieveRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[SearchResponse, RAGLiteError]:
        """Retrieve the chunks most relevant to ``request.query``.

        ``top_k`` defaults to 10 when unset or not positive.
        """
        body = _with_default_top_k(request)
        return self._transport.request(HTTPMethod.POST, "/api/v1/search", body, SearchResponse, ctx)


class QAService(Service):
    def ask(
        self, request: QARequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[QAResponse, RAGLiteError]:
        """Answer ``request.query`` from the dataset, returning the supporting chunks."""
        body = _with_default_top_k(request)
        return self._transport.request(HTTPMethod.POST, "/api/v1/qa", body, QAResponse, ctx)


class GenerateService(Service):
    def generate(
        self, request: GenerateRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[GenerateResponse, RAGLiteError]:
        return self._transport.request(
            HTTPMethod.POST, "/api/v1/generate", request, GenerateResponse, ctx
        )
