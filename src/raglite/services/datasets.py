"""Dataset management endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from src.raglite.config import HTTPMethod
from src.raglite.context import RequestContext
from src.raglite.errors import RAGLiteError
from src.raglite.query import build_url, segment
from src.raglite.result import Result
from src.raglite.services.base import Service
from src.raglite.types import Dataset, DatasetConfig, DatasetStats, ListMeta, RequestModel

DATASETS_PATH = "/api/v1/datasets"


class CreateDatasetRequest(RequestModel):
    """Body of ``POST /api/v1/datasets``.

    The model ids select the dense, sparse, analysis, reranker and vision
    models the dataset is indexed and searched with.
    """

    name: str
    description: Optional[str] = None
    dense_model_id: Optional[str] = None
    sparse_model_id: Optional[str] = None
    analysis_model_id: Optional[str] = None
    reranker_model_id: Optional[str] = None
    vision_model_id: Optional[str] = None
    config: Optional[DatasetConfig] = None


class UpdateDatasetRequest(RequestModel):
    """Partial update; only fields that are not ``None`` are sent."""

    name: Optional[str] = None
    description: Optional[str] = None
    dense_model_id: Optional[str] = None
    sparse_model_id: Optional[str] = None
    analysis_model_id: Optional[str] = None
    reranker_model_id: Optional[str] = None
    vision_model_id: Optional[str] = None
    config: Optional[DatasetConfig] = None
    status: Optional[str] = None


class ListDatasetsRequest(RequestModel):
    status: str = ""


class ListDatasetsResponse(ListMeta):
    datasets: list[Dataset] = Field(default_factory=list)


class DatasetsService(Service):
    """Operations on ``/api/v1/datasets``."""

    def create(
        self, request: CreateDatasetRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[Dataset, RAGLiteError]:
        return self._transport.request(HTTPMethod.POST, DATASETS_PATH, request, Dataset, ctx)

    def list(
        self,
        request: Optional[ListDatasetsRequest] = None,
        *,
        ctx: Optional[RequestContext] = None,
    ) -> Result[ListDatasetsResponse, RAGLiteError]:
        filters = request or ListDatasetsRequest()
        path = build_url(DATASETS_PATH, {"status": filters.status})
        return self._transport.request(HTTPMethod.GET, path, None, ListDatasetsResponse, ctx)

    def get(
        self, dataset_id: str, *, ctx: Optional[RequestContext] = None
    ) -> Result[Dataset, RAGLiteError]:
        path = f"{DATASETS_PATH}/{segment(dataset_id)}"
        return self._transport.request(HTTPMethod.GET, path, None, Dataset, ctx)

    def update(
        self,
        dataset_id: str,
        request: UpdateDatasetRequest,
        *,
        ctx: Optional[RequestContext] = None,
    ) -> Result[Dataset, RAGLiteError]:
        path = f"{DATASETS_PATH}/{segment(dataset_id)}"
        return self._transport.request(HTTPMethod.PUT, path, request, Dataset, ctx)

    def delete(
        self, dataset_id: str, *, ctx: Optional[RequestContext] = None
    ) -> Result[None, RAGLiteError]:
        path = f"{DATASETS_PATH}/{segment(dataset_id)}"
        return self._transport.request(HTTPMethod.DELETE, path, None, None, ctx)

    def get_stats(
        self, dataset_id: str, *, ctx: Optional[RequestContext] = None
    ) -> Result[DatasetStats, RAGLiteError]:
        path = f"{DATASETS_PATH}/{segment(dataset_id)}/stats"
        return self._transport.request(HTTPMethod.GET, path, None, DatasetStats, ctx)
