"""AI model management endpoints."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field, TypeAdapter, ValidationError

from src.raglite.config import HTTPMethod
from src.raglite.context import RequestContext
from src.raglite.errors import RAGLiteError
from src.raglite.query import build_url, segment
from src.raglite.result import Result
from src.raglite.services.base import Service
from src.raglite.types import (
    AIModel,
    AIModelConfig,
    ModelCapabilities,
    ProviderModel,
    RequestModel,
    ResponseModel,
)

MODELS_PATH = "/api/v1/models"

_PROVIDER_MODELS = TypeAdapter(list[ProviderModel])


# --- Request/Response Models ---


class CreateModelRequest(RequestModel):
    """Body of ``POST /api/v1/models``."""

    name: str
    model_type: str
    provider: str
    model_name: str
    description: Optional[str] = None
    config: Optional[AIModelConfig] = None
    capabilities: Optional[ModelCapabilities] = None
    is_default: Optional[bool] = None


class UpdateModelRequest(RequestModel):
    """Partial update; only fields that are not ``None`` are sent."""

    name: Optional[str] = None
    description: Optional[str] = None
    provider: Optional[str] = None
    model_name: Optional[str] = None
    config: Optional[AIModelConfig] = None
    capabilities: Optional[ModelCapabilities] = None
    status: Optional[str] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


class ListModelsRequest(RequestModel):
    """Filters for listing models. Empty filters are not sent."""

    model_type: str = ""
    provider: str = ""
    status: str = ""


class ListModelsResponse(ResponseModel):
    models: list[AIModel] = Field(default_factory=list)
    total: int = 0


class ListProviderModelsRequest(RequestModel):
    provider: str
    options: Optional[dict[str, Any]] = None


class CheckModelRequest(RequestModel):
    """Connectivity check of a provider/model configuration."""

    provider: str
    model_name: str
    config: AIModelConfig = Field(default_factory=AIModelConfig)


class CheckModelResponse(ResponseModel):
    valid: bool = False
    error: str = ""
    model_info: Any = None


class UpsertModelRequest(RequestModel):
    """Create a model, or update the one the server matches by provider and model name."""

    model_type: str
    provider: str
    model_name: str
    config: AIModelConfig = Field(default_factory=AIModelConfig)
    name: Optional[str] = None
    description: Optional[str] = None
    capabilities: Optional[ModelCapabilities] = None
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


class UpsertModelResponse(ResponseModel):
    action: str = ""  # "created" or "updated"
    model: AIModel = Field(default_factory=AIModel)


# --- Service ---


class ModelsService(Service):
    """Operations on ``/api/v1/models``."""

    def create(
        self, request: CreateModelRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[AIModel, RAGLiteError]:
        return self._transport.request(HTTPMethod.POST, MODELS_PATH, request, AIModel, ctx)

    def list(
        self,
        request: Optional[ListModelsRequest] = None,
        *,
        ctx: Optional[RequestContext] = None,
    ) -> Result[ListModelsResponse, RAGLiteError]:
        filters = request or ListModelsRequest()
        path = build_url(
            MODELS_PATH,
            {
                "model_type": filters.model_type,
                "provider": filters.provider,
                "status": filters.status,
            },
        )
        return self._transport.request(HTTPMethod.GET, path, None, ListModelsResponse, ctx)

    def get(
        self, model_id: str, *, ctx: Optional[RequestContext] = None
    ) -> Result[AIModel, RAGLiteError]:
        path = f"{MODELS_PATH}/{segment(model_id)}"
        return self._transport.request(HTTPMethod.GET, path, None, AIModel, ctx)

    def update(
        self,
        model_id: str,
        request: UpdateModelRequest,
        *,
        ctx: Optional[RequestContext] = None,
    ) -> Result[AIModel, RAGLiteError]:
        path = f"{MODELS_PATH}/{segment(model_id)}"
        return self._transport.request(HTTPMethod.PUT, path, request, AIModel, ctx)

    def delete(
        self, model_id: str, *, ctx: Optional[RequestContext] = None
    ) -> Result[None, RAGLiteError]:
        path = f"{MODELS_PATH}/{segment(model_id)}"
        return self._transport.request(HTTPMethod.DELETE, path, None, None, ctx)

    def list_provider_models(
        self, request: ListProviderModelsRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[Any, RAGLiteError]:
        """List the models a provider offers.

        A list of model objects decodes into ``list[ProviderModel]``; any other
        payload shape is returned as decoded JSON.
        """
        path = f"{MODELS_PATH}/provider/supported"
        result = self._transport.request(HTTPMethod.POST, path, request, Any, ctx)
        return result.map(decode_provider_models)

    def check(
        self, request: CheckModelRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[CheckModelResponse, RAGLiteError]:
        path = f"{MODELS_PATH}/check"
        return self._transport.request(HTTPMethod.POST, path, request, CheckModelResponse, ctx)

    def upsert(
        self, request: UpsertModelRequest, *, ctx: Optional[RequestContext] = None
    ) -> Result[UpsertModelResponse, RAGLiteError]:
        path = f"{MODELS_PATH}/upsert"
        return self._transport.request(HTTPMethod.POST, path, request, UpsertModelResponse, ctx)


def decode_provider_models(payload: Any) -> Any:
    """Decode ``payload`` into ``list[ProviderModel]`` when it has that shape."""
    if not isinstance(payload, list):
        return payload
    try:
        return _PROVIDER_MODELS.validate_python(payload)
    except ValidationError:
        return payload
