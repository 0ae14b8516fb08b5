"""Wire models shared across the RAGLite endpoints.

Request models omit every field left at ``None`` when serialized, so an
optional field is either absent from the body or present with the value the
caller gave, including ``""``, ``0`` and ``False``. Response models accept
``null`` anywhere and fall back to the field default, and ignore fields they
do not know about.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

M = TypeVar("M", bound=BaseModel)


class RequestModel(BaseModel):
    """Base for request bodies."""

    model_config = ConfigDict(extra="forbid", protected_namespaces=())


class ResponseModel(BaseModel):
    """Base for decoded payloads."""

    model_config = ConfigDict(extra="ignore", protected_namespaces=())

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


# --- Configuration blocks ---


class AIModelConfig(BaseModel):
    """Provider connection settings of a model. Extra keys pass through."""

    model_config = ConfigDict(extra="allow")

    api_key: Optional[str] = None
    api_base: Optional[str] = None
    api_version: Optional[str] = None
    temperature: Optional[float] = None


class ModelCapabilities(BaseModel):
    """Declared limits of a model. Extra keys pass through."""

    model_config = ConfigDict(extra="allow")

    context_window: Optional[int] = None
    max_tokens: Optional[int] = None
    dimension: Optional[int] = None


class DatasetConfig(BaseModel):
    """Chunking settings of a dataset. Extra keys pass through."""

    model_config = ConfigDict(extra="allow")

    chunk_size: Optional[int] = None
    chunk_overlap: Optional[int] = None


class ChatMessage(BaseModel):
    """One turn of conversation history sent with a search."""

    role: str
    content: str


# --- Entities ---


class ListMeta(ResponseModel):
    """Paging counters returned by list endpoints."""

    total: int = 0
    page: int = 0
    page_size: int = 0


class AIModel(ResponseModel):
    """A model registered with the service."""

    id: str = ""
    name: str = ""
    description: str = ""
    model_type: str = ""
    provider: str = ""
    model_name: str = ""
    config: dict[str, Any] = Field(default_factory=dict)
    capabilities: dict[str, Any] = Field(default_factory=dict)
    status: str = ""
    is_default: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Dataset(ResponseModel):
    """A named document collection bound to retrieval models."""

    id: str = ""
    name: str = ""
    description: str = ""
    dense_model_id: str = ""
    sparse_model_id: Optional[str] = None
    analysis_model_id: Optional[str] = None
    reranker_model_id: Optional[str] = None
    vision_model_id: Optional[str] = None
    config: dict[str, Any] = Field(default_factory=dict)
    status: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Document(ResponseModel):
    """A document stored in a dataset."""

    id: str = ""
    dataset_id: str = ""
    title: str = ""
    filename: str = ""
    file_path: str = ""
    file_hash: str = ""
    file_size: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    status: str = ""
    progress_msg: str = ""
    error_message: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def metadata_as(self, model: type[M]) -> M:
        """Validate the free-form metadata into ``model``.

        Raises:
            pydantic.ValidationError: the metadata does not fit ``model``.
        """
        return model.model_validate(self.metadata)


class SearchResult(ResponseModel):
    """A retrieved chunk with its score."""

    chunk_id: str = ""
    document_id: str = ""
    document_title: str = ""
    section_title: str = ""
    content: str = ""
    score: float = 0.0
    metadata: dict[str, Any] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


class DatasetStats(ResponseModel):
    """Document counters of a dataset."""

    dataset: Dataset = Field(default_factory=Dataset)
    total_documents: int = 0
    pending_docs: int = 0
    processing_docs: int = 0
    completed_docs: int = 0
    failed_docs: int = 0
    total_file_size: int = 0


class ProviderModel(ResponseModel):
    """A model offered by an upstream provider."""

    id: str = ""
    name: str = ""
    description: str = ""
    capabilities: list[str] = Field(default_factory=list)
