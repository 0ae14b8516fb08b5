"""RAGLite client - typed access to models, datasets, documents and search."""

from src.raglite.client import RAGLiteClient
from src.raglite.config import ClientSettings, DocumentStatus, HTTPMethod, ModelType, RetrievalMode
from src.raglite.context import RequestContext
from src.raglite.errors import APIError, DecodeError, EncodeError, RAGLiteError, TransportError
from src.raglite.options import (
    with_api_key,
    with_headers,
    with_http_client,
    with_timeout,
    with_transport,
)
from src.raglite.result import Err, Ok, Result
from src.raglite.services.datasets import (
    CreateDatasetRequest,
    ListDatasetsRequest,
    ListDatasetsResponse,
    UpdateDatasetRequest,
)
from src.raglite.services.documents import (
    BatchDeleteDocumentsRequest,
    ListDocumentsRequest,
    ListDocumentsResponse,
    UpdateDocumentRequest,
    UploadDocumentRequest,
    UploadDocumentResponse,
)
from src.raglite.services.health import HealthResponse
from src.raglite.services.models import (
    CheckModelRequest,
    CheckModelResponse,
    CreateModelRequest,
    ListModelsRequest,
    ListModelsResponse,
    ListProviderModelsRequest,
    UpdateModelRequest,
    UpsertModelRequest,
    UpsertModelResponse,
)
from src.raglite.services.retrieval import (
    GenerateRequest,
    GenerateResponse,
    QARequest,
    QAResponse,
    RetrieveRequest,
    SearchResponse,
)
from src.raglite.types import (
    AIModel,
    AIModelConfig,
    ChatMessage,
    Dataset,
    DatasetConfig,
    DatasetStats,
    Document,
    ModelCapabilities,
    ProviderModel,
    SearchResult,
)

__all__ = [
    "RAGLiteClient",
    "ClientSettings",
    "RequestContext",
    # Options
    "with_api_key",
    "with_headers",
    "with_http_client",
    "with_timeout",
    "with_transport",
    # Results and errors
    "Result",
    "Ok",
    "Err",
    "RAGLiteError",
    "TransportError",
    "EncodeError",
    "DecodeError",
    "APIError",
    # Enums
    "HTTPMethod",
    "ModelType",
    "RetrievalMode",
    "DocumentStatus",
    # Entities
    "AIModel",
    "AIModelConfig",
    "ModelCapabilities",
    "Dataset",
    "DatasetConfig",
    "DatasetStats",
    "Document",
    "SearchResult",
    "ProviderModel",
    "ChatMessage",
    # Models
    "CreateModelRequest",
    "UpdateModelRequest",
    "ListModelsRequest",
    "ListModelsResponse",
    "ListProviderModelsRequest",
    "CheckModelRequest",
    "CheckModelResponse",
    "UpsertModelRequest",
    "UpsertModelResponse",
    # Datasets
    "CreateDatasetRequest",
    "UpdateDatasetRequest",
    "ListDatasetsRequest",
    "ListDatasetsResponse",
    # Documents
    "UploadDocumentRequest",
    "UploadDocumentResponse",
    "ListDocumentsRequest",
    "ListDocumentsResponse",
    "UpdateDocumentRequest",
    "BatchDeleteDocumentsRequest",
    # Search, QA, generation
    "RetrieveRequest",
    "SearchResponse",
    "QARequest",
    "QAResponse",
    "GenerateRequest",
    "GenerateResponse",
    "HealthResponse",
]
