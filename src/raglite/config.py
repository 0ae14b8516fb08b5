"""Configuration for the RAGLite client.

Settings can come from code, from environment variables with the
``RAGLITE_`` prefix, or from a local ``.env`` file.
Example: RAGLITE_BASE_URL=http://rag.internal:8080, RAGLITE_API_KEY=sk-...
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TIMEOUT = 30.0


class HTTPMethod(str, Enum):
    """HTTP methods used by the RAGLite API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ModelType(str, Enum):
    """Model roles known to the service."""

    CHAT = "chat"
    EMBEDDING = "embedding"
    DENSE = "dense"
    SPARSE = "sparse"
    RERANKER = "reranker"
    ANALYSIS = "analysis"
    VISION = "vision"


class RetrievalMode(str, Enum):
    """Retrieval strategies accepted by search and QA."""

    FULL = "full"
    SMART = "smart"


class DocumentStatus(str, Enum):
    """Processing states reported for uploaded documents."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ClientSettings(BaseSettings):
    """Connection settings for ``RAGLiteClient.from_settings``."""

    model_config = SettingsConfigDict(
        env_prefix="RAGLITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="http://localhost:8080", min_length=1, description="RAGLite service URL"
    )
    api_key: Optional[str] = Field(default=None, description="Bearer credential")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds"
    )
