"""Service health endpoint."""

from __future__ import annotations

from typing import Optional

from src.raglite.config import HTTPMethod
from src.raglite.context import RequestContext
from src.raglite.errors import RAGLiteError
from src.raglite.result import Result
from src.raglite.services.base import Service
from src.raglite.types import ResponseModel


class HealthResponse(ResponseModel):
    status: str = ""
    service: str = ""


class HealthService(Service):
    def check(
        self, *, ctx: Optional[RequestContext] = None
    ) -> Result[HealthResponse, RAGLiteError]:
        return self._transport.request(HTTPMethod.GET, "/health", None, HealthResponse, ctx)
