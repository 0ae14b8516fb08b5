"""Endpoint bindings, one service per API resource."""

from src.raglite.services.datasets import DatasetsService
from src.raglite.services.documents import DocumentsService
from src.raglite.services.health import HealthService
from src.raglite.services.models import ModelsService
from src.raglite.services.retrieval import GenerateService, QAService, SearchService

__all__ = [
    "DatasetsService",
    "DocumentsService",
    "GenerateService",
    "HealthService",
    "ModelsService",
    "QAService",
    "SearchService",
]
