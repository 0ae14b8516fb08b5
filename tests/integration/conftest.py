"""Fixtures wiring a RAGLite client to the in-memory server."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from src.raglite import RAGLiteClient, with_api_key, with_http_client
from tests.integration.fake_server import API_KEY, FakeBackend, create_app


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def server(backend: FakeBackend) -> Iterator[TestClient]:
    with TestClient(create_app(backend)) as test_client:
        yield test_client


@pytest.fixture
def client(server: TestClient) -> Iterator[RAGLiteClient]:
    with RAGLiteClient(
        "http://testserver", with_http_client(server), with_api_key(API_KEY)
    ) as raglite:
        yield raglite
