"""Tests for client configuration."""

import httpx
import pytest
from pydantic import ValidationError

from src.raglite.client import RAGLiteClient
from src.raglite.config import (
    DEFAULT_TIMEOUT,
    ClientSettings,
    HTTPMethod,
    ModelType,
    RetrievalMode,
)
from src.raglite.options import with_api_key, with_timeout, with_transport


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("RAGLITE_BASE_URL", "RAGLITE_API_KEY", "RAGLITE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


class TestClientSettings:
    def test_defaults(self) -> None:
        settings = ClientSettings(_env_file=None)
        assert settings.base_url == "http://localhost:8080"
        assert settings.api_key is None
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RAGLITE_BASE_URL", "http://rag.internal:9000")
        monkeypatch.setenv("RAGLITE_API_KEY", "sk-env")
        monkeypatch.setenv("RAGLITE_TIMEOUT", "5.5")
        settings = ClientSettings(_env_file=None)
        assert settings.base_url == "http://rag.internal:9000"
        assert settings.api_key == "sk-env"
        assert settings.timeout == 5.5

    def test_explicit_values_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RAGLITE_TIMEOUT", "5")
        settings = ClientSettings(_env_file=None, timeout=12)
        assert settings.timeout == 12

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ValidationError):
            ClientSettings(_env_file=None, timeout=timeout)

    def test_base_url_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError):
            ClientSettings(_env_file=None, base_url="")


class TestFromSettings:
    def test_settings_applied(self) -> None:
        settings = ClientSettings(
            _env_file=None, base_url="http://rag.test/", api_key="sk-1", timeout=7
        )
        client = RAGLiteClient.from_settings(settings)
        assert client.base_url == "http://rag.test"
        assert client.has_credential
        assert client.http_client.timeout == httpx.Timeout(7)
        client.close()

    def test_options_override_settings(self) -> None:
        settings = ClientSettings(_env_file=None, api_key="sk-1", timeout=7)
        client = RAGLiteClient.from_settings(settings, with_timeout(90), with_api_key(""))
        assert client.http_client.timeout == httpx.Timeout(90)
        assert not client.has_credential
        client.close()

    def test_reads_environment_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RAGLITE_BASE_URL", "http://from-env:8080")
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True, "data": {"status": "ok"}})

        with RAGLiteClient.from_settings(None, with_transport(httpx.MockTransport(handler))) as client:
            client.health.check()

        assert str(seen[0].url) == "http://from-env:8080/health"


class TestEnums:
    def test_values_serialize_as_strings(self) -> None:
        assert HTTPMethod.PATCH.value == "PATCH"
        assert ModelType.RERANKER == "reranker"
        assert RetrievalMode.SMART == "smart"
