"""Tests for URL building."""

from src.raglite.query import build_url, segment


class TestBuildURL:
    def test_empty_value_is_omitted(self) -> None:
        assert build_url("/api/v1/datasets", {"status": ""}) == "/api/v1/datasets"

    def test_value_is_appended(self) -> None:
        assert build_url("/api/v1/datasets", {"status": "active"}) == "/api/v1/datasets?status=active"

    def test_no_params(self) -> None:
        assert build_url("/api/v1/models") == "/api/v1/models"
        assert build_url("/api/v1/models", {}) == "/api/v1/models"

    def test_none_is_omitted(self) -> None:
        assert build_url("/api/v1/models", {"provider": None}) == "/api/v1/models"

    def test_only_non_empty_kept_and_sorted(self) -> None:
        url = build_url(
            "/api/v1/models",
            {"status": "active", "model_type": "chat", "provider": ""},
        )
        assert url == "/api/v1/models?model_type=chat&status=active"

    def test_values_are_encoded(self) -> None:
        url = build_url("/api/v1/models", {"provider": "open ai&co"})
        assert url == "/api/v1/models?provider=open+ai%26co"

    def test_existing_query_is_merged(self) -> None:
        url = build_url("/api/v1/models?page=2", {"status": "active"})
        assert url == "/api/v1/models?page=2&status=active"


class TestSegment:
    def test_plain_id(self) -> None:
        assert segment("9e2f3ae9-6624") == "9e2f3ae9-6624"

    def test_slash_is_escaped(self) -> None:
        assert segment("a/b") == "a%2Fb"

    def test_space_is_escaped(self) -> None:
        assert segment("a b") == "a%20b"
