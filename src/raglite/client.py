"""RAGLite client, the primary entry point of the library.

The client:
1. Applies construction options to build its HTTP engine
2. Shares one transport between all endpoint services
3. Exposes the services as attributes (``models``, ``datasets``, ...)

Nothing on the client changes after construction, so one instance can be
used from many threads at once.
"""

from __future__ import annotations

from types import TracebackType
from typing import Optional

import httpx

from src.raglite.config import ClientSettings
from src.raglite.options import ClientOptions, Option, with_api_key, with_timeout
from src.raglite.services import (
    DatasetsService,
    DocumentsService,
    GenerateService,
    HealthService,
    ModelsService,
    QAService,
    SearchService,
)
from src.raglite.transport import Transport


class RAGLiteClient:
    """Typed client for a RAGLite service.

    Usage:
        with RAGLiteClient("http://localhost:8080", with_api_key("sk-...")) as client:
            result = client.datasets.list()
            if result.is_ok():
                for dataset in result.unwrap().datasets:
                    print(dataset.name)
    """

    def __init__(self, base_url: str, *options: Option) -> None:
        if not base_url:
            raise ValueError("base_url is required")

        opts = ClientOptions()
        for option in options:
            option(opts)

        engine, owns_engine = opts.build_engine()
        self._base_url = base_url.rstrip("/")
        self._api_key = opts.api_key
        self._engine = engine
        self._owns_engine = owns_engine
        self._transport = Transport(self._base_url, engine, opts.api_key, opts.headers)

        self.models = ModelsService(self._transport)
        self.datasets = DatasetsService(self._transport)
        self.documents = DocumentsService(self._transport)
        self.search = SearchService(self._transport)
        self.qa = QAService(self._transport)
        self.generate = GenerateService(self._transport)
        self.health = HealthService(self._transport)

    @classmethod
    def from_settings(
        cls, settings: Optional[ClientSettings] = None, *options: Option
    ) -> RAGLiteClient:
        """Create a client from ``ClientSettings`` (environment by default).

        Explicit ``options`` are applied after the settings and win over them.
        """
        settings = settings or ClientSettings()
        return cls(
            settings.base_url,
            with_timeout(settings.timeout),
            with_api_key(settings.api_key),
            *options,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def has_credential(self) -> bool:
        return self._api_key is not None

    @property
    def http_client(self) -> httpx.Client:
        """The underlying HTTP engine."""
        return self._engine

    def close(self) -> None:
        """Close the HTTP engine if this client created it."""
        if self._owns_engine:
            self._engine.close()

    def __enter__(self) -> RAGLiteClient:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RAGLiteClient(base_url={self._base_url!r})"
