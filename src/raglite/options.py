"""Construction options for ``RAGLiteClient``.

An option is a callable that mutates a ``ClientOptions`` builder. Options are
applied once, in the order given; two options touching the same field leave
the last value in place, options touching different fields compose.

Usage:
    client = RAGLiteClient(
        "http://localhost:8080",
        with_timeout(60),
        with_api_key("sk-..."),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

import httpx

from src.raglite.config import DEFAULT_TIMEOUT


@dataclass
class ClientOptions:
    """Mutable builder consumed once by the client constructor."""

    timeout: Optional[float] = None
    transport: Optional[httpx.BaseTransport] = None
    http_client: Optional[httpx.Client] = None
    api_key: Optional[str] = None
    headers: dict[str, str] = field(default_factory=dict)

    def build_engine(self) -> tuple[httpx.Client, bool]:
        """Return the HTTP engine and whether the client owns it."""
        if self.http_client is not None:
            if self.transport is not None:
                raise ValueError("with_transport cannot be combined with with_http_client")
            if self.timeout is not None:
                self.http_client.timeout = httpx.Timeout(self.timeout)
            return self.http_client, False

        engine = httpx.Client(
            timeout=httpx.Timeout(self.timeout if self.timeout is not None else DEFAULT_TIMEOUT),
            transport=self.transport,
        )
        return engine, True


Option = Callable[[ClientOptions], None]


def with_timeout(seconds: float) -> Option:
    """Set the request timeout in seconds.

    The limit applies to each phase of an exchange on its own (connect, write,
    each read, pool acquisition), not to the exchange as a whole. A server
    that keeps sending bytes can hold a call open longer; pass a
    ``RequestContext.with_timeout`` to bound the total duration of one call.
    """
    if seconds <= 0:
        raise ValueError(f"timeout must be positive, got {seconds}")

    def apply(opts: ClientOptions) -> None:
        opts.timeout = seconds

    return apply


def with_transport(transport: httpx.BaseTransport) -> Option:
    """Use a custom httpx transport, e.g. ``httpx.MockTransport`` in tests.

    Cannot be combined with ``with_http_client``: a ready-made client owns its
    transport, so building the client raises ``ValueError``.
    """

    def apply(opts: ClientOptions) -> None:
        opts.transport = transport

    return apply


def with_http_client(client: httpx.Client) -> Option:
    """Use an existing ``httpx.Client`` as the HTTP engine.

    The caller keeps ownership: ``RAGLiteClient.close`` leaves it open.
    """

    def apply(opts: ClientOptions) -> None:
        opts.http_client = client

    return apply


def with_api_key(api_key: Optional[str]) -> Option:
    """Send ``Authorization: Bearer <api_key>`` on every request."""

    def apply(opts: ClientOptions) -> None:
        opts.api_key = api_key or None

    return apply


def with_headers(headers: Mapping[str, str]) -> Option:
    """Attach extra headers to every request."""

    def apply(opts: ClientOptions) -> None:
        opts.headers.update(headers)

    return apply
