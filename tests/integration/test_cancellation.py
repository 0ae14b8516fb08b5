"""Cancellation and deadlines against a real socket server that answers slowly."""

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Iterator

import httpx
import pytest

from src.raglite import RequestContext, TransportError
from src.raglite.services.health import HealthResponse
from src.raglite.transport import Transport

HEALTHY = json.dumps(
    {"success": True, "message": "ok", "data": {"status": "healthy", "service": "raglite"}}
).encode("utf-8")


@pytest.fixture
def slow_server() -> Iterator[str]:
    """Serve ``/slow`` (no answer until teardown), ``/trickle`` and ``/health``."""
    release = threading.Event()

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            try:
                if self.path == "/slow":
                    release.wait(5)
                    self._reply(HEALTHY)
                elif self.path == "/trickle":
                    self.send_response(200)
                    self.send_header("Content-Type", "application/json")
                    self.send_header("Content-Length", "40")
                    self.end_headers()
                    for _ in range(40):
                        if release.wait(0.1):
                            return
                        self.wfile.write(b" ")
                        self.wfile.flush()
                else:
                    self._reply(HEALTHY)
            except OSError:
                # client went away
                pass

        def _reply(self, body: bytes) -> None:
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format: str, *args: object) -> None:
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        release.set()
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def transport(slow_server: str) -> Iterator[Transport]:
    engine = httpx.Client(timeout=10, trust_env=False)
    yield Transport(slow_server, engine)
    engine.close()


def exchange_threads() -> list[threading.Thread]:
    return [t for t in threading.enumerate() if t.name == "raglite-exchange"]


class TestCancelInFlight:
    def test_cancel_while_waiting_for_headers(self, transport: Transport) -> None:
        ctx = RequestContext()
        timer = threading.Timer(0.2, ctx.cancel)
        timer.start()
        start = time.monotonic()
        result = transport.request("GET", "/slow", None, HealthResponse, ctx)
        elapsed = time.monotonic() - start
        timer.cancel()

        assert isinstance(result.error, TransportError)
        assert "cancelled" in str(result.error)
        assert elapsed < 1.0

    def test_worker_stops_after_cancel(self, transport: Transport) -> None:
        ctx = RequestContext()
        threading.Timer(0.2, ctx.cancel).start()
        assert transport.request("GET", "/slow", None, HealthResponse, ctx).is_err()

        give_up = time.monotonic() + 2.0
        while exchange_threads() and time.monotonic() < give_up:
            time.sleep(0.05)
        assert exchange_threads() == []

    def test_transport_usable_after_cancel(self, transport: Transport) -> None:
        ctx = RequestContext()
        threading.Timer(0.2, ctx.cancel).start()
        assert transport.request("GET", "/slow", None, HealthResponse, ctx).is_err()

        health = transport.request("GET", "/health", None, HealthResponse, RequestContext()).unwrap()
        assert health.status == "healthy"


class TestTotalDeadline:
    def test_deadline_bounds_trickling_response(self, transport: Transport) -> None:
        # every read succeeds well inside the per-read timeout
        ctx = RequestContext.with_timeout(0.5)
        start = time.monotonic()
        result = transport.request("GET", "/trickle", None, HealthResponse, ctx)
        elapsed = time.monotonic() - start

        assert isinstance(result.error, TransportError)
        assert "deadline exceeded" in str(result.error)
        assert elapsed < 1.5

    def test_deadline_while_waiting_for_headers(self, transport: Transport) -> None:
        start = time.monotonic()
        result = transport.request(
            "GET", "/slow", None, HealthResponse, RequestContext.with_timeout(0.3)
        )
        assert isinstance(result.error, TransportError)
        assert time.monotonic() - start < 1.0

    def test_call_without_context_completes(self, transport: Transport) -> None:
        health = transport.request("GET", "/health", None, HealthResponse).unwrap()
        assert health.service == "raglite"
