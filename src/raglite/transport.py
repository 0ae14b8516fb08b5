"""Request dispatch shared by every endpoint binding.

A call goes through three steps:
1. Build the request: JSON body (or multipart form), bearer credential,
   extra headers, per-call timeout from the request context.
2. Send it and read the whole response body. A call with a request context
   runs on a worker thread so cancellation or an expired deadline returns
   at once, even while the server has not answered.
3. Classify the outcome: non-2xx -> ``APIError``; 2xx with a destination ->
   envelope decode, where ``success: false`` is also an ``APIError``; 2xx
   without a destination -> ``Ok(None)``.

Step 3 is the same for JSON and multipart requests.
"""

from __future__ import annotations

import json
import logging
import socket
import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Mapping, Optional, Union

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from src.raglite.config import HTTPMethod
from src.raglite.context import RequestContext
from src.raglite.envelope import decode_envelope, parse_error_body
from src.raglite.errors import (
    APIError,
    DecodeError,
    EncodeError,
    RAGLiteError,
    TransportError,
)
from src.raglite.multipart import UploadForm, build_upload_request
from src.raglite.result import Err, Ok, Result

logger = logging.getLogger("raglite.transport")

# Upper bound on how long a cancel or an expired deadline goes unnoticed.
_CANCEL_POLL_INTERVAL = 0.05


class _InFlight:
    """Sockets opened for one request, shut down when the call is cancelled.

    Filled through the httpcore ``trace`` extension. A connection reused from
    the pool opens no socket, so it is released when the worker's read fails
    or its timeout fires.
    """

    def __init__(self) -> None:
        self._sockets: list[socket.socket] = []
        self._lock = threading.Lock()

    def trace(self, event: str, info: dict[str, Any]) -> None:
        if event != "connection.connect_tcp.complete":
            return
        stream = info.get("return_value")
        sock = stream.get_extra_info("socket") if stream is not None else None
        if sock is not None:
            with self._lock:
                self._sockets.append(sock)

    def abort(self) -> None:
        with self._lock:
            sockets = list(self._sockets)
        for sock in sockets:
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError as e:
                logger.debug("socket already closed: %s", e)


def encode_body(body: Any) -> bytes:
    """Serialize a request body to JSON bytes.

    Pydantic models drop ``None`` fields, which is how an unset optional
    field stays out of the payload. Other values go through ``json``.
    """
    try:
        if isinstance(body, BaseModel):
            return body.model_dump_json(exclude_none=True).encode("utf-8")
        return json.dumps(
            body, default=to_jsonable_python, separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"failed to marshal request body: {e}") from e


class Transport:
    """Executes requests against one RAGLite base URL.

    Holds only configuration fixed at construction; concurrent calls share
    nothing but the engine's connection pool.
    """

    def __init__(
        self,
        base_url: str,
        engine: httpx.Client,
        api_key: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._base_url = base_url
        self._engine = engine
        self._api_key = api_key
        self._headers = dict(headers or {})

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def engine(self) -> httpx.Client:
        return self._engine

    def request(
        self,
        method: Union[HTTPMethod, str],
        path: str,
        body: Any = None,
        result: Any = None,
        ctx: Optional[RequestContext] = None,
    ) -> Result[Any, RAGLiteError]:
        """Send a JSON request and decode the enveloped response.

        Args:
            method: HTTP method.
            path: Server-relative path, query string already encoded.
            body: Model or JSON-compatible value; ``None`` sends no body.
            result: Destination type for the envelope's ``data``; ``None``
                when the caller expects no payload (e.g. deletes).
            ctx: Deadline and cancellation for this call.
        """
        verb = HTTPMethod(method).value
        if ctx is not None and ctx.cancelled():
            return Err(TransportError(ctx.reason()))

        headers = self._request_headers()
        content: Optional[bytes] = None
        if body is not None:
            try:
                content = encode_body(body)
            except EncodeError as e:
                return Err(e)
            headers["Content-Type"] = "application/json"

        try:
            request = self._engine.build_request(
                verb,
                self._base_url + path,
                content=content,
                headers=headers,
                **self._timeout_kwargs(ctx),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Err(TransportError(f"failed to create request: {e}", e))
        return self._execute(request, result, ctx)

    def upload(
        self,
        path: str,
        form: UploadForm,
        result: Any,
        ctx: Optional[RequestContext] = None,
    ) -> Result[Any, RAGLiteError]:
        """Send ``form`` as multipart/form-data and decode the response."""
        if ctx is not None and ctx.cancelled():
            return Err(TransportError(ctx.reason()))

        try:
            request = build_upload_request(
                self._engine,
                self._base_url + path,
                form,
                headers=self._request_headers(),
                **self._timeout_kwargs(ctx),
            )
        except EncodeError as e:
            return Err(e)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return Err(TransportError(f"failed to create request: {e}", e))
        return self._execute(request, result, ctx)

    def _request_headers(self) -> dict[str, str]:
        headers = dict(self._headers)
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    def _timeout_kwargs(self, ctx: Optional[RequestContext]) -> dict[str, Any]:
        """Shorten the engine timeout to the context deadline when it is closer."""
        remaining = ctx.remaining() if ctx is not None else None
        if remaining is None:
            return {}
        configured = self._engine.timeout.read
        if configured is not None and configured <= remaining:
            return {}
        return {"timeout": httpx.Timeout(remaining)}

    def _execute(
        self, request: httpx.Request, result: Any, ctx: Optional[RequestContext]
    ) -> Result[Any, RAGLiteError]:
        label = f"{request.method} {request.url.raw_path.decode('ascii', 'replace')}"
        try:
            if ctx is None:
                status_code, raw = self._exchange(request, RequestContext())
            else:
                status_code, raw = self._exchange_cancellable(request, ctx)
        except TransportError as e:
            logger.debug("%s failed: %s", label, e)
            return Err(e)

        logger.debug("%s -> %d (%d bytes)", label, status_code, len(raw))
        return self._complete(status_code, raw, result)

    def _exchange(self, request: httpx.Request, ctx: RequestContext) -> tuple[int, bytes]:
        """Send ``request`` and read the whole body. Raises ``TransportError``."""
        try:
            response = self._engine.send(request, stream=True)
        except httpx.HTTPError as e:
            raise TransportError(f"failed to execute request: {e}", e) from e
        try:
            return response.status_code, self._read_body(response, ctx)
        finally:
            response.close()

    def _exchange_cancellable(
        self, request: httpx.Request, ctx: RequestContext
    ) -> tuple[int, bytes]:
        """Run ``_exchange`` on a worker thread and stop waiting once ``ctx`` fires.

        The caller gets ``TransportError`` as soon as the context is cancelled
        or its deadline passes, even while the server has not answered yet.
        Sockets the request opened are shut down so the worker stops too.
        """
        in_flight = _InFlight()
        request.extensions["trace"] = in_flight.trace
        future: Future[tuple[int, bytes]] = Future()

        def run() -> None:
            try:
                future.set_result(self._exchange(request, ctx))
            except Exception as e:
                future.set_exception(e)

        threading.Thread(target=run, name="raglite-exchange", daemon=True).start()
        while True:
            try:
                return future.result(timeout=_CANCEL_POLL_INTERVAL)
            except FutureTimeoutError:
                if ctx.cancelled():
                    in_flight.abort()
                    raise TransportError(ctx.reason()) from None

    @staticmethod
    def _read_body(response: httpx.Response, ctx: RequestContext) -> bytes:
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_bytes():
                if ctx.cancelled():
                    raise TransportError(ctx.reason())
                chunks.append(chunk)
        except httpx.HTTPError as e:
            raise TransportError(f"failed to read response body: {e}", e) from e
        if ctx.cancel_event.is_set():
            raise TransportError(ctx.reason())
        return b"".join(chunks)

    @staticmethod
    def _complete(status_code: int, raw: bytes, result: Any) -> Result[Any, RAGLiteError]:
        """Classify a fully read response."""
        if not 200 <= status_code < 300:
            return Err(parse_error_body(status_code, raw))
        if result is None:
            return Ok(None)
        try:
            envelope = decode_envelope(raw, result)
        except DecodeError as e:
            return Err(e)
        if not envelope.success:
            return Err(APIError(status_code, envelope.message))
        return Ok(envelope.payload(result))
