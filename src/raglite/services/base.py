"""Common base for endpoint services."""

from __future__ import annotations

from src.raglite.transport import Transport


class Service:
    """Binds a group of endpoints to the client's transport."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
