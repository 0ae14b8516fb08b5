"""Per-call deadline and cancellation."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RequestContext:
    """Deadline and cancellation signal for a single call.

    The deadline is an absolute ``time.monotonic()`` value, so a context
    created with ``with_timeout`` keeps counting down across the calls it is
    shared with. Setting the cancel event from another thread aborts the
    in-flight call promptly, even while it waits for the server to answer,
    and the call returns ``TransportError``.

    Usage:
        ctx = RequestContext.with_timeout(5.0)
        client.datasets.list(ctx=ctx)
    """

    deadline: Optional[float] = None
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def with_timeout(
        cls, seconds: float, cancel_event: Optional[threading.Event] = None
    ) -> RequestContext:
        if seconds <= 0:
            raise ValueError(f"timeout must be positive, got {seconds}")
        return cls(
            deadline=time.monotonic() + seconds,
            cancel_event=cancel_event or threading.Event(),
        )

    def cancel(self) -> None:
        self.cancel_event.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, ``None`` when there is none."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def cancelled(self) -> bool:
        return self.cancel_event.is_set() or self.remaining() == 0.0

    def reason(self) -> str:
        if self.cancel_event.is_set():
            return "request cancelled"
        return "deadline exceeded"
