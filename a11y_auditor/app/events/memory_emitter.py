from __future__ import annotations

import logging
import math
from typing import AsyncIterator

import anyio

from a11y_auditor.app.events.emitter import AuditEventEmitter
from a11y_auditor.app.events.models import AuditEvent, AuditEventType

logger = logging.getLogger(__name__)


_TERMINAL_EVENTS = frozenset({
    AuditEventType.AUDIT_COMPLETED,
    AuditEventType.AUDIT_FAILED,
})


class MemoryQueueEventEmitter(AuditEventEmitter):
    """
    In-memory event emitter backed by an unbounded anyio memory stream.

    Properties:
    - single-consumer
    - never blocks the audit
    - deterministic ordering
    - closes itself after a terminal event
    """

    def __init__(self) -> None:
        self._send, self._receive = anyio.create_memory_object_stream(math.inf)
        self._closed = False

    async def emit(self, event: AuditEvent) -> None:
        if self._closed:
            return

        try:
            self._send.send_nowait(event)
        except (anyio.BrokenResourceError, anyio.ClosedResourceError) as exc:
            logger.debug("Dropping event %s: %s", event.event_type.value, exc)
            return

        if event.event_type in _TERMINAL_EVENTS:
            await self.close()

    async def close(self) -> None:
        if not self._closed:
            self._closed = True
            await self._send.aclose()

    async def stream(self) -> AsyncIterator[AuditEvent]:
        """
        Async generator yielding emitted events in order.
        """
        async with self._receive:
            async for event in self._receive:
                yield event
