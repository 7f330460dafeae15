from __future__ import annotations

from typing import Protocol

from a11y_auditor.app.events.models import AuditEvent


class AuditEventEmitter(Protocol):
    """
    Receiver for the progress events of a single audit run.

    The coordinator awaits `emit` inline between detector phases, so a
    slow emitter delays the audit and a raising emitter aborts it.
    Implementations that forward events elsewhere should buffer and
    absorb their own delivery failures.
    """

    async def emit(self, event: AuditEvent) -> None:
        ...


class NullEventEmitter:
    """Default emitter for run_audit and run_audit_sync. Drops every event."""

    async def emit(self, event: AuditEvent) -> None:
        return None
