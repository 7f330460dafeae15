"""
Audit lifecycle events.

The coordinator reports progress through an AuditEventEmitter: one
AUDIT_STARTED, then SCOPE_RESOLVED, a DETECTOR_STARTED/DETECTOR_COMPLETED
pair per selected category, one ISSUE_DISCOVERED per reported issue, and
finally AUDIT_COMPLETED or AUDIT_FAILED. Nothing here feeds back into the
report.
"""

from .emitter import AuditEventEmitter, NullEventEmitter
from .memory_emitter import MemoryQueueEventEmitter
from .models import AuditEvent, AuditEventType

__all__ = [
    "AuditEvent",
    "AuditEventEmitter",
    "AuditEventType",
    "MemoryQueueEventEmitter",
    "NullEventEmitter",
]
