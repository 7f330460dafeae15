import anyio
import pytest

from a11y_auditor.app.config import AuditorConfig
from a11y_auditor.app.coordinator.coordinator import AccessibilityAuditCoordinator
from a11y_auditor.app.errors import ScopeResolutionError
from a11y_auditor.app.events import (
    AuditEvent,
    AuditEventType,
    MemoryQueueEventEmitter,
    NullEventEmitter,
)
from a11y_auditor.app.schemas.audit_config import AuditConfig
from a11y_auditor.app.schemas.issues import IssueCategory
from a11y_auditor.app.tree.snapshot import SnapshotTreeReader
from a11y_auditor.tests.fixtures.tree_factory import problem_document


class ListEmitter:
    def __init__(self):
        self.events: list[AuditEvent] = []

    async def emit(self, event: AuditEvent) -> None:
        self.events.append(event)


def _coordinator():
    return AccessibilityAuditCoordinator(
        AuditorConfig(),
        SnapshotTreeReader(problem_document()),
    )


def test_events_bracket_the_audit():
    emitter = ListEmitter()

    async def _run():
        return await _coordinator().run_audit(
            AuditConfig(), audit_id="events-1", emitter=emitter
        )

    report = anyio.run(_run)
    types = [e.event_type for e in emitter.events]

    assert types[0] == AuditEventType.AUDIT_STARTED
    assert types[1] == AuditEventType.SCOPE_RESOLVED
    assert types[-1] == AuditEventType.AUDIT_COMPLETED
    assert types.count(AuditEventType.DETECTOR_STARTED) == len(IssueCategory)
    assert types.count(AuditEventType.DETECTOR_COMPLETED) == len(IssueCategory)
    assert all(e.audit_id == "events-1" for e in emitter.events)

    discovered = [
        e.details["issue_id"]
        for e in emitter.events
        if e.event_type == AuditEventType.ISSUE_DISCOVERED
    ]
    assert discovered == [i.issue_id for i in report.issues]


def test_scope_resolved_reports_whole_document_for_root_selector():
    emitter = ListEmitter()

    async def _run():
        await _coordinator().run_audit(
            AuditConfig(scope="body"), audit_id="events-3", emitter=emitter
        )

    anyio.run(_run)
    resolved = emitter.events[1]

    assert resolved.event_type == AuditEventType.SCOPE_RESOLVED
    assert resolved.details["scope"] == "body"
    assert resolved.details["whole_document"] is True
    assert resolved.details["tag"] == "body"


def test_scope_failure_emits_audit_failed():
    emitter = ListEmitter()

    async def _run():
        await _coordinator().run_audit(
            AuditConfig(scope="#missing"), audit_id="events-2", emitter=emitter
        )

    with pytest.raises(ScopeResolutionError):
        anyio.run(_run)

    assert [e.event_type for e in emitter.events] == [
        AuditEventType.AUDIT_STARTED,
        AuditEventType.AUDIT_FAILED,
    ]
    assert emitter.events[-1].details["exception_type"] == "ScopeResolutionError"


def test_memory_emitter_streams_until_terminal_event():
    emitter = MemoryQueueEventEmitter()

    async def _run():
        await _coordinator().run_audit(AuditConfig(), emitter=emitter)
        return [event async for event in emitter.stream()]

    events = anyio.run(_run)

    assert events[0].event_type == AuditEventType.AUDIT_STARTED
    assert events[-1].event_type == AuditEventType.AUDIT_COMPLETED


def test_memory_emitter_ignores_events_after_close():
    emitter = MemoryQueueEventEmitter()

    async def _run():
        await emitter.emit(
            AuditEvent(audit_id="x", event_type=AuditEventType.AUDIT_FAILED)
        )
        await emitter.emit(
            AuditEvent(audit_id="x", event_type=AuditEventType.AUDIT_STARTED)
        )
        return [event.event_type async for event in emitter.stream()]

    assert anyio.run(_run) == [AuditEventType.AUDIT_FAILED]


def test_emitter_failure_aborts_the_audit():
    class ExplodingEmitter(ListEmitter):
        async def emit(self, event: AuditEvent) -> None:
            await super().emit(event)
            if event.event_type == AuditEventType.DETECTOR_STARTED:
                raise RuntimeError("sink unavailable")

    emitter = ExplodingEmitter()
    coordinator = AccessibilityAuditCoordinator(
        AuditorConfig(RUN_DETECTORS_CONCURRENTLY=False),
        SnapshotTreeReader(problem_document()),
    )

    async def _run():
        await coordinator.run_audit(AuditConfig(), emitter=emitter)

    with pytest.raises(RuntimeError, match="sink unavailable"):
        anyio.run(_run)

    assert emitter.events[-1].event_type == AuditEventType.AUDIT_FAILED


def test_null_emitter_drops_events():
    event = AuditEvent(audit_id="n-1", event_type=AuditEventType.AUDIT_STARTED)

    assert anyio.run(NullEventEmitter().emit, event) is None
