import time

import anyio
import pytest

from a11y_auditor.app.config import AuditorConfig
from a11y_auditor.app.coordinator.coordinator import (
    AccessibilityAuditCoordinator,
    run_audit,
)
from a11y_auditor.app.errors import AuditCancelledError, ScopeResolutionError
from a11y_auditor.app.schemas.audit_config import AuditConfig
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import IssueCategory
from a11y_auditor.app.schemas.report import ComplianceLevel
from a11y_auditor.app.tree.snapshot import SnapshotTreeReader
from a11y_auditor.tests.fixtures.tree_factory import (
    accessible_document,
    el,
    problem_document,
    reader_for,
)

pytestmark = pytest.mark.anyio


EXPECTED_PROBLEM_IDS = [
    "contrast-2",
    "keyboard-3",
    "keyboard-handler-4",
    "focus-5",
    "aria-invalid-6-aria-bogus",
    "aria-role-7",
    "landmarks-missing",
    "heading-1",
    "img-alt-8",
    "form-label-9",
    "touch-target-6",
]


def _coordinator(reader, **config):
    return AccessibilityAuditCoordinator(AuditorConfig(**config), reader)


async def test_accessible_document_is_aaa_with_full_score():
    reader = SnapshotTreeReader(accessible_document())

    report = await _coordinator(reader).run_audit(AuditConfig(), audit_id="ok-1")

    assert report.issues == []
    assert report.score == 100
    assert report.compliance_level == ComplianceLevel.AAA
    assert report.elements_examined == 12
    assert report.categories_audited == list(IssueCategory)
    assert report.audit_id == "ok-1"


async def test_problem_document_reports_every_category_in_canonical_order():
    reader = SnapshotTreeReader(problem_document())

    report = await _coordinator(reader).run_audit(AuditConfig())

    assert [i.issue_id for i in report.issues] == EXPECTED_PROBLEM_IDS
    assert report.issues_by_severity.error == 6
    assert report.issues_by_severity.warning == 5
    assert set(report.issues_by_category) == set(IssueCategory)
    assert report.elements_examined == 10
    assert report.score == 0
    assert report.compliance_level == ComplianceLevel.FAIL


async def test_concurrent_and_sequential_runs_agree():
    reader = SnapshotTreeReader(problem_document())

    concurrent = await _coordinator(reader).run_audit(AuditConfig())
    sequential = await _coordinator(
        reader, RUN_DETECTORS_CONCURRENTLY=False
    ).run_audit(AuditConfig())

    assert concurrent.model_dump(exclude={"generated_at", "audit_id"}) == (
        sequential.model_dump(exclude={"generated_at", "audit_id"})
    )


async def test_repeated_runs_are_deterministic():
    reader = SnapshotTreeReader(problem_document())
    coordinator = _coordinator(reader)

    reports = [await coordinator.run_audit(AuditConfig()) for _ in range(5)]

    orders = {tuple(i.issue_id for i in r.issues) for r in reports}
    assert orders == {tuple(EXPECTED_PROBLEM_IDS)}


async def test_unmatched_scope_raises_and_produces_no_report():
    reader = SnapshotTreeReader(problem_document())

    with pytest.raises(ScopeResolutionError) as excinfo:
        await _coordinator(reader).run_audit(AuditConfig(scope="#does-not-exist"))

    assert excinfo.value.selector == "#does-not-exist"


async def test_scoped_audit_covers_subtree_and_skips_landmarks():
    reader = reader_for(
        el("img", src="outside.png"),
        el("div", el("img", src="inside.png"), el("h1"), id="widget"),
    )

    report = await _coordinator(reader).run_audit(AuditConfig(scope="#widget"))

    assert [i.issue_id for i in report.issues] == ["img-alt-0"]
    assert report.elements_examined == 2


async def test_scope_matching_document_root_is_whole_document_audit():
    reader = reader_for(el("div", el("p", text="hi")))
    coordinator = _coordinator(reader)

    by_selector = await coordinator.run_audit(AuditConfig(scope="body"))
    unscoped = await coordinator.run_audit(AuditConfig())

    assert [i.issue_id for i in by_selector.issues] == ["landmarks-missing"]
    assert [i.issue_id for i in unscoped.issues] == ["landmarks-missing"]
    assert by_selector.score == unscoped.score


async def test_category_subset_runs_only_selected_detectors():
    reader = SnapshotTreeReader(problem_document())

    report = await _coordinator(reader).run_audit(
        AuditConfig(
            categories=[IssueCategory.TOUCH_TARGET, IssueCategory.CONTENT],
        )
    )

    assert report.categories_audited == [
        IssueCategory.CONTENT,
        IssueCategory.TOUCH_TARGET,
    ]
    assert [i.issue_id for i in report.issues] == [
        "img-alt-8",
        "form-label-9",
        "touch-target-6",
    ]


async def test_issue_ids_are_unique_across_detectors():
    reader = SnapshotTreeReader(problem_document())

    report = await _coordinator(reader).run_audit(AuditConfig())

    ids = [i.issue_id for i in report.issues]
    assert len(ids) == len(set(ids))


async def test_slow_detector_past_deadline_cancels_audit():
    def slow_detector(root, reader, options):
        time.sleep(0.5)
        return DetectorResult(category=IssueCategory.ARIA)

    reader = SnapshotTreeReader(accessible_document())
    coordinator = AccessibilityAuditCoordinator(
        AuditorConfig(DETECTOR_TIMEOUT_SECONDS=0.05),
        reader,
        detectors={IssueCategory.ARIA: slow_detector},
    )

    with pytest.raises(AuditCancelledError) as excinfo:
        await coordinator.run_audit(AuditConfig())

    assert excinfo.value.timeout_seconds == pytest.approx(0.05)


async def test_slow_sequential_detector_past_deadline_cancels_audit():
    def slow_detector(root, reader, options):
        time.sleep(0.2)
        return DetectorResult(category=IssueCategory.COLOR_CONTRAST)

    reader = SnapshotTreeReader(accessible_document())
    coordinator = AccessibilityAuditCoordinator(
        AuditorConfig(
            RUN_DETECTORS_CONCURRENTLY=False,
            DETECTOR_TIMEOUT_SECONDS=0.05,
        ),
        reader,
        detectors={IssueCategory.COLOR_CONTRAST: slow_detector},
    )

    with pytest.raises(AuditCancelledError):
        await coordinator.run_audit(AuditConfig())


async def test_detector_logic_error_propagates():
    def broken_detector(root, reader, options):
        raise RuntimeError("bug in detector")

    reader = SnapshotTreeReader(accessible_document())
    coordinator = AccessibilityAuditCoordinator(
        AuditorConfig(),
        reader,
        detectors={IssueCategory.FOCUS: broken_detector},
    )

    with pytest.raises(RuntimeError, match="bug in detector"):
        await coordinator.run_audit(AuditConfig())


async def test_custom_scoring_strategy_is_used():
    class FlatScoring:
        def score(self, counts, elements_examined):
            return 42

    reader = SnapshotTreeReader(problem_document())
    coordinator = AccessibilityAuditCoordinator(
        AuditorConfig(), reader, scoring=FlatScoring()
    )

    report = await coordinator.run_audit(AuditConfig())

    assert report.score == 42
    assert report.compliance_level == ComplianceLevel.FAIL


async def test_module_level_run_audit():
    reader = SnapshotTreeReader(accessible_document())

    report = await run_audit(reader, config=AuditorConfig())

    assert report.compliance_level == ComplianceLevel.AAA



async def test_detached_report_drops_element_references_only():
    reader = SnapshotTreeReader(problem_document())

    report = await _coordinator(reader).run_audit(AuditConfig())
    detached = report.detach_elements()

    assert all(issue.element is not None for issue in report.issues)
    assert all(issue.element is None for issue in detached.issues)
    assert detached.model_dump() == report.model_dump()
