"""
Report builder.

Folds per-detector results into one AccessibilityReport. Runs once, on a
single thread, after every detector has returned.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional

from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory
from a11y_auditor.app.schemas.report import (
    AccessibilityReport,
    SeverityCounts,
    classify_compliance,
)
from a11y_auditor.app.scoring import ScoringStrategy, WeightedPenaltyScoring


def build_report(
    results: Iterable[DetectorResult],
    *,
    scoring: Optional[ScoringStrategy] = None,
    audit_id: Optional[str] = None,
) -> AccessibilityReport:
    """
    Construct the final immutable report.

    Results are folded in canonical category order regardless of the
    order they are passed in.
    """
    scoring = scoring or WeightedPenaltyScoring()

    canonical = list(IssueCategory)
    ordered = sorted(results, key=lambda r: canonical.index(r.category))

    issues: List[Issue] = []
    for result in ordered:
        issues.extend(result.issues)

    counts = SeverityCounts.from_issues(issues)

    # Every detector walks the same scope, so the widest walk is the scope size.
    elements_examined = max((r.elements_visited for r in ordered), default=0)
    elements_skipped = sum(r.elements_skipped for r in ordered)

    return AccessibilityReport(
        audit_id=audit_id,
        score=scoring.score(counts, elements_examined),
        total_issues=len(issues),
        issues_by_severity=counts,
        issues_by_category=dict(Counter(issue.category for issue in issues)),
        issues=issues,
        elements_examined=elements_examined,
        elements_skipped=elements_skipped,
        categories_audited=[r.category for r in ordered],
        compliance_level=classify_compliance(counts),
    )
