"""
AccessibilityReport schema: the frozen result of one audit run.

A later run produces a new report; nothing here is updated in place.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic import ConfigDict

from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------

class ComplianceLevel(str, Enum):
    """
    Compliance classification derived from severity counts.

    The score is informational and does NOT gate this classification.
    """

    FAIL = "fail"
    AA = "AA"
    AAA = "AAA"


# ---------------------------------------------------------------------------
# Tallies
# ---------------------------------------------------------------------------

class SeverityCounts(BaseModel):
    """Issue counts grouped by severity."""

    error: int = Field(0, ge=0)
    warning: int = Field(0, ge=0)
    info: int = Field(0, ge=0)

    @classmethod
    def from_issues(cls, issues: List[Issue]) -> "SeverityCounts":
        counts = Counter(issue.severity for issue in issues)
        return cls(
            error=counts[Severity.ERROR],
            warning=counts[Severity.WARNING],
            info=counts[Severity.INFO],
        )

    @property
    def total(self) -> int:
        return self.error + self.warning + self.info

    model_config = ConfigDict(frozen=True, extra="forbid")


def classify_compliance(counts: SeverityCounts) -> ComplianceLevel:
    """
    Any error fails; otherwise any warning caps the level at AA.
    """
    if counts.error > 0:
        return ComplianceLevel.FAIL
    if counts.warning > 0:
        return ComplianceLevel.AA
    return ComplianceLevel.AAA


# ---------------------------------------------------------------------------
# Top-Level Report (PUBLIC, FROZEN CONTRACT)
# ---------------------------------------------------------------------------

class AccessibilityReport(BaseModel):
    """
    Master report produced by one audit run.

    THIS SCHEMA IS A PUBLIC, FROZEN CONTRACT.
    """

    schema_version: str = Field(
        "1.0",
        description="AccessibilityReport schema version",
    )

    audit_id: Optional[str] = Field(
        None,
        description="Caller-supplied identifier for this audit run",
    )

    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Timestamp when the report was generated (UTC)",
    )

    score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Informational score, 0-100",
    )

    total_issues: int = Field(
        ...,
        ge=0,
        description="Total number of issues",
    )

    issues_by_severity: SeverityCounts = Field(
        ...,
        description="Issue counts grouped by severity",
    )

    issues_by_category: Dict[IssueCategory, int] = Field(
        default_factory=dict,
        description="Issue counts grouped by category (present categories only)",
    )

    issues: List[Issue] = Field(
        default_factory=list,
        description="All issues, grouped by detector in canonical order",
    )

    elements_examined: int = Field(
        ...,
        ge=0,
        description="Number of elements visited within the audited scope",
    )

    elements_skipped: int = Field(
        0,
        ge=0,
        description=(
            "Diagnostic count of per-element evaluations skipped after "
            "read failures, summed across detectors"
        ),
    )

    categories_audited: List[IssueCategory] = Field(
        default_factory=list,
        description="Detector categories that ran, in canonical order",
    )

    compliance_level: ComplianceLevel = Field(
        ...,
        description="Compliance classification derived from severity counts",
    )

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def enforce_report_consistency(self):
        """
        Enforce tally consistency:

        - total_issues equals the number of issues
        - severity and category tallies match the issue list
        - issue identifiers are unique
        - compliance level matches the severity counts
        """
        if self.total_issues != len(self.issues):
            raise ValueError(
                f"total_issues={self.total_issues} does not match "
                f"{len(self.issues)} issues"
            )

        if self.issues_by_severity != SeverityCounts.from_issues(self.issues):
            raise ValueError(
                "issues_by_severity does not match the issue list"
            )

        category_counts = dict(Counter(issue.category for issue in self.issues))
        if self.issues_by_category != category_counts:
            raise ValueError(
                "issues_by_category does not match the issue list"
            )

        seen: set[str] = set()
        for issue in self.issues:
            if issue.issue_id in seen:
                raise ValueError(
                    f"Duplicate issue identifier: {issue.issue_id}"
                )
            seen.add(issue.issue_id)

        expected_level = classify_compliance(self.issues_by_severity)
        if self.compliance_level != expected_level:
            raise ValueError(
                f"compliance_level={self.compliance_level.value} does not "
                f"match severity counts (expected {expected_level.value})"
            )

        return self

    def detach_elements(self) -> "AccessibilityReport":
        """Copy of the report whose issues no longer reference tree elements."""
        return self.model_copy(
            update={
                "issues": [
                    issue.model_copy(update={"element": None})
                    for issue in self.issues
                ]
            }
        )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
