"""
Document structure checks (WCAG 1.3.1 Info and Relationships).

Heading hierarchy:
    Headings h1-h6 are walked in document order. The level before the
    first heading is 0, so a scope whose first heading is h2 or deeper is
    flagged too. A heading more than one level deeper than the heading
    before it -> warning, raised against the deeper heading.

Landmarks:
    Only for whole-document audits: zero landmark regions anywhere in the
    document -> one warning, raised against the document root and listed
    ahead of the heading issues.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from a11y_auditor.app.checks.detectors.base import DetectorOptions, make_issue
from a11y_auditor.app.errors import ElementReadError
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, iter_descendants

logger = logging.getLogger(__name__)


_HEADING_RE = re.compile(r"^h([1-6])$")

LANDMARK_TAGS = frozenset({
    "main", "nav", "aside", "section", "article", "header", "footer",
})
LANDMARK_ROLES = frozenset({
    "main", "navigation", "complementary", "banner", "contentinfo",
})


def heading_level(tag: str) -> Optional[int]:
    match = _HEADING_RE.match(tag)
    return int(match.group(1)) if match else None


def is_landmark(tag: str, role: Optional[str]) -> bool:
    if tag in LANDMARK_TAGS:
        return True
    return role is not None and role.strip() in LANDMARK_ROLES


def run_structure_checks(
    root: Any,
    reader: TreeReader,
    options: Optional[DetectorOptions] = None,
) -> DetectorResult:
    """
    Run the document structure detector over the descendants of `root`.
    """
    options = options or DetectorOptions()

    issues: List[Issue] = []
    visited = 0
    skipped = 0

    previous_level = 0
    landmark_count = 0

    for visit in iter_descendants(root, reader):
        visited += 1
        element = visit.element
        try:
            tag = reader.tag(element)

            if is_landmark(tag, reader.attributes(element).get("role")):
                landmark_count += 1

            level = heading_level(tag)
            if level is None:
                continue

            if level > previous_level + 1:
                issues.append(
                    make_issue(
                        issue_id=f"heading-{visit.index}",
                        severity=Severity.WARNING,
                        category=IssueCategory.STRUCTURE,
                        message=f"Heading level {level} follows level {previous_level}",
                        description="Heading levels should not skip levels in the hierarchy",
                        remediation="Use sequential heading levels (h1, h2, h3, etc.)",
                        wcag_criteria=["1.3.1 Info and Relationships"],
                        element=element,
                        reader=reader,
                        options=options,
                    )
                )

            previous_level = level
        except ElementReadError as exc:
            skipped += 1
            logger.warning(
                "Skipping element %d in structure check: %s",
                visit.index,
                exc,
            )

    if options.whole_document and landmark_count == 0:
        # Raised against the root, so it precedes every descendant issue.
        issues.insert(
            0,
            make_issue(
                issue_id="landmarks-missing",
                severity=Severity.WARNING,
                category=IssueCategory.STRUCTURE,
                message="No landmark regions found",
                description="Page should have landmark regions for screen reader navigation",
                remediation="Add main, nav, aside, or appropriate ARIA landmarks",
                wcag_criteria=["1.3.1 Info and Relationships"],
                element=root,
                reader=reader,
                options=options,
            )
        )

    return DetectorResult(
        category=IssueCategory.STRUCTURE,
        issues=issues,
        elements_visited=visited,
        elements_skipped=skipped,
    )
