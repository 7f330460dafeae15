"""
Touch target size checks (WCAG 2.5.5 Target Size (Enhanced)).

Interactive elements smaller than the minimum size (44x44 CSS pixels by
default) in either dimension -> warning. Elements without a layout box are
skipped without a verdict.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from a11y_auditor.app.checks.detectors.base import (
    DetectorOptions,
    is_touch_candidate,
    make_issue,
)
from a11y_auditor.app.errors import ElementReadError
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, iter_descendants

logger = logging.getLogger(__name__)


def run_touch_target_checks(
    root: Any,
    reader: TreeReader,
    options: Optional[DetectorOptions] = None,
) -> DetectorResult:
    """
    Run the touch target detector over the descendants of `root`.
    """
    options = options or DetectorOptions()
    minimum = options.min_touch_target_px

    issues: List[Issue] = []
    visited = 0
    skipped = 0

    for visit in iter_descendants(root, reader):
        visited += 1
        element = visit.element
        try:
            if not is_touch_candidate(reader.tag(element), reader.attributes(element)):
                continue

            box = reader.bounding_box(element)
            if box is None:
                continue

            if box.width < minimum or box.height < minimum:
                issues.append(
                    make_issue(
                        issue_id=f"touch-target-{visit.index}",
                        severity=Severity.WARNING,
                        category=IssueCategory.TOUCH_TARGET,
                        message=(
                            f"Touch target too small: "
                            f"{round(box.width)}x{round(box.height)}px"
                        ),
                        description=(
                            f"Interactive elements should be at least "
                            f"{minimum:g}x{minimum:g}px for touch accessibility"
                        ),
                        remediation="Increase padding or dimensions to meet minimum touch target size",
                        wcag_criteria=["2.5.5 Target Size (Enhanced)"],
                        element=element,
                        reader=reader,
                        options=options,
                    )
                )
        except ElementReadError as exc:
            skipped += 1
            logger.warning(
                "Skipping element %d in touch target check: %s",
                visit.index,
                exc,
            )

    return DetectorResult(
        category=IssueCategory.TOUCH_TARGET,
        issues=issues,
        elements_visited=visited,
        elements_skipped=skipped,
    )
