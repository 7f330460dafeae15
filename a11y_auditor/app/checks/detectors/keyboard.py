"""
Keyboard navigation checks (WCAG 2.1.1 Keyboard, 2.1.3 Keyboard (No Exception)).

Candidates are natively interactive, explicitly focus-ordered, or
editable elements.

    tabindex="-1"                          -> warning
    pointer handler without key handler    -> error

The handler check is a heuristic based on attribute presence. It does not
prove that an element is inaccessible; a handler bound elsewhere is not
visible to it.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from a11y_auditor.app.checks.detectors.base import (
    KEY_HANDLER_ATTRIBUTES,
    POINTER_HANDLER_ATTRIBUTES,
    DetectorOptions,
    is_focus_candidate,
    make_issue,
)
from a11y_auditor.app.errors import ElementReadError
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, VisitedElement, iter_descendants

logger = logging.getLogger(__name__)


def _check_element(
    visit: VisitedElement,
    reader: TreeReader,
    options: DetectorOptions,
) -> List[Issue]:
    element = visit.element
    attributes = reader.attributes(element)

    if not is_focus_candidate(reader.tag(element), attributes):
        return []

    issues: List[Issue] = []

    if attributes.get("tabindex", "").strip() == "-1":
        issues.append(
            make_issue(
                issue_id=f"keyboard-{visit.index}",
                severity=Severity.WARNING,
                category=IssueCategory.KEYBOARD,
                message="Interactive element not keyboard accessible",
                description='Element has tabindex="-1" making it unreachable via keyboard',
                remediation='Remove tabindex="-1" or provide alternative keyboard access',
                wcag_criteria=["2.1.1 Keyboard", "2.1.3 Keyboard (No Exception)"],
                element=element,
                reader=reader,
                options=options,
            )
        )

    has_pointer_handler = any(name in attributes for name in POINTER_HANDLER_ATTRIBUTES)
    has_key_handler = any(name in attributes for name in KEY_HANDLER_ATTRIBUTES)

    if has_pointer_handler and not has_key_handler:
        issues.append(
            make_issue(
                issue_id=f"keyboard-handler-{visit.index}",
                severity=Severity.ERROR,
                category=IssueCategory.KEYBOARD,
                message="Interactive element missing keyboard event handlers",
                description="Element has click handler but no keyboard event handlers",
                remediation="Add a keydown handler to support Enter and Space key activation",
                wcag_criteria=["2.1.1 Keyboard"],
                element=element,
                reader=reader,
                options=options,
            )
        )

    return issues


def run_keyboard_checks(
    root: Any,
    reader: TreeReader,
    options: Optional[DetectorOptions] = None,
) -> DetectorResult:
    """
    Run the keyboard navigation detector over the descendants of `root`.
    """
    options = options or DetectorOptions()

    issues: List[Issue] = []
    visited = 0
    skipped = 0

    for visit in iter_descendants(root, reader):
        visited += 1
        try:
            issues.extend(_check_element(visit, reader, options))
        except ElementReadError as exc:
            skipped += 1
            logger.warning(
                "Skipping element %d in keyboard check: %s",
                visit.index,
                exc,
            )

    return DetectorResult(
        category=IssueCategory.KEYBOARD,
        issues=issues,
        elements_visited=visited,
        elements_skipped=skipped,
    )
