"""
Content checks: text alternatives and form labels.

    img without alt and not decorative           -> error (1.1.1)
    form control without label or name attribute -> error (1.3.1, 3.3.2)

An image is decorative when its role is "presentation" or "none", or when
its alt attribute is present and empty.

A form control is labelled when a `label[for=<id>]` exists anywhere in
scope, when it is nested inside a `label`, or when it carries a non-empty
aria-label or aria-labelledby. Hidden inputs are ignored.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Set

from a11y_auditor.app.checks.detectors.base import (
    DetectorOptions,
    has_accessible_name_attribute,
    make_issue,
)
from a11y_auditor.app.errors import ElementReadError
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, VisitedElement, iter_descendants

logger = logging.getLogger(__name__)


FORM_CONTROL_TAGS = frozenset({"input", "textarea", "select"})
DECORATIVE_ROLES = frozenset({"presentation", "none"})


def is_decorative_image(attributes: dict) -> bool:
    role = attributes.get("role", "").strip()
    return role in DECORATIVE_ROLES or attributes.get("alt") == ""


def _check_image(
    visit: VisitedElement,
    reader: TreeReader,
    options: DetectorOptions,
) -> Optional[Issue]:
    attributes = reader.attributes(visit.element)

    if "alt" in attributes or is_decorative_image(attributes):
        return None

    return make_issue(
        issue_id=f"img-alt-{visit.index}",
        severity=Severity.ERROR,
        category=IssueCategory.CONTENT,
        message="Image missing alt attribute",
        description="All images must have alt attribute, even if empty for decorative images",
        remediation='Add alt attribute with descriptive text or alt="" for decorative images',
        wcag_criteria=["1.1.1 Non-text Content"],
        element=visit.element,
        reader=reader,
        options=options,
    )


def _check_form_control(
    visit: VisitedElement,
    reader: TreeReader,
    options: DetectorOptions,
    label_targets: Set[str],
) -> Optional[Issue]:
    attributes = reader.attributes(visit.element)

    if attributes.get("type", "").strip().lower() == "hidden":
        return None

    control_id = attributes.get("id")
    has_label = (
        (bool(control_id) and control_id in label_targets)
        or "label" in visit.ancestor_tags
    )

    if has_label or has_accessible_name_attribute(attributes):
        return None

    return make_issue(
        issue_id=f"form-label-{visit.index}",
        severity=Severity.ERROR,
        category=IssueCategory.CONTENT,
        message="Form input missing label",
        description="All form inputs must have associated labels",
        remediation="Add label element with for attribute or aria-label",
        wcag_criteria=["1.3.1 Info and Relationships", "3.3.2 Labels or Instructions"],
        element=visit.element,
        reader=reader,
        options=options,
    )


def run_content_checks(
    root: Any,
    reader: TreeReader,
    options: Optional[DetectorOptions] = None,
) -> DetectorResult:
    """
    Run the content detector over the descendants of `root`.
    """
    options = options or DetectorOptions()

    # Label targets may follow the control they label, so collect them first.
    visits = list(iter_descendants(root, reader))
    label_targets: Set[str] = set()
    for visit in visits:
        try:
            if reader.tag(visit.element) == "label":
                target = reader.attributes(visit.element).get("for")
                if target:
                    label_targets.add(target)
        except ElementReadError as exc:
            logger.warning(
                "Skipping label %d in content check: %s",
                visit.index,
                exc,
            )

    issues: List[Issue] = []
    skipped = 0

    for visit in visits:
        try:
            tag = reader.tag(visit.element)
            if tag == "img":
                issue = _check_image(visit, reader, options)
            elif tag in FORM_CONTROL_TAGS:
                issue = _check_form_control(visit, reader, options, label_targets)
            else:
                issue = None
        except ElementReadError as exc:
            skipped += 1
            logger.warning(
                "Skipping element %d in content check: %s",
                visit.index,
                exc,
            )
            continue

        if issue is not None:
            issues.append(issue)

    return DetectorResult(
        category=IssueCategory.CONTENT,
        issues=issues,
        elements_visited=len(visits),
        elements_skipped=skipped,
    )
