"""
Semantic / ARIA attribute checks (WCAG 4.1.1 Parsing, 4.1.2 Name, Role, Value).

    button semantics without an accessible name     -> error
    aria-* attribute not on the allow-list          -> warning (per attribute)
    role not on the allow-list                      -> error

Accessible name sources are aria-label, aria-labelledby and non-empty
text content.

The allow-lists are fixed. Attribute validity is not checked per role.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from a11y_auditor.app.checks.detectors.base import (
    DetectorOptions,
    has_accessible_name_attribute,
    has_button_semantics,
    make_issue,
)
from a11y_auditor.app.errors import ElementReadError
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, VisitedElement, iter_descendants

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Allow-lists (FROZEN)
# ---------------------------------------------------------------------------

VALID_ARIA_ATTRIBUTES = frozenset({
    "aria-activedescendant", "aria-atomic", "aria-autocomplete",
    "aria-busy", "aria-checked", "aria-colcount", "aria-colindex",
    "aria-colspan", "aria-controls", "aria-current", "aria-describedby",
    "aria-details", "aria-disabled", "aria-errormessage", "aria-expanded",
    "aria-flowto", "aria-haspopup", "aria-hidden", "aria-invalid",
    "aria-keyshortcuts", "aria-label", "aria-labelledby", "aria-level",
    "aria-live", "aria-modal", "aria-multiline", "aria-multiselectable",
    "aria-orientation", "aria-owns", "aria-placeholder", "aria-posinset",
    "aria-pressed", "aria-readonly", "aria-relevant", "aria-required",
    "aria-roledescription", "aria-rowcount", "aria-rowindex",
    "aria-rowspan", "aria-selected", "aria-setsize", "aria-sort",
    "aria-valuemax", "aria-valuemin", "aria-valuenow", "aria-valuetext",
})

VALID_ARIA_ROLES = frozenset({
    # widgets
    "button", "link", "checkbox", "radio", "tab", "tabpanel", "tablist",
    "menu", "menubar", "menuitem", "menuitemcheckbox", "menuitemradio",
    "option", "listbox", "combobox", "textbox", "searchbox", "slider",
    "spinbutton", "switch", "progressbar", "scrollbar", "tree",
    "treeitem", "grid", "gridcell",
    # live regions and windows
    "dialog", "alertdialog", "alert", "status", "log", "marquee", "timer",
    "tooltip",
    # document structure
    "application", "document", "article", "heading", "img", "list",
    "listitem", "table", "row", "rowgroup", "cell", "columnheader",
    "rowheader", "group", "separator", "toolbar", "figure", "note",
    "presentation", "none",
    # landmarks
    "main", "navigation", "banner", "contentinfo", "complementary",
    "region", "search", "form",
})


def _check_element(
    visit: VisitedElement,
    reader: TreeReader,
    options: DetectorOptions,
) -> List[Issue]:
    element = visit.element
    tag = reader.tag(element)
    attributes = reader.attributes(element)

    issues: List[Issue] = []

    # ------------------------------------------------------------------
    # Accessible name for button semantics
    # ------------------------------------------------------------------
    if has_button_semantics(tag, attributes):
        has_name = (
            has_accessible_name_attribute(attributes)
            or bool(reader.text_content(element).strip())
        )
        if not has_name:
            issues.append(
                make_issue(
                    issue_id=f"aria-label-{visit.index}",
                    severity=Severity.ERROR,
                    category=IssueCategory.ARIA,
                    message="Interactive element missing accessible name",
                    description="Button or button role element has no accessible name",
                    remediation="Add aria-label, aria-labelledby, or text content",
                    wcag_criteria=["4.1.2 Name, Role, Value"],
                    element=element,
                    reader=reader,
                    options=options,
                )
            )

    # ------------------------------------------------------------------
    # Unknown aria-* attributes (one issue per attribute)
    # ------------------------------------------------------------------
    for name in attributes:
        if not name.startswith("aria-") or name in VALID_ARIA_ATTRIBUTES:
            continue
        issues.append(
            make_issue(
                issue_id=f"aria-invalid-{visit.index}-{name}",
                severity=Severity.WARNING,
                category=IssueCategory.ARIA,
                message=f"Invalid ARIA attribute: {name}",
                description=f"ARIA attribute {name} is not valid for {tag.upper()}",
                remediation="Remove invalid ARIA attribute or use correct attribute",
                wcag_criteria=["4.1.1 Parsing"],
                element=element,
                reader=reader,
                options=options,
            )
        )

    # ------------------------------------------------------------------
    # Unknown roles
    # ------------------------------------------------------------------
    role = attributes.get("role")
    if role and role.strip() not in VALID_ARIA_ROLES:
        issues.append(
            make_issue(
                issue_id=f"aria-role-{visit.index}",
                severity=Severity.ERROR,
                category=IssueCategory.ARIA,
                message=f"Invalid ARIA role: {role}",
                description=f'Role "{role}" is not a valid ARIA role',
                remediation="Use a valid ARIA role or remove the role attribute",
                wcag_criteria=["4.1.2 Name, Role, Value"],
                element=element,
                reader=reader,
                options=options,
            )
        )

    return issues


def run_aria_checks(
    root: Any,
    reader: TreeReader,
    options: Optional[DetectorOptions] = None,
) -> DetectorResult:
    """
    Run the semantic/ARIA detector over the descendants of `root`.
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
                "Skipping element %d in ARIA check: %s",
                visit.index,
                exc,
            )

    return DetectorResult(
        category=IssueCategory.ARIA,
        issues=issues,
        elements_visited=visited,
        elements_skipped=skipped,
    )
