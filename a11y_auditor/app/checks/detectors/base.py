"""
Shared detector contract and element predicates.

A detector is a pure function of (scope root, tree reader, options) that
returns its own DetectorResult. Detectors:
- MUST NOT mutate the tree or any shared state
- MUST emit issues in document order
- MUST recover from ElementReadError per element and count the skip
- MUST let every other exception propagate (it is a logic error)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, summarize_element


class DetectorOptions(BaseModel):
    """Per-run parameters handed to every detector."""

    whole_document: bool = Field(
        True,
        description="Whether the scope root is the document root",
    )

    min_touch_target_px: float = Field(44.0, gt=0)

    preview_chars: int = Field(100, ge=1)

    focus_strategy: Optional[Any] = Field(
        None,
        description="FocusIndicatorStrategy; None selects the conservative default",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


# Detector contract
Detector = Callable[[Any, TreeReader, DetectorOptions], DetectorResult]


# ---------------------------------------------------------------------------
# Element predicates
# ---------------------------------------------------------------------------

NATIVE_INTERACTIVE_TAGS = frozenset({"button", "input", "select", "textarea"})
POINTER_HANDLER_ATTRIBUTES = ("onclick",)
KEY_HANDLER_ATTRIBUTES = ("onkeydown", "onkeyup", "onkeypress")
BUTTON_INPUT_TYPES = frozenset({"button", "submit", "reset"})


def parse_tabindex(attributes: Dict[str, str]) -> Optional[int]:
    """Explicit focus order, or None when absent or not an integer."""
    raw = attributes.get("tabindex")
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def is_focus_candidate(tag: str, attributes: Dict[str, str]) -> bool:
    """
    Natively interactive, explicitly focus-ordered (tabindex >= 0), or
    editable elements.
    """
    if tag in NATIVE_INTERACTIVE_TAGS or "href" in attributes:
        return True

    tabindex = parse_tabindex(attributes)
    if tabindex is not None and tabindex >= 0:
        return True

    return attributes.get("contenteditable", "").strip().lower() == "true"


def is_touch_candidate(tag: str, attributes: Dict[str, str]) -> bool:
    """Elements that are activated by pointer or touch."""
    if tag == "button" or "href" in attributes:
        return True

    if tag == "input" and attributes.get("type", "").strip().lower() in BUTTON_INPUT_TYPES:
        return True

    if attributes.get("role", "").strip().lower() == "button":
        return True

    tabindex = parse_tabindex(attributes)
    return tabindex is not None and tabindex >= 0


def has_button_semantics(tag: str, attributes: Dict[str, str]) -> bool:
    return tag == "button" or attributes.get("role", "").strip().lower() == "button"


def has_accessible_name_attribute(attributes: Dict[str, str]) -> bool:
    return bool(
        attributes.get("aria-label", "").strip()
        or attributes.get("aria-labelledby", "").strip()
    )


# ---------------------------------------------------------------------------
# Issue construction
# ---------------------------------------------------------------------------

def make_issue(
    *,
    issue_id: str,
    severity: Severity,
    category: IssueCategory,
    message: str,
    description: str,
    remediation: str,
    wcag_criteria: List[str],
    element: Any,
    reader: TreeReader,
    options: DetectorOptions,
) -> Issue:
    return Issue(
        issue_id=issue_id,
        severity=severity,
        category=category,
        message=message,
        description=description,
        remediation=remediation,
        wcag_criteria=wcag_criteria,
        element_summary=summarize_element(
            element, reader, preview_chars=options.preview_chars
        ),
        element=element,
        automated=True,
    )
