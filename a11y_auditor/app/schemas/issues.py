"""
Standardized issue schema.

Defines the canonical structure used to report accessibility problems
identified by the detectors.

An issue is:
- immutable once created
- attributed to exactly one severity and exactly one category
- traceable to the WCAG success criteria it cites
- traceable to the element it was raised against (display only)

All issues included in an AccessibilityReport MUST conform to this schema.
"""

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field
from pydantic import ConfigDict

from a11y_auditor.app.schemas.elements import ElementSummary


# ---------------------------------------------------------------------------
# Enumerations (FROZEN CONTRACTS)
# ---------------------------------------------------------------------------


class Severity(str, Enum):
    """
    Severity level of an issue.

    Ordering is intentional and MUST remain stable.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueCategory(str, Enum):
    """
    Detector taxonomy. Each detector emits issues of exactly one category.

    Declaration order is the canonical detector order.
    """

    COLOR_CONTRAST = "color-contrast"
    KEYBOARD = "keyboard"
    FOCUS = "focus"
    ARIA = "aria"
    STRUCTURE = "structure"
    CONTENT = "content"
    TOUCH_TARGET = "touch-target"


# ---------------------------------------------------------------------------
# Canonical Issue Object (PUBLIC, FROZEN)
# ---------------------------------------------------------------------------


class Issue(BaseModel):
    """
    Canonical accessibility issue.

    Issues are descriptive. The engine never applies the remediation.
    """

    issue_id: str = Field(
        ...,
        description=(
            "Identifier unique within one report. "
            "Format is '<rule>-<document index>' (e.g. 'img-alt-7')."
        ),
    )

    severity: Severity = Field(
        ...,
        description="Severity level of the issue",
    )

    category: IssueCategory = Field(
        ...,
        description="Detector category that produced the issue",
    )

    message: str = Field(
        ...,
        description="Short human-readable summary",
    )

    description: str = Field(
        ...,
        description="Longer explanation of what is wrong",
    )

    remediation: str = Field(
        ...,
        description="Advisory remediation text",
    )

    wcag_criteria: List[str] = Field(
        ...,
        min_length=1,
        description="Cited WCAG success criteria (e.g. '1.1.1 Non-text Content')",
    )

    element_summary: ElementSummary = Field(
        ...,
        description="Display-only summary of the originating element",
    )

    element: Any = Field(
        None,
        exclude=True,
        repr=False,
        description=(
            "Strong reference to the originating element, for highlighting "
            "while the tree is live. Keeps the element (and usually its "
            "tree) alive for as long as the issue is held; use "
            "AccessibilityReport.detach_elements() before long-term "
            "storage. Never serialized."
        ),
    )

    automated: bool = Field(
        True,
        description="True for every issue produced by the engine itself",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
