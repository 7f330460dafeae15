"""
Focus management checks (WCAG 2.4.7 Focus Visible).

An interactive element whose outline is suppressed must expose some other
focus indicator. Whether it does is decided by a pluggable
FocusIndicatorStrategy.

Known limitation:
    A static snapshot does not carry :focus / :focus-visible styles, so the
    default ConservativeFocusIndicatorStrategy always reports that no
    alternative indicator was found. Every interactive element with a
    suppressed outline is therefore flagged, which can yield false
    positives. Replace the strategy to refine this without changing the
    detector or its issue contract.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

from a11y_auditor.app.checks.detectors.base import (
    DetectorOptions,
    is_focus_candidate,
    make_issue,
)
from a11y_auditor.app.errors import ElementReadError
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, iter_descendants

logger = logging.getLogger(__name__)


_SUPPRESSED_OUTLINE_TOKENS = frozenset({"none", "0", "0px"})


class FocusIndicatorStrategy(Protocol):
    """Decides whether an element has a focus indicator besides its outline."""

    def has_custom_focus_indicator(self, element: Any, reader: TreeReader) -> bool:
        ...


class ConservativeFocusIndicatorStrategy:
    """Never detects a custom indicator."""

    def has_custom_focus_indicator(self, element: Any, reader: TreeReader) -> bool:
        return False


def is_outline_suppressed(outline: Optional[str]) -> bool:
    if outline is None:
        return False
    tokens = outline.strip().lower().split()
    return any(token in _SUPPRESSED_OUTLINE_TOKENS for token in tokens)


def run_focus_checks(
    root: Any,
    reader: TreeReader,
    options: Optional[DetectorOptions] = None,
) -> DetectorResult:
    """
    Run the focus management detector over the descendants of `root`.
    """
    options = options or DetectorOptions()
    strategy: FocusIndicatorStrategy = (
        options.focus_strategy or ConservativeFocusIndicatorStrategy()
    )

    issues: List[Issue] = []
    visited = 0
    skipped = 0

    for visit in iter_descendants(root, reader):
        visited += 1
        element = visit.element
        try:
            if not is_focus_candidate(reader.tag(element), reader.attributes(element)):
                continue
            if not is_outline_suppressed(reader.computed_style(element).outline):
                continue
            if strategy.has_custom_focus_indicator(element, reader):
                continue

            issues.append(
                make_issue(
                    issue_id=f"focus-{visit.index}",
                    severity=Severity.ERROR,
                    category=IssueCategory.FOCUS,
                    message="Interactive element has no visible focus indicator",
                    description="Element removes default focus outline without providing alternative",
                    remediation="Provide visible focus indicator using :focus-visible pseudo-class",
                    wcag_criteria=["2.4.7 Focus Visible"],
                    element=element,
                    reader=reader,
                    options=options,
                )
            )
        except ElementReadError as exc:
            skipped += 1
            logger.warning(
                "Skipping element %d in focus check: %s",
                visit.index,
                exc,
            )

    return DetectorResult(
        category=IssueCategory.FOCUS,
        issues=issues,
        elements_visited=visited,
        elements_skipped=skipped,
    )
