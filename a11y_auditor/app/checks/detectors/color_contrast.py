"""
Color contrast checks (WCAG 1.4.6 Contrast (Enhanced)).

Every element in scope is visited. Elements with text and a resolvable,
non-transparent foreground and background are evaluated:

    AA fails                 -> error
    AA passes, AAA fails     -> warning

Elements whose colours are transparent or unset are skipped without a
verdict. Elements whose style values cannot be parsed are skipped and
counted; a contrast verdict is never guessed.

Known limitation:
    The background is the element's own computed background. Colours
    inherited visually from ancestors are not composited.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from a11y_auditor.app.checks.contrast import (
    is_bold_weight,
    parse_css_color,
    parse_font_size,
    validate_contrast,
)
from a11y_auditor.app.checks.detectors.base import DetectorOptions, make_issue
from a11y_auditor.app.errors import ElementReadError
from a11y_auditor.app.schemas.detector_result import DetectorResult
from a11y_auditor.app.schemas.issues import Issue, IssueCategory, Severity
from a11y_auditor.app.tree.reader import TreeReader, VisitedElement, iter_descendants

logger = logging.getLogger(__name__)


def _check_element(
    visit: VisitedElement,
    reader: TreeReader,
    options: DetectorOptions,
) -> Optional[Issue]:
    element = visit.element
    style = reader.computed_style(element)

    if style.background_color is None or style.color is None:
        return None

    background = parse_css_color(style.background_color)
    if background is None:
        return None

    if not reader.text_content(element).strip():
        return None

    foreground = parse_css_color(style.color)
    if foreground is None:
        return None

    font_size = parse_font_size(style.font_size)
    bold = is_bold_weight(style.font_weight)

    result = validate_contrast(foreground, background, font_size, bold)
    if result.passes_aaa:
        return None

    return make_issue(
        issue_id=f"contrast-{visit.index}",
        severity=Severity.WARNING if result.passes_aa else Severity.ERROR,
        category=IssueCategory.COLOR_CONTRAST,
        message=f"Insufficient color contrast ratio: {result.ratio:.2f}:1",
        description=(
            f"WCAG AAA requires {result.aaa_threshold:g}:1 contrast ratio "
            f"for {'large' if result.large_text else 'normal'} text "
            f"(AA requires {result.aa_threshold:g}:1)"
        ),
        remediation="Adjust foreground or background colors to meet contrast requirements",
        wcag_criteria=["1.4.6 Contrast (Enhanced)"],
        element=element,
        reader=reader,
        options=options,
    )


def run_color_contrast_checks(
    root: Any,
    reader: TreeReader,
    options: Optional[DetectorOptions] = None,
) -> DetectorResult:
    """
    Run the color contrast detector over the descendants of `root`.
    """
    options = options or DetectorOptions()

    issues: List[Issue] = []
    visited = 0
    skipped = 0

    for visit in iter_descendants(root, reader):
        visited += 1
        try:
            issue = _check_element(visit, reader, options)
        except ElementReadError as exc:
            skipped += 1
            logger.warning(
                "Skipping element %d in color contrast check: %s",
                visit.index,
                exc,
            )
            continue

        if issue is not None:
            issues.append(issue)

    return DetectorResult(
        category=IssueCategory.COLOR_CONTRAST,
        issues=issues,
        elements_visited=visited,
        elements_skipped=skipped,
    )
