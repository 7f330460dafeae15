"""
Detector registry.

Ordered mapping of category -> detector. Iteration order is the canonical
detector order and therefore the order in which issues appear in a report.
"""

from __future__ import annotations

from typing import Dict

from a11y_auditor.app.checks.detectors.aria import run_aria_checks
from a11y_auditor.app.checks.detectors.base import Detector
from a11y_auditor.app.checks.detectors.color_contrast import run_color_contrast_checks
from a11y_auditor.app.checks.detectors.content import run_content_checks
from a11y_auditor.app.checks.detectors.focus import run_focus_checks
from a11y_auditor.app.checks.detectors.keyboard import run_keyboard_checks
from a11y_auditor.app.checks.detectors.structure import run_structure_checks
from a11y_auditor.app.checks.detectors.touch_target import run_touch_target_checks
from a11y_auditor.app.schemas.issues import IssueCategory


DETECTORS: Dict[IssueCategory, Detector] = {
    IssueCategory.COLOR_CONTRAST: run_color_contrast_checks,
    IssueCategory.KEYBOARD: run_keyboard_checks,
    IssueCategory.FOCUS: run_focus_checks,
    IssueCategory.ARIA: run_aria_checks,
    IssueCategory.STRUCTURE: run_structure_checks,
    IssueCategory.CONTENT: run_content_checks,
    IssueCategory.TOUCH_TARGET: run_touch_target_checks,
}
