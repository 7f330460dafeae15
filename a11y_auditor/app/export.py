"""
Report export.

Serializes an AccessibilityReport into a UTF-8 JSON payload suitable for
writing to disk. Element references never leave the process; each issue
carries only its display summary.
"""

from __future__ import annotations

import json

from a11y_auditor.app.schemas.report import AccessibilityReport


def export_report(report: AccessibilityReport) -> bytes:
    """
    Return the report as indented UTF-8 JSON bytes.
    """
    payload = report.model_dump(mode="json")

    return json.dumps(
        payload,
        indent=2,
        ensure_ascii=False,
    ).encode("utf-8")


def report_filename(report: AccessibilityReport, extension: str = "json") -> str:
    """
    accessibility-report-<YYYY-MM-DD>.<extension>, dated from the report.
    """
    extension = extension.lstrip(".")
    return f"accessibility-report-{report.generated_at.date().isoformat()}.{extension}"
