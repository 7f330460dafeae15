"""
Exception taxonomy for the accessibility auditor.

Propagation policy:
- ScopeResolutionError and AuditCancelledError are surfaced to the caller.
  No report is produced for that call.
- ElementReadError is recovered at element granularity inside detectors.
  It is logged, counted as a skipped element, and never surfaced.

Any other exception raised inside a detector is a logic error and
propagates unchanged.
"""

from __future__ import annotations

from typing import Optional


class AccessibilityAuditError(Exception):
    """Base class for all auditor errors."""


class ScopeResolutionError(AccessibilityAuditError):
    """
    The configured scope selector resolved to no element.

    Raised before any detector runs. A failed run is never reported as
    a run that found zero issues.
    """

    def __init__(self, selector: Optional[str]) -> None:
        self.selector = selector
        super().__init__(f"Scope element not found: {selector!r}")


class AuditCancelledError(AccessibilityAuditError):
    """
    The audit was aborted before all detectors joined.

    Partial results are discarded.
    """

    def __init__(self, reason: str, timeout_seconds: Optional[float] = None) -> None:
        self.reason = reason
        self.timeout_seconds = timeout_seconds
        super().__init__(reason)


class ElementReadError(AccessibilityAuditError):
    """A single element could not be evaluated by a detector."""


class ColorParseError(ElementReadError):
    """A style colour value could not be parsed."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unparsable colour value: {value!r}")
