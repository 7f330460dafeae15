"""
Per-call audit configuration.

AuditConfig describes ONE audit request: where to audit and which
detectors to run. It is distinct from AuditorConfig, which holds engine
settings for the lifetime of a coordinator.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from a11y_auditor.app.schemas.issues import IssueCategory


class AuditConfig(BaseModel):
    """
    Input to run_audit.

    `highlight_issues` and `continuous` are consumed by the presentation
    layer that schedules and displays audits. The engine carries them
    but never acts on them.
    """

    scope: Optional[str] = Field(
        None,
        description=(
            "Selector of the root element to audit. None audits the whole "
            "document. The landmark check runs whenever the resolved root "
            "is the document root."
        ),
    )

    categories: Optional[List[IssueCategory]] = Field(
        None,
        description="Subset of detector categories to run; None runs all",
    )

    highlight_issues: bool = Field(
        False,
        description="Presentation flag; ignored by the engine",
    )

    continuous: bool = Field(
        False,
        description="Presentation flag; ignored by the engine",
    )

    @field_validator("scope")
    @classmethod
    def scope_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("scope must be None or a non-empty selector")
        return v

    @field_validator("categories")
    @classmethod
    def categories_not_empty(
        cls, v: Optional[List[IssueCategory]]
    ) -> Optional[List[IssueCategory]]:
        if v is not None and not v:
            raise ValueError(
                "categories must be None (all detectors) or a non-empty subset"
            )
        return v

    def selected_categories(self) -> List[IssueCategory]:
        """
        Selected categories in canonical detector order, deduplicated.
        """
        if self.categories is None:
            return list(IssueCategory)
        wanted = set(self.categories)
        return [category for category in IssueCategory if category in wanted]

    model_config = ConfigDict(frozen=True, extra="forbid")
