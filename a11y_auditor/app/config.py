"""
Environment-driven engine settings. They tune rule parameters, never
which rules apply.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AuditorConfig(BaseModel):
    """Frozen for the lifetime of a coordinator."""

    # ------------------------------------------------------------------
    # Detector scheduling
    # ------------------------------------------------------------------

    RUN_DETECTORS_CONCURRENTLY: bool = Field(
        True,
        description="Run detectors in worker threads and join before aggregation",
    )

    DETECTOR_TIMEOUT_SECONDS: Optional[float] = Field(
        None,
        description=(
            "Deadline for all detectors to join. When exceeded the run fails "
            "with AuditCancelledError. None disables the deadline."
        ),
    )

    # ------------------------------------------------------------------
    # Detector parameters
    # ------------------------------------------------------------------

    MIN_TOUCH_TARGET_PX: float = Field(
        44.0,
        description="Minimum width and height of an interactive element (WCAG 2.5.5)",
    )

    # ------------------------------------------------------------------
    # Export parameters
    # ------------------------------------------------------------------

    TEXT_PREVIEW_CHARS: int = Field(
        100,
        description="Maximum text-content preview length in element summaries",
    )

    REPORT_FILE_EXTENSION: str = Field(
        "json",
        description="File extension used when naming exported reports",
    )

    # ------------------------------------------------------------------
    # Validators (Pydantic v2)
    # ------------------------------------------------------------------

    @field_validator("DETECTOR_TIMEOUT_SECONDS")
    @classmethod
    def timeout_must_be_positive(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(
                f"DETECTOR_TIMEOUT_SECONDS must be positive, got {v}"
            )
        return v

    @field_validator("MIN_TOUCH_TARGET_PX")
    @classmethod
    def touch_target_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(
                f"MIN_TOUCH_TARGET_PX must be positive, got {v}"
            )
        return v

    @field_validator("TEXT_PREVIEW_CHARS")
    @classmethod
    def preview_length_in_range(cls, v: int) -> int:
        if not 1 <= v <= 1000:
            raise ValueError(
                f"TEXT_PREVIEW_CHARS must be between 1 and 1000, got {v}"
            )
        return v

    @field_validator("REPORT_FILE_EXTENSION")
    @classmethod
    def extension_is_bare_token(cls, v: str) -> str:
        v = v.strip().lstrip(".")
        if not v or not v.isalnum():
            raise ValueError(
                f"REPORT_FILE_EXTENSION must be alphanumeric, got {v!r}"
            )
        return v

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "AuditorConfig":
        """Read A11Y_AUDITOR_* environment variables."""

        def env_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        timeout_env = os.getenv("A11Y_AUDITOR_DETECTOR_TIMEOUT_SECONDS")

        return cls(
            RUN_DETECTORS_CONCURRENTLY=env_bool(
                "A11Y_AUDITOR_RUN_DETECTORS_CONCURRENTLY", True
            ),
            DETECTOR_TIMEOUT_SECONDS=(
                float(timeout_env)
                if timeout_env
                else None
            ),
            MIN_TOUCH_TARGET_PX=float(
                os.getenv("A11Y_AUDITOR_MIN_TOUCH_TARGET_PX", "44")
            ),
            TEXT_PREVIEW_CHARS=int(
                os.getenv("A11Y_AUDITOR_TEXT_PREVIEW_CHARS", "100")
            ),
            REPORT_FILE_EXTENSION=os.getenv(
                "A11Y_AUDITOR_REPORT_FILE_EXTENSION", "json"
            ),
        )

    model_config = {
        "frozen": True,
    }
