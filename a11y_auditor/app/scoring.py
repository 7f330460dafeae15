"""
Scoring policies.

The score is informational. It never gates the compliance level.
"""

from __future__ import annotations

import math
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from a11y_auditor.app.schemas.report import SeverityCounts


class ScoringStrategy(Protocol):
    def score(self, counts: SeverityCounts, elements_examined: int) -> int:
        ...


class WeightedPenaltyScoring(BaseModel):
    """
    Penalty-per-issue scoring.

        penalty = errors*10 + warnings*3 + infos*1
        score   = round((examined*2 - penalty) / (examined*2) * 100)

    clamped to 0..100 and rounded half up. With nothing examined the score
    is 100 when there is no penalty and 0 otherwise.
    """

    error_weight: int = Field(10, ge=0)
    warning_weight: int = Field(3, ge=0)
    info_weight: int = Field(1, ge=0)
    points_per_element: int = Field(2, gt=0)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def penalty(self, counts: SeverityCounts) -> int:
        return (
            counts.error * self.error_weight
            + counts.warning * self.warning_weight
            + counts.info * self.info_weight
        )

    def score(self, counts: SeverityCounts, elements_examined: int) -> int:
        penalty = self.penalty(counts)

        if elements_examined <= 0:
            return 0 if penalty > 0 else 100

        max_score = elements_examined * self.points_per_element
        raw = (max_score - penalty) / max_score * 100
        return min(100, max(0, math.floor(raw + 0.5)))
