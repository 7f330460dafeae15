from typing import List

from pydantic import BaseModel, ConfigDict, Field

from a11y_auditor.app.schemas.issues import Issue, IssueCategory


# ---------------------------------------------------------------------------
# Internal transport object
# ---------------------------------------------------------------------------

class DetectorResult(BaseModel):
    """
    Output of a single detector run.

    Each detector returns its own result. Results are merged only after
    all detectors have joined, so no detector ever writes shared state.

    IMPORTANT
    ---------
    - issues are in document order
    - elements_visited counts every element the detector walked
    - elements_skipped counts elements whose evaluation failed with
      ElementReadError (diagnostic only)
    """

    category: IssueCategory

    issues: List[Issue] = Field(default_factory=list)

    elements_visited: int = Field(0, ge=0)

    elements_skipped: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True, extra="forbid")
