"""
Element snapshot schemas.

Style values stay raw computed-style strings. Parsing them is the
detectors' job, so an unparsable value surfaces as a per-element read
failure rather than a schema error.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ComputedStyle(BaseModel):
    """Computed style values consulted by the detectors."""

    color: Optional[str] = Field(
        None,
        description="Foreground (text) colour, e.g. '#333' or 'rgb(51, 51, 51)'",
    )

    background_color: Optional[str] = Field(
        None,
        description="Background colour; None or 'transparent' when unset",
    )

    font_size: str = Field(
        "16px",
        description="Font size in CSS pixels",
    )

    font_weight: str = Field(
        "400",
        description="Numeric weight or keyword ('normal', 'bold')",
    )

    outline: Optional[str] = Field(
        None,
        description="Outline shorthand; 'none', '0' or '0px' suppress it",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


class BoundingBox(BaseModel):
    """Layout box in device-independent pixels."""

    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ElementSnapshot(BaseModel):
    """
    Immutable view of one element and its subtree.

    `text` is the element's own text. The full text content of an element
    is its own text followed by the text content of its children, in
    document order.
    """

    tag: str = Field(..., description="Lower-case tag name")

    attributes: Dict[str, str] = Field(default_factory=dict)

    style: ComputedStyle = Field(default_factory=ComputedStyle)

    box: Optional[BoundingBox] = Field(
        None,
        description="Layout box; None when the element has not been laid out",
    )

    text: str = Field("", description="Own text, excluding children")

    children: List["ElementSnapshot"] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")


class ElementSummary(BaseModel):
    """
    Display-only summary of an element, used in exported reports.
    """

    tag: str
    class_name: str = ""
    element_id: str = ""
    text_preview: str = Field(
        "",
        description="Text content preview, truncated to the configured length",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


ElementSnapshot.model_rebuild()
