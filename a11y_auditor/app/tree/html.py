"""
Static HTML loader.

Not a renderer: computed style comes from inline `style` declarations and
layout boxes from explicit `width`/`height` values only. Detectors skip
whatever the markup does not state.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from a11y_auditor.app.schemas.elements import (
    BoundingBox,
    ComputedStyle,
    ElementSnapshot,
)

logger = logging.getLogger(__name__)


_SKIPPED_TAGS = {"script", "style", "template", "noscript", "head"}
_PX_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(px)?\s*$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse_inline_style(raw: str) -> Dict[str, str]:
    declarations: Dict[str, str] = {}
    for declaration in raw.split(";"):
        if ":" not in declaration:
            continue
        name, _, value = declaration.partition(":")
        name = name.strip().lower()
        value = value.replace("!important", "").strip()
        if name and value:
            declarations[name] = value
    return declarations


def _parse_px(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    match = _PX_RE.match(value)
    if match is None:
        return None
    return float(match.group(1))


def _flatten_attributes(tag: Tag) -> Dict[str, str]:
    attributes: Dict[str, str] = {}
    for name, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        attributes[name.lower()] = "" if value is None else str(value)
    return attributes


def _style_for(declarations: Dict[str, str]) -> ComputedStyle:
    background = declarations.get("background-color")
    if background is None and "background" in declarations:
        # Only a bare colour token is usable from the shorthand.
        shorthand = declarations["background"]
        if " " not in shorthand.strip() or shorthand.strip().startswith("rgb"):
            background = shorthand

    values = {
        "color": declarations.get("color"),
        "background_color": background,
        "outline": declarations.get("outline"),
    }
    if "font-size" in declarations:
        values["font_size"] = declarations["font-size"]
    if "font-weight" in declarations:
        values["font_weight"] = declarations["font-weight"]

    return ComputedStyle(**values)


def _box_for(
    declarations: Dict[str, str],
    attributes: Dict[str, str],
) -> Optional[BoundingBox]:
    width = _parse_px(declarations.get("width"))
    height = _parse_px(declarations.get("height"))

    if width is None:
        width = _parse_px(attributes.get("width"))
    if height is None:
        height = _parse_px(attributes.get("height"))

    if width is None or height is None:
        return None
    return BoundingBox(width=width, height=height)


def _snapshot(tag: Tag) -> ElementSnapshot:
    attributes = _flatten_attributes(tag)
    declarations = _parse_inline_style(attributes.get("style", ""))

    own_text: List[str] = []
    children: List[ElementSnapshot] = []

    for node in tag.children:
        if type(node) is NavigableString:
            own_text.append(str(node))
        elif isinstance(node, Tag):
            if node.name.lower() in _SKIPPED_TAGS:
                continue
            children.append(_snapshot(node))

    return ElementSnapshot(
        tag=tag.name.lower(),
        attributes=attributes,
        style=_style_for(declarations),
        box=_box_for(declarations, attributes),
        text=" ".join(part.strip() for part in own_text if part.strip()),
        children=children,
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def load_html_snapshot(markup: str) -> ElementSnapshot:
    """
    Parse HTML markup into an ElementSnapshot rooted at `body`.

    Fragments without a body element are wrapped in a synthetic body.
    """
    soup = BeautifulSoup(markup, "html.parser")

    body = soup.find("body")
    if isinstance(body, Tag):
        return _snapshot(body)

    logger.debug("No <body> in markup; wrapping fragment in a synthetic body")

    children = [
        _snapshot(node)
        for node in soup.children
        if isinstance(node, Tag) and node.name.lower() not in _SKIPPED_TAGS
        and node.name.lower() != "html"
    ]
    for html_tag in soup.find_all("html", recursive=False):
        children.extend(
            _snapshot(node)
            for node in html_tag.children
            if isinstance(node, Tag) and node.name.lower() not in _SKIPPED_TAGS
        )

    text = " ".join(
        str(node).strip()
        for node in soup.children
        if type(node) is NavigableString
        and str(node).strip()
    )

    return ElementSnapshot(tag="body", text=text, children=children)
