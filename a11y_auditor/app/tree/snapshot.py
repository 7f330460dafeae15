"""
In-memory Tree Reader over ElementSnapshot trees.

Scope selectors are a single compound selector: an optional tag name
followed by any number of `#id` and `.class` parts. Anything else matches
nothing.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, List, Optional

from a11y_auditor.app.schemas.elements import (
    BoundingBox,
    ComputedStyle,
    ElementSnapshot,
)

logger = logging.getLogger(__name__)


_SELECTOR_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9-]*)?((?:[#.][\w-]+)*)$")
_PART_RE = re.compile(r"([#.])([\w-]+)")


class SimpleSelector:
    """Parsed `tag#id.class` selector."""

    def __init__(self, tag: Optional[str], ids: List[str], classes: List[str]) -> None:
        self.tag = tag
        self.ids = ids
        self.classes = set(classes)

    @classmethod
    def parse(cls, selector: str) -> Optional["SimpleSelector"]:
        match = _SELECTOR_RE.match(selector.strip())
        if match is None or not any(match.groups()):
            return None

        parts = _PART_RE.findall(match.group(2))
        tag = match.group(1).lower() if match.group(1) else None
        return cls(
            tag,
            [name for kind, name in parts if kind == "#"],
            [name for kind, name in parts if kind == "."],
        )

    def matches(self, element: ElementSnapshot) -> bool:
        attrs = element.attributes
        if self.tag is not None and element.tag.lower() != self.tag:
            return False
        if any(attrs.get("id") != element_id for element_id in self.ids):
            return False
        return self.classes <= set(attrs.get("class", "").split())


class SnapshotTreeReader:
    """
    TreeReader over an immutable ElementSnapshot tree.

    The snapshot root is the document root (normally a `body` element).
    """

    def __init__(self, root: ElementSnapshot) -> None:
        self._root = root

    def document_root(self) -> ElementSnapshot:
        return self._root

    def resolve_scope(self, selector: str) -> Optional[ElementSnapshot]:
        parsed = SimpleSelector.parse(selector)
        if parsed is None:
            logger.warning("Unsupported scope selector: %s", selector)
            return None

        for element in self._iter_all():
            if parsed.matches(element):
                return element
        return None

    def tag(self, element: ElementSnapshot) -> str:
        return element.tag.lower()

    def attributes(self, element: ElementSnapshot) -> Dict[str, str]:
        return element.attributes

    def computed_style(self, element: ElementSnapshot) -> ComputedStyle:
        return element.style

    def bounding_box(self, element: ElementSnapshot) -> Optional[BoundingBox]:
        return element.box

    def text_content(self, element: ElementSnapshot) -> str:
        parts = [element.text]
        parts.extend(self.text_content(child) for child in element.children)
        return "".join(parts)

    def children(self, element: ElementSnapshot) -> List[ElementSnapshot]:
        return element.children

    def _iter_all(self) -> Iterator[ElementSnapshot]:
        stack = [self._root]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))
