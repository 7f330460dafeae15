"""
Tree Reader capability.

The auditor never queries a live render tree directly. Detectors read the
inspected interface through this injected interface, so they can run
against synthetic in-memory trees as well as adapters over a real
rendering engine.

Implementations must be read-only for the duration of a run and safe to
call from several worker threads at once.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Protocol, Tuple

from a11y_auditor.app.schemas.elements import BoundingBox, ComputedStyle, ElementSummary


class TreeReader(Protocol):
    """
    Read-only access to an element tree.

    Elements are opaque handles owned by the reader.
    """

    def document_root(self) -> Any:
        """Return the root element of the whole document (the body)."""
        ...

    def resolve_scope(self, selector: str) -> Optional[Any]:
        """Return the first element matching `selector`, or None."""
        ...

    def tag(self, element: Any) -> str:
        """Lower-case tag name."""
        ...

    def attributes(self, element: Any) -> Dict[str, str]:
        ...

    def computed_style(self, element: Any) -> ComputedStyle:
        ...

    def bounding_box(self, element: Any) -> Optional[BoundingBox]:
        """Layout box, or None when the element has no layout."""
        ...

    def text_content(self, element: Any) -> str:
        """Text content of the element and its descendants, in document order."""
        ...

    def children(self, element: Any) -> List[Any]:
        """Ordered children."""
        ...


class VisitedElement(NamedTuple):
    """One step of a document-order walk."""

    index: int
    element: Any
    ancestor_tags: Tuple[str, ...]


def iter_descendants(root: Any, reader: TreeReader) -> Iterator[VisitedElement]:
    """
    Walk the descendants of `root` in document (pre-order) order.

    The root itself is not yielded. Indices start at 0 and are stable for
    a given snapshot, so every detector assigns the same index to the same
    element.
    """
    index = 0
    stack: List[Tuple[Any, Tuple[str, ...]]] = [
        (child, (reader.tag(root),))
        for child in reversed(reader.children(root))
    ]

    while stack:
        element, ancestors = stack.pop()
        yield VisitedElement(index, element, ancestors)
        index += 1

        child_ancestors = ancestors + (reader.tag(element),)
        for child in reversed(reader.children(element)):
            stack.append((child, child_ancestors))


def summarize_element(
    element: Any,
    reader: TreeReader,
    *,
    preview_chars: int = 100,
) -> ElementSummary:
    """
    Build the display-only summary that replaces an element reference
    in exported reports.
    """
    attributes = reader.attributes(element)
    text = reader.text_content(element).strip()

    return ElementSummary(
        tag=reader.tag(element),
        class_name=attributes.get("class", ""),
        element_id=attributes.get("id", ""),
        text_preview=text[:preview_chars],
    )
