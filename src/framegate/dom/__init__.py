"""Document tree model used by discovery and gating.

``tree`` holds the element model; ``html`` builds trees from markup (lxml)
and from live page snapshots.
"""

from framegate.dom.html import build_from_snapshot, parse_html, parse_html_file
from framegate.dom.tree import Document, DomEvent, Element

__all__ = [
    "Document",
    "DomEvent",
    "Element",
    "build_from_snapshot",
    "parse_html",
    "parse_html_file",
]
