"""Build ``Document`` trees from HTML markup and from serialized page snapshots."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from lxml import html as lxml_html

from framegate.dom.tree import Document, Element

logger = logging.getLogger(__name__)


def parse_html(markup: str, *, url: str = "") -> Document:
    """Parse an HTML page into a ``Document``.

    Comments and processing instructions are dropped so sibling navigation
    only sees elements, like ``previousElementSibling``.

    Args:
        markup: Full page or fragment markup.
        url: Optional source URL recorded on the document.

    Returns:
        The parsed document; lxml always supplies ``<html>`` and ``<body>``.
    """
    tree = lxml_html.document_fromstring(markup)
    root = _convert(tree)
    document = Document(root, url=url)
    logger.debug("Parsed %d elements from %s", sum(1 for _ in document.iter()), url or "<markup>")
    return document


def parse_html_file(path: Path) -> Document:
    """Parse an HTML file from disk."""
    return parse_html(path.read_text(encoding="utf-8"), url=path.resolve().as_uri())


def _convert(source: Any) -> Element:
    root = Element(str(source.tag), dict(source.attrib), text=source.text or "")
    stack: list[tuple[Any, Element]] = [(source, root)]
    while stack:
        node, element = stack.pop()
        for child in node:
            if not isinstance(child.tag, str):
                # Comment or PI: keep its tail text attached to the previous element
                if element.children:
                    element.children[-1].tail += child.tail or ""
                else:
                    element.text += child.tail or ""
                continue
            converted = Element(
                str(child.tag),
                {str(k): str(v) for k, v in child.attrib.items()},
                text=child.text or "",
                tail=child.tail or "",
            )
            element.append_child(converted)
            stack.append((child, converted))
    return root


def build_from_snapshot(payload: dict[str, Any], *, url: str = "") -> Document:
    """Rebuild a document from the nested dict produced by the snapshot script.

    Each node is ``{"tag", "attrs", "value", "text", "children", "frame"}``;
    ``frame`` is the ordinal of an ``<iframe>`` among the page's iframes and is
    kept as the ``frame_ordinal`` attribute of the rebuilt element.
    """
    root = _snapshot_node(payload)
    stack: list[tuple[dict[str, Any], Element]] = [(payload, root)]
    while stack:
        node, element = stack.pop()
        for child in node.get("children") or []:
            converted = _snapshot_node(child)
            element.append_child(converted)
            stack.append((child, converted))
    return Document(root, url=url)


def _snapshot_node(node: dict[str, Any]) -> Element:
    element = Element(
        str(node.get("tag") or "div"),
        {str(k): str(v) for k, v in dict(node.get("attrs") or {}).items()},
        text=str(node.get("text") or ""),
        value=node.get("value") if isinstance(node.get("value"), str) else None,
    )
    element.disabled = bool(node.get("disabled", element.disabled))
    frame = node.get("frame")
    if frame is not None:
        element.frame_ordinal = int(frame)
    return element
