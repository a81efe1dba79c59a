"""Collect the elements that precede the widget iframe.

Proximity ordering: starting at the iframe, each previous sibling (nearest
first) is emitted followed by its subtree in pre-order; once a level's
siblings are exhausted the walk climbs to the parent and repeats, stopping
at ``<body>``. The sequence is therefore ordered by closeness to the iframe,
not by page position: in ``<input id=a><input id=b><iframe>`` ``b`` comes
before ``a``.

``CandidateOrder.DOCUMENT`` keeps the same candidate set but sorts it into
top-to-bottom page order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from framegate.discovery.classifier import element_kind
from framegate.dom.tree import Document, Element
from framegate.models.discovery import CandidateElement
from framegate.settings.config import CandidateOrder

logger = logging.getLogger(__name__)


def iter_proximity(iframe: Element, body: Element | None) -> Iterator[Element]:
    """Yield the elements around *iframe* in proximity order."""
    node: Element | None = iframe
    while node is not None and node is not body:
        sibling = node.previous_element_sibling
        while sibling is not None:
            yield sibling
            yield from sibling.iter_descendants()
            sibling = sibling.previous_element_sibling
        node = node.parent_element


def collect_candidates(
    iframe: Element,
    document: Document,
    *,
    order: CandidateOrder = CandidateOrder.PROXIMITY,
    max_candidates: int | None = None,
) -> list[CandidateElement]:
    """Build the indexed candidate sequence around *iframe*.

    Args:
        iframe: The widget's own iframe element.
        document: The parent document the iframe lives in.
        order: Proximity (default) or literal document order.
        max_candidates: Stop collecting after this many elements.

    Returns:
        Candidates with ``index`` equal to their position in the sequence.
    """
    elements: list[Element] = []
    for element in iter_proximity(iframe, document.body):
        if max_candidates is not None and len(elements) >= max_candidates:
            logger.warning("Candidate walk truncated at %d elements", max_candidates)
            break
        elements.append(element)

    if order is CandidateOrder.DOCUMENT:
        positions = document.document_positions()
        elements.sort(key=lambda el: positions.get(id(el), 0))

    candidates = [CandidateElement(element=el, index=i, kind=element_kind(el)) for i, el in enumerate(elements)]
    logger.debug("Collected %d candidates around %s (%s order)", len(candidates), iframe.describe(), order.value)
    return candidates
