"""Classify collected elements and pick the first textbox and button."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from framegate.dom.tree import Element
from framegate.models.discovery import CandidateElement, CandidateKind, DiscoveryResult

logger = logging.getLogger(__name__)

_NON_TEXT_INPUT_TYPES = frozenset({"hidden", "button", "submit"})
_BUTTON_INPUT_TYPES = frozenset({"button", "submit"})


def is_textbox(element: Element) -> bool:
    """A ``<textarea>``, or an ``<input>`` that is not hidden/button/submit."""
    if element.tag == "textarea":
        return True
    return element.tag == "input" and element.input_type not in _NON_TEXT_INPUT_TYPES


def is_button(element: Element) -> bool:
    """A ``<button>``, or an ``<input>`` of type button/submit."""
    if element.tag == "button":
        return True
    return element.tag == "input" and element.input_type in _BUTTON_INPUT_TYPES


def element_kind(element: Element) -> CandidateKind:
    if is_button(element):
        return CandidateKind.BUTTON_LIKE
    if is_textbox(element):
        return CandidateKind.INPUT_LIKE
    return CandidateKind.OTHER


def classify(candidates: Iterable[CandidateElement]) -> DiscoveryResult:
    """Scan *candidates* once and record the first textbox and first button.

    Each search stops at its first match; later matches are ignored.
    """
    result = DiscoveryResult()
    for candidate in candidates:
        if result.textbox is None and candidate.kind is CandidateKind.INPUT_LIKE:
            result.textbox = candidate
        elif result.button is None and candidate.kind is CandidateKind.BUTTON_LIKE:
            result.button = candidate
        if result.textbox is not None and result.button is not None:
            break
    logger.debug(
        "Classified candidates: textbox=%s button=%s",
        result.textbox.element.describe() if result.textbox else None,
        result.button.element.describe() if result.button else None,
    )
    return result
