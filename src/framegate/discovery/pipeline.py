"""One discovery pass: parent document → own iframe → candidates → textbox/button → ordering.

Every failure inside the pass is a ``DiscoveryError``; ``run_discovery``
turns it into a ``DiscoveryOutcome`` so nothing escapes to the caller's
event or timer callback.
"""

from __future__ import annotations

import logging

from framegate.discovery.access import HostBridge
from framegate.discovery.classifier import classify
from framegate.discovery.collector import collect_candidates
from framegate.discovery.locator import locate_own_iframe
from framegate.discovery.ordering import validate_ordering
from framegate.dom.tree import Document
from framegate.exceptions import (
    AccessDenied,
    DiscoveryError,
    IframeNotFound,
    IncompleteElementSet,
    OrderingViolation,
    ParentUnavailable,
)
from framegate.models.discovery import DiscoveryOutcome, DiscoveryStatus
from framegate.settings.config import CandidateOrder

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[DiscoveryError], DiscoveryStatus] = {
    AccessDenied: DiscoveryStatus.ACCESS_DENIED,
    ParentUnavailable: DiscoveryStatus.PARENT_UNAVAILABLE,
    IframeNotFound: DiscoveryStatus.IFRAME_NOT_FOUND,
    IncompleteElementSet: DiscoveryStatus.INCOMPLETE,
    OrderingViolation: DiscoveryStatus.ORDERING_VIOLATION,
}


def run_discovery(
    bridge: HostBridge,
    *,
    order: CandidateOrder = CandidateOrder.PROXIMITY,
    max_candidates: int | None = None,
) -> DiscoveryOutcome:
    """Execute one discovery pass against *bridge*.

    Args:
        bridge: Access to the parent document and iframe windows.
        order: Candidate ordering used by the collector and ordering check.
        max_candidates: Upper bound on collected elements.

    Returns:
        A ``DiscoveryOutcome``. On failure ``exception`` holds the
        ``DiscoveryError`` and ``result`` holds whatever was found.
    """
    outcome = DiscoveryOutcome(status=DiscoveryStatus.COMPLETE)
    try:
        document = _read_parent(bridge)
        iframes = document.get_elements_by_tag_name("iframe")
        outcome.iframe = locate_own_iframe(document, bridge)
        if outcome.iframe is None:
            raise IframeNotFound(len(iframes))

        outcome.candidates = collect_candidates(
            outcome.iframe,
            document,
            order=order,
            max_candidates=max_candidates,
        )
        outcome.result = classify(outcome.candidates)
        validate_ordering(outcome.result)
    except DiscoveryError as exc:
        outcome.status = _STATUS_BY_ERROR.get(type(exc), DiscoveryStatus.INCOMPLETE)
        outcome.exception = exc
        logger.info("Discovery pass failed (%s): %s", outcome.status.value, exc)
        return outcome

    logger.info(
        "Discovery pass complete: textbox=%s button=%s",
        outcome.result.textbox.element.describe() if outcome.result.textbox else None,
        outcome.result.button.element.describe() if outcome.result.button else None,
    )
    return outcome


def _read_parent(bridge: HostBridge) -> Document:
    """Read the parent document; foreign bridge errors count as access denial."""
    try:
        return bridge.read_parent_document()
    except DiscoveryError:
        raise
    except Exception as exc:
        raise AccessDenied(str(exc) or type(exc).__name__) from exc
