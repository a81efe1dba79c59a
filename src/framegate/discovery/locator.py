"""Find the widget's own ``<iframe>`` element in the parent document."""

from __future__ import annotations

import logging

from framegate.discovery.access import HostBridge
from framegate.dom.tree import Document, Element

logger = logging.getLogger(__name__)


def locate_own_iframe(document: Document, bridge: HostBridge) -> Element | None:
    """Return the iframe whose content window is the widget's own window.

    Iframes are checked in document order and the first match wins.
    Iframes that cannot be inspected are skipped.

    Returns:
        The matching iframe, or ``None`` when the host has not rendered it
        (yet). Not finding it is an expected, retryable outcome.
    """
    own = bridge.own_window
    for iframe in document.get_elements_by_tag_name("iframe"):
        try:
            window = bridge.content_window(iframe)
        except Exception as exc:
            logger.debug("Skipping uninspectable iframe %s: %s", iframe.describe(), exc)
            continue
        if window is own:
            logger.debug("Located own iframe %s", iframe.describe())
            return iframe
    return None
