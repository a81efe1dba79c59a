"""The widget's own document: configuration display and the status container."""

from __future__ import annotations

import logging

from framegate.dom.tree import Document, Element
from framegate.models.values import WidgetValues

logger = logging.getLogger(__name__)

STATUS_CONTAINER_ID = "status"
VALUES_ID_PREFIX = "values."


def render_values(document: Document, values: WidgetValues) -> int:
    """Write each configuration value into the element with id ``values.<key>``.

    Returns:
        How many elements were updated. Missing elements are skipped.
    """
    updated = 0
    for key, value in values.display_items().items():
        element = document.get_element_by_id(f"{VALUES_ID_PREFIX}{key}")
        if element is None:
            continue
        element.clear_children()
        element.text = value
        updated += 1
    logger.debug("Rendered %d configuration values", updated)
    return updated


def status_container(document: Document) -> Element | None:
    return document.get_element_by_id(STATUS_CONTAINER_ID)
