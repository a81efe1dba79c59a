"""Playwright-backed host bridge for a widget frame in a live page.

The parent frame's DOM is serialized by a page script into a nested dict and
rebuilt as a ``Document`` on every read, so each discovery pass sees the page
as it is now. Content windows are resolved through the live ``<iframe>``
handles: ``handle.content_frame()`` returns the same ``Frame`` object the
bridge was created with when the iframe hosts the widget.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from framegate.dom.html import build_from_snapshot
from framegate.dom.tree import Document, Element
from framegate.exceptions import AccessDenied, DiscoveryError, ParentUnavailable

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Frame, Page

logger = logging.getLogger(__name__)

# Playwright errors raised while the parent frame is navigating or reloading
_TRANSIENT_ERRORS = (
    "Execution context was destroyed",
    "Cannot find context with specified id",
    "Frame was detached",
    "navigating",
)

# Serializes the document into {tag, attrs, value, disabled, frame, children}.
# Iterative so deeply nested pages do not hit the JS call-stack limit.
_SNAPSHOT_JS = """
() => {
    const iframes = Array.from(document.getElementsByTagName('iframe'));
    const toNode = (el) => {
        const attrs = {};
        for (const attr of Array.from(el.attributes)) {
            attrs[attr.name] = attr.value;
        }
        const node = { tag: el.tagName.toLowerCase(), attrs, children: [] };
        if (el.tagName === 'INPUT' || el.tagName === 'TEXTAREA') node.value = el.value;
        if ('disabled' in el) node.disabled = !!el.disabled;
        if (el.tagName === 'IFRAME') node.frame = iframes.indexOf(el);
        return node;
    };
    const root = toNode(document.documentElement);
    const stack = [[document.documentElement, root]];
    while (stack.length) {
        const [el, node] = stack.pop();
        for (const child of Array.from(el.children)) {
            const childNode = toNode(child);
            node.children.push(childNode);
            stack.push([child, childNode]);
        }
    }
    return root;
}
"""


class PlaywrightHostBridge:
    """``HostBridge`` for a Playwright ``Frame`` that hosts the widget.

    Args:
        frame: The widget's own frame (a child frame of the host page).
    """

    def __init__(self, frame: Frame) -> None:
        self._frame = frame
        self._iframe_handles: list[ElementHandle] = []

    @property
    def own_window(self) -> object:
        return self._frame

    def read_parent_document(self) -> Document:
        parent = self._frame.parent_frame
        if parent is None:
            raise AccessDenied("widget frame has no parent frame")
        try:
            payload = parent.evaluate(_SNAPSHOT_JS)
            self._iframe_handles = parent.query_selector_all("iframe")
        except PlaywrightError as exc:
            raise _classify_error(exc) from exc
        logger.debug("Snapshotted parent frame %s (%d iframes)", parent.url, len(self._iframe_handles))
        return build_from_snapshot(payload, url=parent.url)

    def content_window(self, iframe: Element) -> object:
        ordinal = iframe.frame_ordinal
        if ordinal is None or not 0 <= ordinal < len(self._iframe_handles):
            raise AccessDenied(f"{iframe.describe()} is not present in the live page")
        try:
            return self._iframe_handles[ordinal].content_frame()
        except PlaywrightError as exc:
            raise AccessDenied(exc.message) from exc


def _classify_error(exc: PlaywrightError) -> DiscoveryError:
    """Map a Playwright error to a retryable or terminal discovery error."""
    message = exc.message
    if any(marker in message for marker in _TRANSIENT_ERRORS):
        return ParentUnavailable(message)
    return AccessDenied(message)


def find_widget_frame(page: Page, hint: str) -> Frame | None:
    """Return the first child frame whose name equals *hint* or whose URL contains it."""
    for frame in page.frames:
        if frame is page.main_frame:
            continue
        if frame.name == hint or (hint and hint in frame.url):
            return frame
    return None
