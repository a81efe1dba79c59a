"""Cross-document access as a fallible capability.

The discovery pass never touches a parent document directly. It asks a
``HostBridge`` for one, and the bridge either hands back a ``Document`` or
raises ``AccessDenied``. The same bridge answers which window an iframe
hosts, so self-location can be exercised against constructed trees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from framegate.dom.html import parse_html
from framegate.dom.tree import Document, Element
from framegate.exceptions import AccessDenied

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class WindowToken:
    """Opaque stand-in for a browsing context; compared by identity."""

    name: str = "window"


@runtime_checkable
class HostBridge(Protocol):
    """Access to the document that embeds the widget."""

    @property
    def own_window(self) -> object:
        """The widget's own window."""
        ...

    def read_parent_document(self) -> Document:
        """Return the parent document or raise ``AccessDenied``."""
        ...

    def content_window(self, iframe: Element) -> object:
        """Return the window hosted by *iframe*; may raise ``AccessDenied``."""
        ...


class StaticHostBridge:
    """Bridge over an in-memory parent document.

    Args:
        document: The parent document; ``None`` behaves like a blocked read.
        own_window: The widget's window token.
        windows: Content window per iframe element. Unlisted iframes host an
            anonymous window of their own.
        denied_reason: When set, every parent read raises ``AccessDenied``.
        blocked_iframes: Iframes whose inspection raises ``AccessDenied``.
    """

    def __init__(
        self,
        document: Document | None,
        *,
        own_window: object | None = None,
        windows: dict[Element, object] | None = None,
        denied_reason: str = "",
        blocked_iframes: set[Element] | None = None,
    ) -> None:
        self.document = document
        self._own_window = own_window if own_window is not None else WindowToken("widget")
        self._windows: dict[Element, object] = dict(windows or {})
        self._blocked: set[Element] = set(blocked_iframes or ())
        self.denied_reason = denied_reason
        self.reads = 0

    @classmethod
    def from_html(cls, markup: str, *, iframe_id: str | None = None) -> StaticHostBridge:
        """Parse *markup* and treat the iframe with id *iframe_id* as the widget's own."""
        document = parse_html(markup)
        bridge = cls(document)
        if iframe_id is not None:
            iframe = document.get_element_by_id(iframe_id)
            if iframe is None or iframe.tag != "iframe":
                raise ValueError(f"No <iframe id={iframe_id!r}> in markup")
            bridge.attach(iframe)
        return bridge

    @property
    def own_window(self) -> object:
        return self._own_window

    def attach(self, iframe: Element) -> None:
        """Make *iframe* host the widget's own window."""
        self._windows[iframe] = self._own_window

    def block(self, iframe: Element) -> None:
        """Make inspections of *iframe* fail like a nested cross-origin frame."""
        self._blocked.add(iframe)

    def read_parent_document(self) -> Document:
        self.reads += 1
        if self.denied_reason:
            raise AccessDenied(self.denied_reason)
        if self.document is None:
            raise AccessDenied("widget is not embedded in a parent document")
        return self.document

    def content_window(self, iframe: Element) -> object:
        if iframe in self._blocked:
            raise AccessDenied(f"{iframe.describe()} is cross-origin")
        window = self._windows.get(iframe)
        if window is None:
            window = self._windows[iframe] = WindowToken(iframe.describe())
        return window
