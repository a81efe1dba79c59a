"""In-memory document tree.

A small element model with the parts of the browser DOM that discovery and
gating depend on: parent/sibling navigation, attributes, form-control state
(``value``, ``disabled``, inline ``style``) and synchronous event dispatch.
Trees are built by hand in tests, parsed from HTML (``framegate.dom.html``)
or rebuilt from a live page snapshot (``framegate.browser.bridge``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

_TEXT_VALUE_TAGS = frozenset({"textarea"})


@dataclass
class DomEvent:
    """An event delivered to element listeners."""

    type: str
    target: Element
    detail: dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[DomEvent], None]


class Element:
    """A single element node.

    Args:
        tag: Tag name; stored lower-cased.
        attributes: Initial attribute map.
        text: Text before the first child.
        tail: Text after this element's end tag, inside the parent.
        value: Current control value. Defaults to the ``value`` attribute,
            or the text content for ``<textarea>``.
    """

    def __init__(
        self,
        tag: str,
        attributes: dict[str, str] | None = None,
        *,
        text: str = "",
        tail: str = "",
        value: str | None = None,
    ) -> None:
        self.tag = tag.lower()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.text = text
        self.tail = tail
        self.parent: Element | None = None
        self.children: list[Element] = []
        self.style: dict[str, str] = {}
        self.disabled = "disabled" in self.attributes
        self._value = value
        self.frame_ordinal: int | None = None
        self._listeners: dict[str, list[EventListener]] = {}

    def __repr__(self) -> str:
        return f"<Element {self.describe()}>"

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value."""
        return self.attributes.get(name, default)

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    @property
    def name(self) -> str:
        return self.attributes.get("name", "")

    @property
    def input_type(self) -> str:
        """The control type the way ``HTMLInputElement.type`` reports it."""
        if self.tag == "textarea":
            return "textarea"
        if self.tag == "button":
            return (self.attributes.get("type") or "submit").strip().lower()
        return (self.attributes.get("type") or "text").strip().lower()

    @property
    def value(self) -> str:
        if self._value is not None:
            return self._value
        if self.tag in _TEXT_VALUE_TAGS:
            return self.text_content
        return self.attributes.get("value", "")

    @value.setter
    def value(self, new_value: str) -> None:
        self._value = new_value

    @property
    def text_content(self) -> str:
        parts = [self.text]
        for child in self.children:
            parts.append(child.text_content)
            parts.append(child.tail)
        return "".join(parts)

    def describe(self) -> str:
        """Short ``tag#id`` label for status messages."""
        ident = self.id or self.name or "(no id)"
        return f"{self.tag}#{ident}"

    # ------------------------------------------------------------------
    # Tree structure
    # ------------------------------------------------------------------

    def append_child(self, child: Element) -> Element:
        """Attach *child* as the last child and return it."""
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def insert_before(self, child: Element, reference: Element | None) -> Element:
        """Insert *child* before *reference*, or append when *reference* is None."""
        if reference is None:
            return self.append_child(child)
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.insert(self.children.index(reference), child)
        return child

    def remove(self) -> None:
        """Detach from the parent."""
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def clear_children(self) -> None:
        for child in self.children:
            child.parent = None
        self.children = []

    @property
    def parent_element(self) -> Element | None:
        return self.parent

    @property
    def previous_element_sibling(self) -> Element | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        pos = siblings.index(self)
        return siblings[pos - 1] if pos > 0 else None

    @property
    def next_element_sibling(self) -> Element | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        pos = siblings.index(self)
        return siblings[pos + 1] if pos + 1 < len(siblings) else None

    def iter_descendants(self) -> Iterator[Element]:
        """Yield descendants in depth-first pre-order (self excluded)."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter(self) -> Iterator[Element]:
        """Yield self followed by all descendants in pre-order."""
        yield self
        yield from self.iter_descendants()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def add_event_listener(self, event_type: str, listener: EventListener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: EventListener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event_type: str | None = None) -> int:
        """Number of registered listeners, for one event type or all of them."""
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(items) for items in self._listeners.values())

    def dispatch_event(self, event_type: str, **detail: Any) -> DomEvent:
        """Deliver an event synchronously to this element's listeners."""
        event = DomEvent(type=event_type, target=self, detail=detail)
        for listener in list(self._listeners.get(event_type, [])):
            listener(event)
        return event

    def type_text(self, value: str) -> None:
        """Replace the value and fire ``input``, as a user keystroke would."""
        self.value = value
        self.dispatch_event("input")

    def commit(self) -> None:
        """Fire ``change``, as leaving an edited field would."""
        self.dispatch_event("change")


class Document:
    """A document rooted at an ``<html>`` element."""

    def __init__(self, root: Element | None = None, *, url: str = "") -> None:
        if root is None:
            root = Element("html")
            root.append_child(Element("head"))
            root.append_child(Element("body"))
        self.root = root
        self.url = url

    def __repr__(self) -> str:
        return f"<Document url={self.url!r}>"

    @property
    def body(self) -> Element | None:
        for child in self.root.children:
            if child.tag == "body":
                return child
        return None

    def iter(self) -> Iterator[Element]:
        """Yield every element in document order."""
        return self.root.iter()

    def get_element_by_id(self, element_id: str) -> Element | None:
        for element in self.iter():
            if element.attributes.get("id") == element_id:
                return element
        return None

    def get_elements_by_tag_name(self, tag: str) -> list[Element]:
        wanted = tag.lower()
        return [element for element in self.iter() if element.tag == wanted]

    def document_positions(self) -> dict[int, int]:
        """Map ``id(element)`` to its pre-order position in the document."""
        return {id(element): pos for pos, element in enumerate(self.iter())}
