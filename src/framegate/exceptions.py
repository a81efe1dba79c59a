"""framegate exception hierarchy."""

from __future__ import annotations


class FrameGateError(Exception):
    """Base exception for all framegate errors."""


class DiscoveryError(FrameGateError):
    """A discovery pass ended without a usable textbox/button pair.

    Attributes:
        retryable: Whether polling again can fix the condition.
    """

    retryable: bool = True


class AccessDenied(DiscoveryError):
    """Reading the parent document was blocked by origin or sandbox policy.

    A timer cannot lift the restriction, so no retry is scheduled.
    """

    retryable = False

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot access parent DOM: {reason}")


class ParentUnavailable(DiscoveryError):
    """The parent document could not be read right now, e.g. mid-navigation.

    Unlike ``AccessDenied`` the condition is expected to clear, so polling continues.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Parent document is not available: {reason}")


class IframeNotFound(DiscoveryError):
    """None of the parent document's iframes hosts the widget's own window (yet)."""

    def __init__(self, iframe_count: int = 0) -> None:
        self.iframe_count = iframe_count
        super().__init__(f"Could not find our iframe in parent document ({iframe_count} iframes inspected)")


class IncompleteElementSet(DiscoveryError):
    """The textbox, the button, or both were not found before the iframe.

    Attributes:
        missing_textbox: No qualifying text control was found.
        missing_button: No qualifying button control was found.
    """

    def __init__(self, *, missing_textbox: bool, missing_button: bool) -> None:
        self.missing_textbox = missing_textbox
        self.missing_button = missing_button
        missing = [name for name, flag in (("input field", missing_textbox), ("button", missing_button)) if flag]
        super().__init__(f"No {' or '.join(missing)} found before iframe")


class OrderingViolation(DiscoveryError):
    """Both controls exist but the button sorts before the textbox."""

    def __init__(self, textbox_index: int, button_index: int) -> None:
        self.textbox_index = textbox_index
        self.button_index = button_index
        super().__init__(
            f"Textbox must appear before button in the page (textbox #{textbox_index}, button #{button_index})"
        )
