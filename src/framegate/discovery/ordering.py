"""Accept a discovery result only when the textbox precedes the button."""

from __future__ import annotations

from framegate.exceptions import IncompleteElementSet, OrderingViolation
from framegate.models.discovery import DiscoveryResult


def validate_ordering(result: DiscoveryResult) -> DiscoveryResult:
    """Return *result* unchanged when complete, else raise.

    Raises:
        OrderingViolation: Both found but ``textbox.index > button.index``.
        IncompleteElementSet: The textbox or the button is missing.
    """
    if result.textbox is not None and result.button is not None:
        if result.textbox.index > result.button.index:
            raise OrderingViolation(result.textbox.index, result.button.index)
        return result
    raise IncompleteElementSet(
        missing_textbox=result.textbox is None,
        missing_button=result.button is None,
    )
