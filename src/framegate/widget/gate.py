"""Validation gate — keeps the host button disabled until the textbox matches the pattern."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from framegate.dom.tree import DomEvent, Element
from framegate.patterns import compile_pattern

logger = logging.getLogger(__name__)

GATE_EVENTS = ("input", "change")

_VALID_STYLE = {"opacity": "1", "cursor": "pointer"}
_INVALID_STYLE = {"opacity": "0.5", "cursor": "not-allowed"}


@dataclass(frozen=True)
class GateEvaluation:
    value: str
    valid: bool


class ValidationGate:
    """Binds a textbox/button pair to a pattern.

    The pattern follows ``RegExp.test`` semantics: a match anywhere in the
    value counts, so anchors belong in the pattern itself. ``$`` only
    matches at the very end and ``\\d`` only matches ASCII digits.

    Args:
        pattern: ``RegExp`` source; translated and compiled once.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern = compile_pattern(pattern)
        self.textbox: Element | None = None
        self.button: Element | None = None
        self.last_evaluation: GateEvaluation | None = None

    @property
    def installed(self) -> bool:
        return self.textbox is not None

    def install(self, textbox: Element, button: Element) -> bool:
        """Attach listeners and apply the initial state.

        Returns:
            False when the gate was already installed; nothing is attached twice.
        """
        if self.installed:
            logger.debug("Validation gate already installed; ignoring %s", textbox.describe())
            return False
        self.textbox = textbox
        self.button = button
        self.evaluate()
        for event_type in GATE_EVENTS:
            textbox.add_event_listener(event_type, self._on_input)
        logger.info("Validation gate installed on %s -> %s", textbox.describe(), button.describe())
        return True

    def matches(self, value: str) -> bool:
        return self.pattern.search(value) is not None

    def evaluate(self) -> GateEvaluation:
        """Recompute validity from the textbox's current value and update the button."""
        if self.textbox is None or self.button is None:
            raise RuntimeError("Validation gate is not installed")
        value = self.textbox.value
        valid = self.matches(value)
        self.button.disabled = not valid
        self.button.style.update(_VALID_STYLE if valid else _INVALID_STYLE)
        self.last_evaluation = GateEvaluation(value=value, valid=valid)
        return self.last_evaluation

    def _on_input(self, event: DomEvent) -> None:
        self.evaluate()
