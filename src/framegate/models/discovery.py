"""Discovery pass data types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from framegate.dom.tree import Element
    from framegate.exceptions import DiscoveryError


class CandidateKind(str, Enum):
    """Coarse kind of a collected element."""

    INPUT_LIKE = "input_like"
    BUTTON_LIKE = "button_like"
    OTHER = "other"


class DiscoveryStatus(str, Enum):
    """Terminal status of one discovery pass."""

    COMPLETE = "complete"
    ACCESS_DENIED = "access_denied"
    PARENT_UNAVAILABLE = "parent_unavailable"
    IFRAME_NOT_FOUND = "iframe_not_found"
    INCOMPLETE = "incomplete"
    ORDERING_VIOLATION = "ordering_violation"


@dataclass(frozen=True)
class CandidateElement:
    """An element around the iframe with its position in the candidate sequence."""

    element: Element
    index: int
    kind: CandidateKind


@dataclass
class DiscoveryResult:
    """First qualifying textbox and button, either possibly missing."""

    textbox: CandidateElement | None = None
    button: CandidateElement | None = None

    @property
    def ordered(self) -> bool:
        if self.textbox is None or self.button is None:
            return False
        return self.textbox.index <= self.button.index

    @property
    def is_complete(self) -> bool:
        return self.ordered


@dataclass
class DiscoveryOutcome:
    """What one discovery pass concluded, for callers and reporting."""

    status: DiscoveryStatus
    result: DiscoveryResult = field(default_factory=DiscoveryResult)
    candidates: list[CandidateElement] = field(default_factory=list)
    iframe: Element | None = None
    exception: DiscoveryError | None = None

    @property
    def error(self) -> str:
        return str(self.exception) if self.exception is not None else ""

    @property
    def success(self) -> bool:
        return self.status == DiscoveryStatus.COMPLETE

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict suitable for JSON output."""

        def _describe(candidate: CandidateElement | None) -> dict[str, object] | None:
            if candidate is None:
                return None
            return {"element": candidate.element.describe(), "index": candidate.index}

        return {
            "status": self.status.value,
            "textbox": _describe(self.result.textbox),
            "button": _describe(self.result.button),
            "candidate_count": len(self.candidates),
            "error": self.error,
        }
