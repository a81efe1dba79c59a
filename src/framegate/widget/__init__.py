"""The embedded widget: orchestration (``app``), validation gate (``gate``) and own-page view (``view``)."""

from framegate.widget.app import Widget
from framegate.widget.gate import ValidationGate

__all__ = ["ValidationGate", "Widget"]
