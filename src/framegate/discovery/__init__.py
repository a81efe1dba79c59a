"""Discovery of the textbox/button pair around the widget iframe.

Pipeline order: ``access`` (read the parent document) → ``locator`` (find
our own iframe) → ``collector`` (candidates around it) → ``classifier``
(first textbox, first button) → ``ordering`` (textbox must come first).
``pipeline.run_discovery`` runs one full pass.
"""

from framegate.discovery.access import HostBridge, StaticHostBridge, WindowToken
from framegate.discovery.pipeline import run_discovery

__all__ = ["HostBridge", "StaticHostBridge", "WindowToken", "run_discovery"]
