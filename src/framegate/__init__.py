"""framegate — locate the form controls around an embedded widget frame and gate submission on a pattern."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("framegate")
except Exception:
    __version__ = "0.0.0"
