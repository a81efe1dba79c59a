"""Status reporter — timestamped, human-readable widget status entries.

Every component reports through one ``StatusReporter``. The reporter keeps
the visible history and fans each change out to registered sinks:

* ``DomStatusSink`` renders entries into the widget's ``status`` container.
* ``LoggingStatusSink`` forwards entries to the Python logger.
* ``ConsoleStatusSink`` prints entries with rich markup (CLI).
* ``InMemoryStatusSink`` collects entries for tests.

Usage::

    reporter = StatusReporter()
    reporter.add_sink(LoggingStatusSink())
    reporter.report("Found our iframe element", Severity.SUCCESS)
    reporter.report("Will retry every second", Severity.INFO, append=True)
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field
from rich.console import Console
from rich.markup import escape

from framegate.dom.tree import Element

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


_LOG_LEVELS: dict[Severity, int] = {
    Severity.SUCCESS: logging.INFO,
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}

_RICH_STYLES: dict[Severity, str] = {
    Severity.SUCCESS: "green",
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


class StatusEntry(BaseModel):
    """One rendered status line."""

    message: str
    severity: Severity = Severity.INFO
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def css_class(self) -> str:
        return f"status-entry status-{self.severity.value}"

    @property
    def text(self) -> str:
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.message}"


@runtime_checkable
class StatusSink(Protocol):
    """Consumer of status changes."""

    def handle_entry(self, entry: StatusEntry, *, append: bool) -> None:
        """Show *entry*; when *append* is False prior entries are cleared first."""
        ...


# ---------------------------------------------------------------------------
# Built-in sinks
# ---------------------------------------------------------------------------


class DomStatusSink:
    """Render entries as ``<div class="status-entry status-…">`` children of a container."""

    def __init__(self, container: Element) -> None:
        self.container = container

    def handle_entry(self, entry: StatusEntry, *, append: bool) -> None:
        if not append:
            self.container.clear_children()
            self.container.text = ""
        self.container.append_child(Element("div", {"class": entry.css_class}, text=entry.text))


class LoggingStatusSink:
    """Emit entries to the Python logger at a severity-matched level."""

    def __init__(self, logger_name: str = "framegate.status") -> None:
        self._logger = logging.getLogger(logger_name)

    def handle_entry(self, entry: StatusEntry, *, append: bool) -> None:
        self._logger.log(_LOG_LEVELS[entry.severity], "%s: %s", entry.severity.value, entry.message)


class ConsoleStatusSink:
    """Print entries to a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def handle_entry(self, entry: StatusEntry, *, append: bool) -> None:
        style = _RICH_STYLES[entry.severity]
        self._console.print(f"[dim]{entry.timestamp.strftime('%H:%M:%S')}[/dim] [{style}]{escape(entry.message)}[/{style}]")


class InMemoryStatusSink:
    """Collect every entry in arrival order."""

    def __init__(self) -> None:
        self.entries: list[StatusEntry] = []

    def handle_entry(self, entry: StatusEntry, *, append: bool) -> None:
        self.entries.append(entry)

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self.entries]


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------


class StatusReporter:
    """Holds the visible status history and dispatches changes to sinks."""

    def __init__(self, sinks: list[StatusSink] | None = None) -> None:
        self._sinks: list[StatusSink] = list(sinks or [])
        self._entries: list[StatusEntry] = []

    def add_sink(self, sink: StatusSink) -> None:
        self._sinks.append(sink)

    def remove_sink(self, sink: StatusSink) -> None:
        self._sinks = [s for s in self._sinks if s is not sink]

    @property
    def entries(self) -> list[StatusEntry]:
        """Entries currently shown, oldest first."""
        return list(self._entries)

    def report(self, message: str, severity: Severity | str = Severity.INFO, append: bool = False) -> StatusEntry:
        """Show a status message.

        Args:
            message: Human-readable text.
            severity: success, error, warning or info.
            append: Keep prior entries instead of replacing them.

        Returns:
            The recorded entry.
        """
        entry = StatusEntry(message=message, severity=Severity(severity))
        if not append:
            self._entries.clear()
        self._entries.append(entry)

        for sink in self._sinks:
            try:
                sink.handle_entry(entry, append=append)
            except Exception as exc:
                logger.warning("Status sink error (%s): %s", type(sink).__name__, exc)
        return entry
