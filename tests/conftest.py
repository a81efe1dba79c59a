"""framegate test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

FIXTURES_DIR = Path(__file__).parent / "fixtures"
HOST_PAGES_DIR = FIXTURES_DIR / "host_pages"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from framegate.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Timers
# ---------------------------------------------------------------------------


class ManualTimerHandle:
    def __init__(self, when: float, seq: int, callback: Callable[[], object]) -> None:
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerHost:
    """``TimerHost`` driven by an explicit clock; nothing fires until ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.armed = 0
        self._timers: list[ManualTimerHandle] = []

    def call_later(self, delay: float, callback: Callable[[], object]) -> ManualTimerHandle:
        handle = ManualTimerHandle(self.now + delay, self.armed, callback)
        self.armed += 1
        self._timers.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in order. Returns how many fired."""
        target = self.now + seconds
        fired = 0
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target]
            if not due:
                break
            handle = min(due, key=lambda t: (t.when, t.seq))
            self._timers.remove(handle)
            self.now = handle.when
            handle.callback()
            fired += 1
        self.now = target
        self._timers = [t for t in self._timers if not t.cancelled]
        return fired


@pytest.fixture()
def timers() -> ManualTimerHost:
    return ManualTimerHost()


# ---------------------------------------------------------------------------
# Host pages (HTML paths)
# ---------------------------------------------------------------------------


@pytest.fixture()
def signup_page() -> Path:
    """Textbox nearer the widget iframe than the submit button."""
    return HOST_PAGES_DIR / "signup_ok.html"


@pytest.fixture()
def button_first_page() -> Path:
    """Button nearer the widget iframe than any textbox."""
    return HOST_PAGES_DIR / "button_first.html"


@pytest.fixture()
def no_button_page() -> Path:
    """A textarea before the iframe and no button at all."""
    return HOST_PAGES_DIR / "no_button.html"


@pytest.fixture()
def widget_page() -> Path:
    """The widget's own page with values and status containers."""
    return HOST_PAGES_DIR / "widget_page.html"


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that require a real browser")
    config.addinivalue_line("markers", "slow: marks tests that take more than a few seconds")


@pytest.fixture()
def anyio_backend() -> str:
    """Async tests use asyncio primitives directly; run them on asyncio only."""
    return "asyncio"
