"""Run widget discovery against a widget frame inside a live page."""

from __future__ import annotations

import logging

from framegate.browser.bridge import PlaywrightHostBridge, find_widget_frame
from framegate.exceptions import FrameGateError
from framegate.models.discovery import DiscoveryOutcome
from framegate.models.values import WidgetValues
from framegate.monitoring.status import StatusReporter
from framegate.runtime.scheduler import SchedTimerHost
from framegate.settings.config import Settings
from framegate.widget.app import Widget

logger = logging.getLogger(__name__)


def inspect_live_page(
    url: str,
    frame_hint: str,
    *,
    wait_sec: float = 0.0,
    values: WidgetValues | None = None,
    reporter: StatusReporter | None = None,
    settings: Settings | None = None,
) -> DiscoveryOutcome:
    """Open *url*, find the widget frame and run discovery from inside it.

    Requires ``playwright install chromium`` to have been run at least once.

    Args:
        url: Host page URL.
        frame_hint: Frame name, or a substring of the widget frame's URL.
        wait_sec: Keep retrying failed passes for up to this many seconds.
        values: Widget configuration; defaults to the ``widget`` settings.
        reporter: Receives the widget's status entries.
        settings: Overrides the cached settings.

    Returns:
        The outcome of the last discovery pass.

    Raises:
        FrameGateError: No frame in the page matches *frame_hint*.
    """
    from playwright.sync_api import sync_playwright

    from framegate.models.values import SettingsValuesResolver
    from framegate.settings import get_settings

    settings = settings or get_settings()
    hint = frame_hint or settings.browser.widget_frame
    if not hint:
        raise FrameGateError("A widget frame name or URL fragment is required")

    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=settings.browser.headless)
        try:
            page = browser.new_page()
            page.goto(url, wait_until="load", timeout=settings.browser.timeout_ms)
            frame = find_widget_frame(page, hint)
            if frame is None:
                raise FrameGateError(f"No frame matching {hint!r} on {url}")
            logger.info("Widget frame located: name=%r url=%s", frame.name, frame.url)

            # Let the page keep running while the scheduler waits between passes
            timers = SchedTimerHost(sleep=lambda seconds: page.wait_for_timeout(seconds * 1000))
            widget = Widget(
                PlaywrightHostBridge(frame),
                timers,
                values or SettingsValuesResolver(settings),
                reporter=reporter,
                order=settings.discovery.candidate_order,
                max_candidates=settings.discovery.max_candidates,
                retry_interval=settings.discovery.retry_interval_sec,
                autostart=False,
            )
            outcome = widget.discover()
            if wait_sec > 0:
                timers.run_until(lambda: not widget.scheduler.active, timeout=wait_sec)
                outcome = widget.last_outcome or outcome
            widget.close()
            return outcome
        finally:
            browser.close()
