"""The widget: wires discovery, retry polling, the validation gate and status reporting.

Construction runs one discovery pass. A failed pass starts polling, and each
tick re-runs the pass until it succeeds; success installs the validation
gate (once per widget lifetime) and stops polling. Parent-document access
denial is reported with a remediation hint and never polled.

All state lives on the instance, so several widgets can run side by side.
"""

from __future__ import annotations

import logging

from framegate.discovery.access import HostBridge
from framegate.discovery.pipeline import run_discovery
from framegate.dom.tree import Document
from framegate.models.discovery import DiscoveryOutcome, DiscoveryStatus
from framegate.models.values import StaticValuesResolver, ValuesResolver, WidgetValues
from framegate.monitoring.status import DomStatusSink, Severity, StatusReporter
from framegate.runtime.scheduler import RetryScheduler, TimerHost
from framegate.settings.config import CandidateOrder
from framegate.widget.gate import ValidationGate
from framegate.widget.view import render_values, status_container

logger = logging.getLogger(__name__)

REMEDIATION_HINT = "This widget requires 'allow-same-origin' in iframe sandbox or same-origin pages."


class Widget:
    """Form-gating widget bound to one host document.

    Args:
        bridge: Access to the parent document.
        timers: Timer source for retry polling.
        values: Configuration values, or a resolver that supplies them.
        reporter: Status reporter; a fresh one is created when omitted.
        own_document: The widget's own page. When it has a ``status``
            container, entries are rendered into it; ``values.<key>``
            elements receive the configuration values.
        order: Candidate ordering for discovery.
        max_candidates: Upper bound on collected candidates per pass.
        retry_interval: Seconds between retry passes.
        autostart: Run the first discovery pass during construction.
    """

    def __init__(
        self,
        bridge: HostBridge,
        timers: TimerHost,
        values: WidgetValues | ValuesResolver | None = None,
        *,
        reporter: StatusReporter | None = None,
        own_document: Document | None = None,
        order: CandidateOrder = CandidateOrder.PROXIMITY,
        max_candidates: int | None = None,
        retry_interval: float = 1.0,
        autostart: bool = True,
    ) -> None:
        if values is None:
            values = StaticValuesResolver()
        self.values = values if isinstance(values, WidgetValues) else values.resolve()
        self.bridge = bridge
        self.reporter = reporter or StatusReporter()
        self.own_document = own_document
        self.order = order
        self.max_candidates = max_candidates
        self.gate = ValidationGate(self.values.validation_pattern)
        self.scheduler = RetryScheduler(timers, self._retry, interval=retry_interval)
        self.passes = 0
        self.last_outcome: DiscoveryOutcome | None = None

        if own_document is not None:
            container = status_container(own_document)
            if container is not None:
                self.reporter.add_sink(DomStatusSink(container))
            render_values(own_document, self.values)

        if autostart:
            self.discover()

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover(self) -> DiscoveryOutcome:
        """Run one discovery pass and act on its outcome."""
        self.passes += 1
        outcome = run_discovery(self.bridge, order=self.order, max_candidates=self.max_candidates)
        self.last_outcome = outcome

        if outcome.status is DiscoveryStatus.ACCESS_DENIED:
            self.reporter.report(f"✗ {outcome.error}", Severity.ERROR)
            self.reporter.report(REMEDIATION_HINT, Severity.WARNING, append=True)
            logger.warning("Parent document is not accessible; discovery stopped")
            return outcome

        if outcome.status is DiscoveryStatus.PARENT_UNAVAILABLE:
            self.reporter.report(f"✗ {outcome.error}", Severity.ERROR)
            self._start_polling()
            return outcome

        if outcome.status is DiscoveryStatus.IFRAME_NOT_FOUND:
            self.reporter.report("✗ Could not find our iframe in parent document", Severity.ERROR)
            self._start_polling()
            return outcome

        self.reporter.report("✓ Found our iframe element", Severity.SUCCESS)

        if outcome.status is DiscoveryStatus.ORDERING_VIOLATION:
            self.reporter.report("✗ Textbox must appear before button in the page", Severity.ERROR, append=True)
            self._start_polling()
            return outcome

        self._report_found(outcome)
        if not outcome.success:
            self._start_polling()
            return outcome

        textbox, button = outcome.result.textbox, outcome.result.button
        if textbox is None or button is None:
            return outcome
        if self.gate.install(textbox.element, button.element):
            self.reporter.report(
                "✓ Textbox validation handler attached - button will be enabled when validation passes",
                Severity.SUCCESS,
                append=True,
            )
        if self.scheduler.stop():
            self.reporter.report("✓ Retry interval stopped - elements found", Severity.SUCCESS, append=True)
        return outcome

    def _report_found(self, outcome: DiscoveryOutcome) -> None:
        textbox = outcome.result.textbox
        button = outcome.result.button
        if textbox is None:
            self.reporter.report("✗ No input field found before iframe", Severity.ERROR, append=True)
            return
        self.reporter.report(f"✓ Found input: {textbox.element.describe()}", Severity.SUCCESS, append=True)
        if button is None:
            self.reporter.report("✗ No button found before iframe", Severity.ERROR, append=True)
            return
        self.reporter.report(f"✓ Found button: {button.element.describe()}", Severity.SUCCESS, append=True)

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def _start_polling(self) -> None:
        if self.scheduler.start():
            self.reporter.report(
                f"⏳ Will retry finding elements every {self.scheduler.interval:g} second(s)...",
                Severity.INFO,
                append=True,
            )

    def _retry(self) -> None:
        self.reporter.report("🔄 Retrying element search...", Severity.INFO, append=True)
        self.discover()

    def close(self) -> None:
        """Stop polling without reporting; listeners stay attached."""
        self.scheduler.stop()
