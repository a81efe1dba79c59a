"""CLI commands for running widget discovery against host pages."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from framegate.models.discovery import CandidateKind, DiscoveryOutcome
from framegate.settings.config import CandidateOrder

inspect_app = typer.Typer(help="Run widget discovery against a host page.")
console = Console()


@inspect_app.command("file")
def inspect_file(
    page: Path = typer.Argument(..., exists=True, dir_okay=False, help="Host page HTML file."),
    iframe_id: str = typer.Option(..., "--iframe", "-i", help="id of the <iframe> that hosts the widget."),
    order: Optional[CandidateOrder] = typer.Option(None, "--order", help="Candidate ordering (default from settings)."),
    value: Optional[str] = typer.Option(None, "--value", help="Type this into the found textbox and show the gate result."),
    show_candidates: bool = typer.Option(False, "--candidates", help="List every collected candidate."),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
) -> None:
    """Run one discovery pass against a saved host page."""
    from framegate.discovery.access import StaticHostBridge
    from framegate.models.values import SettingsValuesResolver
    from framegate.monitoring.status import ConsoleStatusSink, StatusReporter
    from framegate.runtime.scheduler import SchedTimerHost
    from framegate.settings import get_settings
    from framegate.widget.app import Widget

    settings = get_settings()
    try:
        bridge = StaticHostBridge.from_html(page.read_text(encoding="utf-8"), iframe_id=iframe_id)
    except ValueError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(code=1)

    reporter = StatusReporter()
    if not as_json:
        reporter.add_sink(ConsoleStatusSink(console))

    widget = Widget(
        bridge,
        SchedTimerHost(),
        SettingsValuesResolver(settings),
        reporter=reporter,
        order=order or settings.discovery.candidate_order,
        max_candidates=settings.discovery.max_candidates,
        retry_interval=settings.discovery.retry_interval_sec,
    )
    widget.close()
    outcome = widget.last_outcome
    if outcome is None:
        raise typer.Exit(code=1)

    payload = outcome.to_dict()
    if value is not None and widget.gate.installed and widget.gate.textbox is not None:
        widget.gate.textbox.type_text(value)
        evaluation = widget.gate.last_evaluation
        payload["gate"] = {"value": value, "button_enabled": bool(evaluation and evaluation.valid)}

    if as_json:
        typer.echo(json.dumps(payload, indent=2))
    else:
        if show_candidates:
            _print_candidates(outcome)
        if "gate" in payload:
            state = "[green]enabled[/green]" if payload["gate"]["button_enabled"] else "[red]disabled[/red]"
            console.print(f"  Button for {value!r}: {state}")

    if not outcome.success:
        raise typer.Exit(code=1)


@inspect_app.command("url")
def inspect_url(
    url: str = typer.Argument(..., help="Host page URL."),
    frame: str = typer.Option("", "--frame", "-f", help="Widget frame name or URL fragment (default from settings)."),
    wait: float = typer.Option(0.0, "--wait", "-w", min=0.0, help="Keep retrying for up to this many seconds."),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON."),
) -> None:
    """Run discovery from inside a widget frame on a live page (Playwright)."""
    from framegate.browser.live import inspect_live_page
    from framegate.exceptions import FrameGateError
    from framegate.monitoring.status import ConsoleStatusSink, StatusReporter

    reporter = StatusReporter()
    if not as_json:
        reporter.add_sink(ConsoleStatusSink(console))

    try:
        outcome = inspect_live_page(url, frame, wait_sec=wait, reporter=reporter)
    except FrameGateError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(outcome.to_dict(), indent=2))
    if not outcome.success:
        raise typer.Exit(code=1)


def _print_candidates(outcome: DiscoveryOutcome) -> None:
    table = Table(title="Candidates around the widget iframe")
    table.add_column("#", justify="right")
    table.add_column("Element")
    table.add_column("Kind")
    table.add_column("Selected")

    picked = {
        id(c.element): label
        for label, c in (("textbox", outcome.result.textbox), ("button", outcome.result.button))
        if c is not None
    }
    for candidate in outcome.candidates:
        if candidate.kind is CandidateKind.OTHER and id(candidate.element) not in picked:
            continue
        table.add_row(
            str(candidate.index),
            candidate.element.describe(),
            candidate.kind.value,
            picked.get(id(candidate.element), ""),
        )
    console.print(table)
