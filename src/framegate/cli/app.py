"""Unified CLI entry point for framegate.

Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml -> env vars (FRAMEGATE_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

from typing import Optional

import typer

from framegate.cli.inspect_cmd import inspect_app
from framegate.cli.settings_cmd import settings_app

try:
    from importlib.metadata import version

    VERSION = version("framegate")
except Exception:
    VERSION = "unknown"

APP_HELP = (
    "framegate — locate the text field and button around an embedded widget frame "
    "and gate the button on a validation pattern. "
    "Config precedence: settings.default.toml -> settings.<env>.toml -> settings.local.toml "
    "-> env vars (FRAMEGATE_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.add_typer(inspect_app, name="inspect")
app.add_typer(settings_app, name="settings")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level."),
) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"framegate {VERSION}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    from framegate.logging_setup import configure_logging
    from framegate.settings import get_settings

    settings = get_settings()
    configure_logging(log_level or settings.logging.level, json_format=settings.logging.json_format)


if __name__ == "__main__":
    app()
