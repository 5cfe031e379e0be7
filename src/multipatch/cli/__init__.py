"""Command line interface for multipatch."""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from multipatch import __version__
from multipatch.cli.commands.build import build
from multipatch.cli.commands.projects import init, projects

console = Console()

USAGE = "USAGE: multipatch build CHANGES_FILE [--config PATH] [--json]"

app = typer.Typer(
    name="multipatch",
    help="Compute PATCHES_TO_BUILD for the integration-multipatch-test job",
    add_completion=False,
    invoke_without_command=True,
)


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("multipatch")
    if not verbose:
        return
    if any(isinstance(h, logging.StreamHandler) for h in package_logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
    version: bool = typer.Option(False, "--version", help="Show the version and exit"),
) -> None:
    """Show usage when no subcommand is provided."""
    if version:
        console.print(f"multipatch {__version__}")
        raise typer.Exit(0)
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print(USAGE)
        console.print("[dim]Run 'multipatch --help' for usage information[/dim]")


app.command()(build)
app.command()(projects)
app.command()(init)


def main() -> None:
    app()


__all__ = ["app", "main"]
