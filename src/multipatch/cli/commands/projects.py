"""``multipatch projects`` and ``multipatch init`` - manage known projects."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from multipatch.cli.commands._common import (
    CONFIG_OPTION_HELP,
    configured_projects,
    print_json,
    run_or_exit,
)
from multipatch.config import resolve_config_path, save_projects
from multipatch.core.projects import Projects
from multipatch.errors import ConfigError

console = Console()


def projects(
    config: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Render project list as JSON"),
) -> None:
    """List the known projects in the order they are built."""

    def _run() -> None:
        known = configured_projects(config)
        if as_json:
            print_json({"projects": list(known)})
            return

        table = Table(title="Known projects")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Project", style="cyan")
        for position, name in enumerate(known, start=1):
            table.add_row(str(position), name)
        console.print(table)

    run_or_exit(_run)


def init(
    names: list[str] = typer.Argument(..., help="Known project names, in build order"),
    config: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
) -> None:
    """Write the known projects to the configuration file."""

    def _run() -> None:
        try:
            known = Projects.of(names)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        config_path = resolve_config_path(config)
        save_projects(config_path, known)
        typer.echo(f"Saved {len(known)} projects to {config_path}")

    run_or_exit(_run)
