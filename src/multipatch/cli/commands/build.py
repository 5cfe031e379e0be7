"""``multipatch build`` - print PATCHES_TO_BUILD for a dump of Gerrit changes."""

from __future__ import annotations

from pathlib import Path

import typer

from multipatch.cli.commands._common import (
    CONFIG_OPTION_HELP,
    configured_projects,
    print_json,
    run_or_exit,
)
from multipatch.gerrit.loader import load_changes
from multipatch.job.multipatch import MultipatchJob


def build(
    changes_file: Path = typer.Argument(
        ...,
        help="Gerrit changes of one topic: REST ChangeInfo JSON or 'gerrit query --format=JSON' output",
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help=CONFIG_OPTION_HELP),
    as_json: bool = typer.Option(False, "--json", help="Render result and warnings as JSON"),
) -> None:
    """Print the PATCHES_TO_BUILD value for the changes in CHANGES_FILE."""

    def _run() -> None:
        job = MultipatchJob(configured_projects(config))
        result = job.get_patches_to_build_string(load_changes(changes_file))

        if as_json:
            print_json(result.to_dict())
            return

        typer.echo(result.result)
        for warning in result.warnings:
            typer.secho(warning, fg=typer.colors.YELLOW, err=True)

    run_or_exit(_run)
