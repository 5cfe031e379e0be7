"""Helpers shared by multipatch commands."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import typer

from multipatch.config import load_projects, resolve_config_path
from multipatch.core.projects import Projects
from multipatch.errors import BotError

T = TypeVar("T")

CONFIG_OPTION_HELP = "Path to the known-projects config (default: .multipatch/config.yaml)"


def print_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, sort_keys=True, default=str))


def run_or_exit(fn: Callable[[], T]) -> T:
    """Run ``fn``, turning domain errors into a red message and exit code 1."""
    try:
        return fn()
    except BotError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from exc


def configured_projects(config: Path | None) -> Projects:
    return load_projects(resolve_config_path(config))
