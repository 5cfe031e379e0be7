"""Known-project configuration in .multipatch/config.yaml.

The file lists the projects the multipatch job knows how to build, in the
order they must appear in PATCHES_TO_BUILD::

    projects:
      - odlparent
      - yangtools
      - mdsal
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from multipatch.core.projects import Projects
from multipatch.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MULTIPATCH_CONFIG"
DEFAULT_CONFIG_PATH = Path(".multipatch") / "config.yaml"


def resolve_config_path(explicit: Path | None = None) -> Path:
    """Pick the configuration file: explicit path, then env var, then default."""
    if explicit is not None:
        return explicit
    from_env = os.getenv(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env)
    return Path.cwd() / DEFAULT_CONFIG_PATH


def load_projects(config_path: Path) -> Projects:
    """Load the known projects from ``config_path``.

    Raises:
        ConfigError: If the file is missing or unparsable, or does not hold a
            non-empty ``projects`` list of names.
    """
    if not config_path.exists():
        raise ConfigError(
            f"Configuration file {config_path} not found. "
            f"Create it or point {CONFIG_ENV_VAR} at one."
        )

    yaml = YAML(typ="safe")
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

    names = payload.get("projects") if isinstance(payload, dict) else None
    if not isinstance(names, list) or not names:
        raise ConfigError(f"{config_path} must define a non-empty 'projects' list")

    invalid = [name for name in names if not isinstance(name, str) or not name.strip()]
    if invalid:
        raise ConfigError(f"Invalid project names in {config_path}: {invalid!r}")

    projects = Projects.of(names)
    logger.debug("Loaded %d known projects from %s", len(projects), config_path)
    return projects


def save_projects(config_path: Path, projects: Projects) -> None:
    """Persist the known projects, preserving other sections of the file.

    Raises:
        ConfigError: If an existing file cannot be parsed, or the file
            cannot be written.
    """
    yaml = YAML()
    yaml.preserve_quotes = True

    try:
        if config_path.exists():
            with config_path.open("r", encoding="utf-8") as handle:
                payload = yaml.load(handle) or {}
        else:
            payload = {}
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Failed to parse {config_path}: {exc}") from exc

    if not isinstance(payload, dict):
        payload = {}

    payload["projects"] = list(projects)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as handle:
            yaml.dump(payload, handle)
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Failed to write {config_path}: {exc}") from exc
