"""Read Gerrit change dumps from disk.

Two formats are accepted:

- REST output: a JSON array of ``ChangeInfo`` objects, optionally preceded
  by Gerrit's ``)]}'`` guard line.
- SSH query output: one JSON object per line as written by
  ``gerrit query --format=JSON --current-patch-set``. The trailing
  ``{"type": "stats", ...}`` row is skipped.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from multipatch.errors import ChangeParseError
from multipatch.gerrit.models import Change

logger = logging.getLogger(__name__)

XSSI_GUARD = ")]}'"

__all__ = ["XSSI_GUARD", "load_changes", "parse_changes"]


def _strip_guard(text: str) -> str:
    stripped = text.lstrip()
    if stripped.startswith(XSSI_GUARD):
        return stripped[len(XSSI_GUARD):]
    return stripped


def _parse_rest(payload: Any) -> list[Change]:
    if isinstance(payload, dict):
        # a single ChangeInfo, as returned by GET /changes/{id}
        payload = [payload]
    if not isinstance(payload, list):
        raise ChangeParseError(f"Expected a list of changes, got {type(payload).__name__}")
    return [Change.from_change_info(item) for item in payload]


def _parse_query_lines(text: str) -> list[Change]:
    changes: list[Change] = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        stripped = raw_line.strip()
        if not stripped:
            continue
        try:
            row = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise ChangeParseError(f"Invalid JSON on line {line_number}: {exc}") from exc
        if isinstance(row, dict) and row.get("type") == "stats":
            continue
        try:
            changes.append(Change.from_query_row(row))
        except ChangeParseError as exc:
            raise ChangeParseError(f"Line {line_number}: {exc}") from exc
    return changes


def parse_changes(text: str) -> list[Change]:
    """Parse a Gerrit change dump in either supported format.

    Raises:
        ChangeParseError: If the text is not valid JSON in either format, or
            a change lacks required fields.
    """
    body = _strip_guard(text)
    if not body.strip():
        return []

    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        # several top-level objects, so this is line-oriented query output
        return _parse_query_lines(body)

    if isinstance(payload, dict):
        if payload.get("type") == "stats":
            # query output for a topic without changes
            return []
        if "currentPatchSet" in payload:
            return [Change.from_query_row(payload)]
    return _parse_rest(payload)


def load_changes(path: Path) -> list[Change]:
    """Read and parse a Gerrit change dump from ``path``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ChangeParseError(f"Failed to read {path}: {exc}") from exc

    changes = parse_changes(text)
    logger.debug("Loaded %d changes from %s", len(changes), path)
    return changes
