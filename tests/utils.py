"""Shared builders for multipatch tests."""

from __future__ import annotations

from multipatch.gerrit.models import Change, ChangeStatus


def new_change(
    project: str,
    ref: str,
    commit: str,
    parent_commit: str | None = "nop",
    *,
    status: ChangeStatus = ChangeStatus.NEW,
    mergeable: bool | None = True,
    number: int | None = None,
) -> Change:
    """Build a Change the way Gerrit would report its current revision."""
    return Change(
        project=project,
        status=status,
        revision_reference=ref,
        current_commit=commit,
        parent_commit=parent_commit,
        mergeable=mergeable,
        number=number,
    )


def change_info(
    project: str,
    ref: str,
    commit: str,
    parent_commit: str | None = None,
    *,
    status: str = "NEW",
    mergeable: bool | None = True,
    number: int = 1,
) -> dict:
    """Build a Gerrit REST ChangeInfo payload with its current revision."""
    commit_info: dict = {"parents": [{"commit": parent_commit}] if parent_commit else []}
    payload: dict = {
        "id": f"{project}~master~I{number:040d}",
        "project": project,
        "branch": "master",
        "change_id": f"I{number:040d}",
        "subject": f"Change {number}",
        "status": status,
        "_number": number,
        "current_revision": commit,
        "revisions": {commit: {"_number": 1, "ref": ref, "commit": commit_info}},
    }
    if mergeable is not None:
        payload["mergeable"] = mergeable
    return payload


