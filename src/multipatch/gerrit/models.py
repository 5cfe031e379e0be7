"""Gerrit change records as consumed by the multipatch job.

Only the handful of ``ChangeInfo`` fields that matter for building a
directive are kept: the project, status and mergeability, the current
revision's ref, and the current and first parent commits.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from multipatch.errors import ChangeParseError

REF_CHANGES_PREFIX = "refs/changes/"


class ChangeStatus(StrEnum):
    """Gerrit change states."""

    NEW = "NEW"
    MERGED = "MERGED"
    ABANDONED = "ABANDONED"

    @classmethod
    def parse(cls, value: str) -> ChangeStatus:
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError) as exc:
            raise ChangeParseError(f"Unknown change status: {value!r}") from exc


@dataclass(frozen=True)
class Change:
    """A pending Gerrit change, reduced to its current revision."""

    project: str
    status: ChangeStatus
    revision_reference: str  # e.g. "refs/changes/62/69362/30"
    current_commit: str
    parent_commit: str | None = None
    mergeable: bool | None = None
    number: int | None = None  # Gerrit "_number"
    change_id: str | None = None  # "I..." Change-Id footer
    subject: str | None = None
    topic: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status is ChangeStatus.NEW

    @property
    def has_conflict(self) -> bool:
        # None means Gerrit has not computed mergeability, e.g. merged changes
        return self.mergeable is False

    @property
    def label(self) -> str:
        """Short human-readable identifier used in logs and error messages."""
        if self.number is not None:
            return f"{self.project}~{self.number}"
        return f"{self.project}@{self.current_commit[:12]}"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "project": self.project,
            "status": str(self.status),
            "revision_reference": self.revision_reference,
            "current_commit": self.current_commit,
            "parent_commit": self.parent_commit,
            "mergeable": self.mergeable,
        }
        if self.number is not None:
            d["number"] = self.number
        if self.change_id:
            d["change_id"] = self.change_id
        if self.subject:
            d["subject"] = self.subject
        if self.topic:
            d["topic"] = self.topic
        return d

    @classmethod
    def from_change_info(cls, data: dict[str, Any]) -> Change:
        """Build a Change from a Gerrit REST ``ChangeInfo`` payload.

        The payload must have been requested with ``CURRENT_REVISION`` and
        ``CURRENT_COMMIT`` options so that the current revision carries its
        ref and commit parents.

        Raises:
            ChangeParseError: If a required field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise ChangeParseError(f"Expected a ChangeInfo object, got {type(data).__name__}")

        try:
            project = data["project"]
            status = ChangeStatus.parse(data["status"])
            current_revision = data["current_revision"]
            revision = data["revisions"][current_revision]
            ref = revision["ref"]
        except (KeyError, TypeError) as exc:
            raise ChangeParseError(
                f"ChangeInfo for {data.get('_number', data.get('id', '?'))} "
                f"is missing required field: {exc}"
            ) from exc

        parent_commit = None
        commit = revision.get("commit")
        if isinstance(commit, dict):
            parents = commit.get("parents") or []
            if parents and isinstance(parents[0], dict):
                parent_commit = parents[0].get("commit")

        mergeable = data.get("mergeable")
        if mergeable is not None and not isinstance(mergeable, bool):
            raise ChangeParseError(f"Invalid mergeable flag: {mergeable!r}")

        return cls(
            project=project,
            status=status,
            revision_reference=ref,
            current_commit=current_revision,
            parent_commit=parent_commit,
            mergeable=mergeable,
            number=data.get("_number"),
            change_id=data.get("change_id"),
            subject=data.get("subject"),
            topic=data.get("topic"),
        )

    @classmethod
    def from_query_row(cls, data: dict[str, Any]) -> Change:
        """Build a Change from one row of ``gerrit query --format=JSON``.

        The row must have been produced with ``--current-patch-set``.

        Raises:
            ChangeParseError: If a required field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise ChangeParseError(f"Expected a query row object, got {type(data).__name__}")

        try:
            project = data["project"]
            status = ChangeStatus.parse(data["status"])
            patch_set = data["currentPatchSet"]
            ref = patch_set["ref"]
            revision = patch_set["revision"]
        except (KeyError, TypeError) as exc:
            raise ChangeParseError(
                f"Query row for {data.get('number', '?')} is missing required field: {exc}"
            ) from exc

        parents = patch_set.get("parents") or []
        number = data.get("number")
        try:
            number = int(number) if number is not None else None
        except (TypeError, ValueError) as exc:
            raise ChangeParseError(f"Invalid change number: {number!r}") from exc
        return cls(
            project=project,
            status=status,
            revision_reference=ref,
            current_commit=revision,
            parent_commit=parents[0] if parents else None,
            # the SSH query output carries no mergeability
            mergeable=None,
            number=number,
            change_id=data.get("id"),
            subject=data.get("subject"),
            topic=data.get("topic"),
        )
