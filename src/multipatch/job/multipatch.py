"""Builder for the PATCHES_TO_BUILD parameter of integration-multipatch-test.

The parameter lists, per project, the Gerrit patch sets to build, e.g.::

    p2:30/23973/48,p3,p4:05/71205/7:62/69362/30:40/38973/60

Projects appear in the canonical order of the known projects. Within a
project, patches are ordered so that a change comes after the change whose
commit it was created on top of.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from multipatch.core.dependency_sorter import sort_dependencies
from multipatch.core.projects import Projects
from multipatch.core.result import ResultWithWarnings
from multipatch.errors import MalformedRevisionReferenceError
from multipatch.gerrit.models import REF_CHANGES_PREFIX, Change

logger = logging.getLogger(__name__)

CONFLICT_REFUSAL_WARNING = (
    "Refusing build as long as there are changes with conflicts, please rebase and resolve them."
)
UNKNOWN_PROJECT_WARNING = "Ignored unknown project: {project}"

__all__ = [
    "CONFLICT_REFUSAL_WARNING",
    "UNKNOWN_PROJECT_WARNING",
    "MultipatchJob",
    "assemble",
    "change_is_parent_of",
    "classify",
    "has_conflict",
    "patch_identifier",
]


def change_is_parent_of(first: Change, second: Change) -> bool:
    """True when ``second`` was created directly on top of ``first``."""
    return first.current_commit == second.parent_commit


def has_conflict(changes: Iterable[Change]) -> bool:
    """True when any change is known to conflict with its target branch."""
    return any(change.has_conflict for change in changes)


def classify(
    changes: Sequence[Change], projects: Projects
) -> tuple[dict[str, list[Change]], list[str]]:
    """Group open changes by known project.

    Returns the groups in canonical project order, with the leading run of
    projects that have no open changes removed, and one warning per distinct
    unknown project (in the order first seen).
    """
    groups: dict[str, list[Change]] = {project: [] for project in projects}
    for change in changes:
        if not change.is_open:
            continue
        group = groups.get(change.project)
        if group is not None:
            group.append(change)

    # only the leading empty projects are dropped, later ones stay bare
    for project in list(groups):
        if groups[project]:
            break
        del groups[project]

    unknown_projects: dict[str, None] = {}
    for change in changes:
        if change.project not in projects:
            unknown_projects.setdefault(change.project, None)

    warnings = []
    for project in unknown_projects:
        logger.warning("Ignoring changes of unknown project %s", project)
        warnings.append(UNKNOWN_PROJECT_WARNING.format(project=project))
    return groups, warnings


def patch_identifier(change: Change) -> str:
    """Return the ``NN/NNNNN/P`` part of the change's revision reference."""
    reference = change.revision_reference
    if not reference.startswith(REF_CHANGES_PREFIX):
        raise MalformedRevisionReferenceError(change.label, reference)
    return reference[len(REF_CHANGES_PREFIX):]


def assemble(groups: dict[str, list[Change]]) -> str:
    """Render grouped changes as a PATCHES_TO_BUILD value."""
    segments = []
    for project, project_changes in groups.items():
        if project_changes:
            patches = ":".join(patch_identifier(change) for change in project_changes)
            segments.append(f"{project}:{patches}")
        else:
            segments.append(project)
    return ",".join(segments)


class MultipatchJob:
    """Computes build directives for a fixed set of known projects."""

    def __init__(self, projects: Projects) -> None:
        self.projects = projects

    def get_patches_to_build_string(self, changes: Sequence[Change]) -> ResultWithWarnings:
        """Construct the PATCHES_TO_BUILD parameter for ``changes``.

        Builds are refused outright, with an empty result and a single
        warning, when any change has merge conflicts.

        Raises:
            MalformedRevisionReferenceError: If a change to be built has a
                revision reference outside ``refs/changes/``.
            DependencyCycleError: If the changes of one project have cyclic
                parent commits.
        """
        if has_conflict(changes):
            logger.info("Refusing build of %d changes because of conflicts", len(changes))
            return ResultWithWarnings("", (CONFLICT_REFUSAL_WARNING,))

        # TODO refuse the build while a change lacks a +1 Verified vote
        groups, warnings = classify(changes, self.projects)

        for project, project_changes in groups.items():
            logger.debug("Ordering %d changes of %s", len(project_changes), project)
            sort_dependencies(project_changes, change_is_parent_of)

        patches_to_build = assemble(groups)
        logger.info("PATCHES_TO_BUILD=%s", patches_to_build)
        return ResultWithWarnings(patches_to_build, tuple(warnings))
