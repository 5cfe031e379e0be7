"""Tests for the PATCHES_TO_BUILD builder."""

from __future__ import annotations

import pytest

from multipatch.core.projects import Projects
from multipatch.errors import MalformedRevisionReferenceError
from multipatch.gerrit.models import ChangeStatus
from multipatch.job.multipatch import (
    CONFLICT_REFUSAL_WARNING,
    MultipatchJob,
    assemble,
    change_is_parent_of,
    classify,
    has_conflict,
    patch_identifier,
)
from tests.utils import new_change


@pytest.fixture()
def job() -> MultipatchJob:
    return MultipatchJob(Projects("p1", "p2", "p3", "p4"))


@pytest.fixture()
def dependent_changes():
    return [
        new_change(
            "p4",
            "refs/changes/62/69362/30",
            "d0d555ce4da5b908bb8a9571e8121376faac8662",
            "acb49a826fa2d1f3bd83c353c2523f7435fab8c3",
        ),
        new_change(
            "p4",
            "refs/changes/05/71205/7",
            "acb49a826fa2d1f3bd83c353c2523f7435fab8c3",
            "c3a160feb24db00aae6004e30e3a2dec16b4977b",
        ),
        new_change("p2", "refs/changes/30/23973/48", "7e27ffff30e05b9afa61e248f117d6c4f21c340a", "..."),
        new_change(
            "p4",
            "refs/changes/40/38973/60",
            "eec23848695fdac7c068e22ddce0ca781a215045",
            "d0d555ce4da5b908bb8a9571e8121376faac8662",
        ),
    ]


class TestGetPatchesToBuildString:
    """Test MultipatchJob.get_patches_to_build_string()."""

    def test_format(self, job):
        result = job.get_patches_to_build_string([
            new_change("p4", "refs/changes/62/69362/30", "commit-sha1"),
            new_change("p2", "refs/changes/30/23973/48", "commit-sha2 ;)"),
            new_change("p4", "refs/changes/40/38973/60", "commit-sha3 ;)"),
        ])
        assert result.result == "p2:30/23973/48,p3,p4:62/69362/30:40/38973/60"
        assert result.warnings == ()

    def test_parent_dependency_ordering(self, job, dependent_changes):
        result = job.get_patches_to_build_string(dependent_changes)
        assert result.result == "p2:30/23973/48,p3,p4:05/71205/7:62/69362/30:40/38973/60"

    def test_input_changes_not_reordered(self, job, dependent_changes):
        before = list(dependent_changes)
        job.get_patches_to_build_string(dependent_changes)
        assert dependent_changes == before

    def test_mergeable_none_is_accepted(self):
        merged_change = new_change("p1", "refs/changes/62/69362/30", "commit-sha1", mergeable=None)
        result = MultipatchJob(Projects("p1")).get_patches_to_build_string([merged_change])
        assert "p1" in result.result
        assert result.result == "p1:62/69362/30"

    def test_mergeable_none_same_as_true(self, job):
        with_true = [new_change("p2", "refs/changes/30/23973/48", "c1", mergeable=True)]
        with_none = [new_change("p2", "refs/changes/30/23973/48", "c1", mergeable=None)]
        assert job.get_patches_to_build_string(with_true) == job.get_patches_to_build_string(with_none)

    def test_ignore_unknown_projects(self):
        job = MultipatchJob(Projects("p1"))
        result = job.get_patches_to_build_string([
            new_change("p1", "refs/changes/62/69362/30", "commit-sha1"),
            new_change("p2", "refs/changes/30/23973/48", "commit-sha2 ;)"),
        ])
        assert "p1" in result.result
        assert "p2" not in result.result
        assert not any("p1" in warning for warning in result.warnings)
        assert any("p2" in warning for warning in result.warnings)

    def test_unknown_project_warned_once(self):
        job = MultipatchJob(Projects("p1"))
        result = job.get_patches_to_build_string([
            new_change("zz", "refs/changes/01/1/1", "c1"),
            new_change("p1", "refs/changes/02/2/1", "c2"),
            new_change("yy", "refs/changes/03/3/1", "c3"),
            new_change("zz", "refs/changes/04/4/1", "c4"),
        ])
        assert result.warnings == (
            "Ignored unknown project: zz",
            "Ignored unknown project: yy",
        )

    def test_conflict_refuses_build(self, job, dependent_changes):
        conflicting = new_change("p1", "refs/changes/99/99999/1", "c9", mergeable=False)
        result = job.get_patches_to_build_string([*dependent_changes, conflicting])
        assert result.result == ""
        assert result.warnings == (CONFLICT_REFUSAL_WARNING,)

    def test_conflict_on_unknown_project_still_refuses(self, job):
        result = job.get_patches_to_build_string([
            new_change("p2", "refs/changes/30/23973/48", "c1"),
            new_change("other", "refs/changes/nope", "c2", mergeable=False),
        ])
        assert result.result == ""
        assert result.warnings == (CONFLICT_REFUSAL_WARNING,)

    def test_closed_changes_not_built(self, job):
        result = job.get_patches_to_build_string([
            new_change("p1", "refs/changes/11/111/1", "c1", status=ChangeStatus.MERGED),
            new_change("p2", "refs/changes/22/222/2", "c2"),
            new_change("p3", "refs/changes/33/333/3", "c3", status=ChangeStatus.ABANDONED),
        ])
        assert result.result == "p2:22/222/2,p3,p4"

    def test_no_changes(self, job):
        result = job.get_patches_to_build_string([])
        assert result.result == ""
        assert result.warnings == ()

    def test_malformed_reference_fails_whole_build(self, job):
        with pytest.raises(MalformedRevisionReferenceError, match="p4~4711"):
            job.get_patches_to_build_string([
                new_change("p2", "refs/changes/30/23973/48", "c1"),
                new_change("p4", "refs/heads/master", "c2", number=4711),
            ])

    def test_malformed_reference_of_closed_change_ignored(self, job):
        result = job.get_patches_to_build_string([
            new_change("p2", "refs/changes/30/23973/48", "c1"),
            new_change("p4", "refs/heads/master", "c2", status=ChangeStatus.MERGED),
        ])
        assert result.result == "p2:30/23973/48,p3,p4"


class TestClassify:
    """Test classify() grouping and pruning."""

    def test_leading_empty_groups_pruned_later_kept(self):
        groups, warnings = classify(
            [new_change("p3", "refs/changes/01/1/1", "c1")],
            Projects("p1", "p2", "p3", "p4", "p5"),
        )
        assert list(groups) == ["p3", "p4", "p5"]
        assert groups["p4"] == []
        assert warnings == []

    def test_all_empty_groups_pruned(self):
        groups, _ = classify([], Projects("p1", "p2"))
        assert groups == {}

    def test_groups_follow_canonical_order(self):
        changes = [
            new_change("p2", "refs/changes/02/2/1", "c2"),
            new_change("p1", "refs/changes/01/1/1", "c1"),
        ]
        groups, _ = classify(changes, Projects("p1", "p2"))
        assert list(groups) == ["p1", "p2"]

    def test_changes_keep_input_order_within_project(self):
        first = new_change("p1", "refs/changes/01/1/1", "c1")
        second = new_change("p1", "refs/changes/02/2/1", "c2")
        groups, _ = classify([first, second], Projects("p1"))
        assert groups["p1"] == [first, second]

    def test_unknown_projects_from_closed_changes_reported(self):
        _, warnings = classify(
            [new_change("gone", "refs/changes/01/1/1", "c1", status=ChangeStatus.MERGED)],
            Projects("p1"),
        )
        assert warnings == ["Ignored unknown project: gone"]


class TestHelpers:
    def test_has_conflict(self):
        assert not has_conflict([])
        assert not has_conflict([new_change("p1", "refs/changes/01/1/1", "c1", mergeable=None)])
        assert has_conflict([new_change("p1", "refs/changes/01/1/1", "c1", mergeable=False)])

    def test_change_is_parent_of(self, dependent_changes):
        assert not change_is_parent_of(dependent_changes[0], dependent_changes[1])
        assert change_is_parent_of(dependent_changes[1], dependent_changes[0])
        assert not change_is_parent_of(dependent_changes[3], dependent_changes[0])
        assert change_is_parent_of(dependent_changes[0], dependent_changes[3])
        assert not change_is_parent_of(dependent_changes[1], dependent_changes[3])
        assert not change_is_parent_of(dependent_changes[3], dependent_changes[1])

    def test_change_without_parent(self):
        root = new_change("p1", "refs/changes/01/1/1", "c1", parent_commit=None)
        other = new_change("p1", "refs/changes/02/2/1", "c2", parent_commit=None)
        assert not change_is_parent_of(root, other)

    def test_patch_identifier(self):
        change = new_change("p1", "refs/changes/62/69362/30", "c1")
        assert patch_identifier(change) == "62/69362/30"

    def test_assemble(self):
        groups = {
            "a": [new_change("a", "refs/changes/01/1/1", "c1")],
            "b": [],
            "c": [
                new_change("c", "refs/changes/02/2/1", "c2"),
                new_change("c", "refs/changes/03/3/7", "c3"),
            ],
        }
        assert assemble(groups) == "a:01/1/1,b,c:02/2/1:03/3/7"

    def test_assemble_empty(self):
        assert assemble({}) == ""
