"""Core building blocks: known projects, results, dependency sorting."""

from multipatch.core.dependency_sorter import ParentFunction, sort_dependencies
from multipatch.core.projects import Projects
from multipatch.core.result import ResultWithWarnings

__all__ = [
    "ParentFunction",
    "Projects",
    "ResultWithWarnings",
    "sort_dependencies",
]
