"""Stable ordering of items that form parent/child chains.

The relation between items is supplied as a two-argument predicate,
``is_parent_of(a, b)``, which is true when ``a`` is the direct predecessor
of ``b``. Items are expected to form disjoint linear chains: every item has
at most one parent and at most one child among the items being sorted.

Sorting is insertion based. Whenever an item's parent sits later in the
list, the item is moved to immediately after its parent. Passes repeat until
nothing moves, so unrelated items keep their relative order and sorting an
already sorted list changes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableSequence
from typing import TypeVar

from multipatch.errors import DependencyCycleError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ParentFunction = Callable[[T, T], bool]

__all__ = ["ParentFunction", "sort_dependencies"]


def _find_parent_after(
    items: MutableSequence[T],
    index: int,
    is_parent_of: ParentFunction[T],
) -> int | None:
    """Return the index of the parent of ``items[index]`` if it comes later."""
    child = items[index]
    for candidate_index in range(index + 1, len(items)):
        if is_parent_of(items[candidate_index], child):
            return candidate_index
    return None


def sort_dependencies(items: MutableSequence[T], is_parent_of: ParentFunction[T]) -> None:
    """Reorder ``items`` in place so every parent precedes its children.

    Args:
        items: Items to reorder. The result is always a permutation of the
            input.
        is_parent_of: Predicate returning True when its first argument is
            the direct parent of its second argument.

    Raises:
        DependencyCycleError: If the relation contains a cycle. Disjoint
            chains never need more than ``len(items) ** 2`` moves, so
            exceeding that bound means the input was cyclic.
    """
    max_moves = len(items) ** 2
    moves = 0
    moved = True
    while moved:
        moved = False
        index = 0
        while index < len(items):
            parent_index = _find_parent_after(items, index, is_parent_of)
            if parent_index is None:
                index += 1
                continue
            moves += 1
            if moves > max_moves:
                raise DependencyCycleError(
                    f"Parent relation between {len(items)} items contains a cycle"
                )
            child = items.pop(index)
            # the parent shifted one to the left when the child was popped
            items.insert(parent_index, child)
            logger.debug("Moved %r after its parent %r", child, items[parent_index - 1])
            moved = True
            # a different item now occupies ``index``; examine it next
