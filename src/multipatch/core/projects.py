"""Ordered set of known project names."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class Projects:
    """Immutable, ordered collection of known project names.

    The order given at construction time is the canonical order in which
    projects appear in a build directive. Duplicate names are dropped,
    keeping the first occurrence.
    """

    __slots__ = ("_names",)

    def __init__(self, *names: str) -> None:
        ordered: dict[str, None] = {}
        for name in names:
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"Invalid project name: {name!r}")
            ordered.setdefault(name.strip(), None)
        self._names: tuple[str, ...] = tuple(ordered)

    @classmethod
    def of(cls, names: Iterable[str]) -> Projects:
        return cls(*names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Projects):
            return NotImplemented
        return self._names == other._names

    def __hash__(self) -> int:
        return hash(self._names)

    def __repr__(self) -> str:
        return f"Projects{self._names!r}"
