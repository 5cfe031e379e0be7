"""Result value carrying human-readable warnings alongside it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResultWithWarnings:
    """A computed result plus the ordered warnings produced while computing it."""

    result: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "patches_to_build": self.result,
            "warnings": list(self.warnings),
        }
