"""Exception hierarchy for multipatch."""

from __future__ import annotations


class BotError(Exception):
    """Base class for all domain errors raised by multipatch."""


class ConfigError(BotError):
    """Raised when the known-projects configuration is missing or invalid."""


class ChangeParseError(BotError):
    """Raised when a Gerrit ChangeInfo payload cannot be turned into a Change."""


class DependencyCycleError(BotError):
    """Raised when the parent relation between items contains a cycle."""


class MalformedRevisionReferenceError(BotError):
    """Raised when a change's revision reference lacks the refs/changes/ prefix."""

    def __init__(self, change_label: str, reference: str) -> None:
        self.change_label = change_label
        self.reference = reference
        super().__init__(
            f"Change {change_label} has malformed revision reference "
            f"'{reference}' (expected it to start with 'refs/changes/')"
        )
