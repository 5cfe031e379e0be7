"""Gerrit change records and the readers that produce them."""

from multipatch.gerrit.loader import load_changes, parse_changes
from multipatch.gerrit.models import REF_CHANGES_PREFIX, Change, ChangeStatus

__all__ = [
    "REF_CHANGES_PREFIX",
    "Change",
    "ChangeStatus",
    "load_changes",
    "parse_changes",
]
