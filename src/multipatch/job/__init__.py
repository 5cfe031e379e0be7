"""CI job parameter builders."""

from multipatch.job.multipatch import MultipatchJob, change_is_parent_of

__all__ = ["MultipatchJob", "change_is_parent_of"]
