"""Multipatch - build-ordering directives for multi-project Gerrit topics.

Turns a set of pending Gerrit changes into the ``PATCHES_TO_BUILD``
parameter of an integration-multipatch-test job.
"""

from __future__ import annotations

import logging

from multipatch.core.projects import Projects
from multipatch.core.result import ResultWithWarnings
from multipatch.errors import BotError
from multipatch.job.multipatch import MultipatchJob

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BotError",
    "MultipatchJob",
    "Projects",
    "ResultWithWarnings",
    "__version__",
]
