from __future__ import annotations

from typing import Callable

import pytest

from multipatch.gerrit.models import Change
from tests.utils import change_info, new_change


@pytest.fixture()
def make_change() -> Callable[..., Change]:
    return new_change


@pytest.fixture()
def make_change_info() -> Callable[..., dict]:
    return change_info
