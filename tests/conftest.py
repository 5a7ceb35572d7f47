"""
Shared fixtures for the deepset test suite.

Provides value samples mirroring the element domains DeepSet is meant to
handle, and a deliberately weak hash provider for forcing bucket collisions.
"""

import copy
import operator
from typing import Any, Callable, List

import pytest

from deepset import DeepSet

from sample_values import SAMPLE_VALUES, mod10


@pytest.fixture(params=sorted(SAMPLE_VALUES))
def sample(request) -> List[Any]:
    """Independent copy of one domain's sample values."""
    return copy.deepcopy(SAMPLE_VALUES[request.param])


@pytest.fixture
def colliding_set() -> Callable[..., DeepSet]:
    """Factory for int sets whose hash only keeps the last decimal digit."""
    def make(*values: int) -> DeepSet:
        return DeepSet(values, hasher=mod10, equals=operator.eq)
    return make
