"""Shared fixtures for the test suite."""

import numpy as np
import pytest


class ConstantRandom:
    """Stand-in for numpy.random.Generator that always returns one value.

    Lets tests force a particular branch of a stochastic method.
    """

    def __init__(self, value: float):
        self.value = value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value, dtype=np.float64)


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
