import os

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest


class ScriptedRng:
    """Stand-in generator that always picks index ``pick`` and draws ``draw``."""

    def __init__(self, pick=0, draw=0.0):
        self.pick = pick
        self.draw = draw
        self.integer_calls = 0
        self.random_calls = 0

    def integers(self, high):
        self.integer_calls += 1
        return min(self.pick, high - 1)

    def random(self, size=None):
        self.random_calls += 1
        if size is None:
            return self.draw
        return np.full(size, self.draw)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def scripted_rng():
    return ScriptedRng()
