"""
Pytest configuration and shared fixtures.
"""

from typing import Iterable

import numpy as np
import pytest

from popsim.core.parameters import SimulationParameters


class ScriptedRandom:
    """Random source returning a fixed sequence, then ``default`` forever.

    Exposes the single ``random()`` method the dynamics draw from.
    Per tick the draw order is: war count, birth jitter, death jitter.
    """

    def __init__(self, values: Iterable[float] = (), default: float = 0.5) -> None:
        self._values = list(values)
        self.default = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self._values:
            return self._values.pop(0)
        return self.default


@pytest.fixture
def params():
    """Default simulation parameters."""
    return SimulationParameters()


@pytest.fixture
def scripted():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
