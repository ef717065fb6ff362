"""
Shared fixtures for the resonance engine tests.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import pytest

from adaptive_resonance import (
    FuzzyKernel,
    FuzzyParameters,
    ResonanceEngine,
    ResonanceKernel,
    ResonanceParameters,
    match_result,
)


@dataclass(frozen=True)
class ScriptedWeight:
    """Weight whose activation and verdict are fixed up front."""
    activation: float
    accept: bool = True
    dimension: int = 2
    fail: bool = False


class ScriptedKernel(ResonanceKernel):
    """Kernel that replays ScriptedWeight values, for search-order tests."""

    parameters_type = ResonanceParameters

    def __init__(self, on_activation: Optional[Callable[[], None]] = None):
        self.on_activation = on_activation

    def activation(self, x, weight, params):
        if self.on_activation is not None:
            self.on_activation()
        if weight.fail:
            raise RuntimeError("scripted failure")
        return weight.activation

    def vigilance(self, x, weight, params):
        return match_result(1.0 if weight.accept else 0.0, params.vigilance)

    def update(self, x, weight, params):
        return weight

    def initial_weight(self, x, params):
        return ScriptedWeight(activation=0.0, dimension=int(x.shape[0]))


@pytest.fixture
def fuzzy_params():
    return FuzzyParameters(vigilance=0.75, parallelism_level=2)


@pytest.fixture
def fuzzy_engine(fuzzy_params):
    engine = ResonanceEngine(FuzzyKernel(), fuzzy_params)
    yield engine
    engine.close()


@pytest.fixture
def parallel_engine():
    """Fuzzy engine that scans in parallel from the first category on."""
    params = FuzzyParameters(
        vigilance=0.9,
        parallelism_level=4,
        parallel_threshold=0,
        leaf_size=3,
    )
    engine = ResonanceEngine(FuzzyKernel(), params)
    yield engine
    engine.close()


@pytest.fixture
def random_patterns():
    rng = np.random.default_rng(7)
    return [rng.random(4) for _ in range(200)]
