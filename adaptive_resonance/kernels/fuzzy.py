"""
FuzzyART Kernel

Inputs are complement coded inside `convert` (I = [x, 1 - x]), so the cached
representation is the 2d-length coded array.

    choice:     T_j = |I ∧ w_j| / (α + |w_j|)
    match:      M_j = |I ∧ w_j| / |I|          accepted iff M_j ≥ ρ
    learning:   w_j' = β (I ∧ w_j) + (1 - β) w_j
    new:        w = I

where ∧ is the element-wise minimum and |·| the L1 norm.
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidArgumentError
from ..kernel import ResonanceKernel, frozen_array, require_dimension
from ..parameters import FuzzyParameters
from ..pattern import Pattern
from ..results import MatchResult, match_result


def complement_code(values: np.ndarray, dtype=np.float64) -> np.ndarray:
    """[x, 1 - x] for x ∈ [0, 1]^d."""
    if np.any(values < 0.0) or np.any(values > 1.0):
        raise InvalidArgumentError("Fuzzy inputs must lie in [0, 1]")
    coded = np.concatenate([values, 1.0 - values]).astype(dtype)
    coded.setflags(write=False)
    return coded


@dataclass(frozen=True)
class FuzzyWeight:
    """Complement-coded category prototype (length 2d, non-negative)."""
    weights: np.ndarray
    update_count: int = 0

    def __post_init__(self):
        arr = frozen_array(self.weights)
        if arr.ndim != 1 or arr.shape[0] % 2 != 0:
            raise InvalidArgumentError("FuzzyWeight must have even length for complement coding")
        if np.any(arr < 0.0):
            raise InvalidArgumentError("FuzzyWeight entries must be non-negative")
        object.__setattr__(self, 'weights', arr)

    @property
    def dimension(self) -> int:
        return self.weights.shape[0] // 2

    @property
    def lower(self) -> np.ndarray:
        """Lower corner of the category box."""
        return self.weights[:self.dimension]

    @property
    def upper(self) -> np.ndarray:
        """Upper corner of the category box."""
        return 1.0 - self.weights[self.dimension:]


class FuzzyKernel(ResonanceKernel):
    """FuzzyART resonance kernel."""

    parameters_type = FuzzyParameters

    def __init__(self, dtype=np.float64):
        """
        Args:
            dtype: Precision of the cached coded input (e.g. np.float32 for a
                   reduced-precision fast path). Weights stay float64.
        """
        self.dtype = np.dtype(dtype)

    def convert(self, pattern: Pattern) -> np.ndarray:
        return complement_code(pattern.values, self.dtype)

    def input_dimension(self, x: np.ndarray) -> int:
        return int(x.shape[0]) // 2

    def _intersection(self, x: np.ndarray, weight: FuzzyWeight) -> float:
        require_dimension(weight.dimension, self.input_dimension(x))
        return float(np.minimum(x, weight.weights).sum())

    def activation(self, x: np.ndarray, weight: FuzzyWeight, params: FuzzyParameters) -> float:
        overlap = self._intersection(x, weight)
        return overlap / (params.alpha + float(weight.weights.sum()))

    def vigilance(self, x: np.ndarray, weight: FuzzyWeight, params: FuzzyParameters) -> MatchResult:
        overlap = self._intersection(x, weight)
        # |I| = d for complement-coded input
        score = overlap / float(x.sum())
        return match_result(score, params.vigilance)

    def update(self, x: np.ndarray, weight: FuzzyWeight, params: FuzzyParameters) -> FuzzyWeight:
        require_dimension(weight.dimension, self.input_dimension(x))
        beta = params.learning_rate
        fuzzy_min = np.minimum(x, weight.weights)
        new_weights = beta * fuzzy_min + (1.0 - beta) * weight.weights
        return FuzzyWeight(new_weights, weight.update_count + 1)

    def initial_weight(self, x: np.ndarray, params: FuzzyParameters) -> FuzzyWeight:
        return FuzzyWeight(np.array(x, dtype=np.float64))

    def __repr__(self) -> str:
        return f"FuzzyKernel(dtype={self.dtype.name})"
