"""
ART1 Kernel (binary patterns)

    choice:     T_j = |I ∧ w_j| / (L - 1 + |w_j|)
    match:      M_j = |I ∧ w_j| / |I|     (1.0 for an all-zero input)
    learning:   w_j' = I ∧ w_j            (fast learning)
    new:        w = I
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidArgumentError
from ..kernel import ResonanceKernel, frozen_array, require_dimension
from ..parameters import BinaryParameters
from ..pattern import Pattern
from ..results import MatchResult, match_result


@dataclass(frozen=True)
class BinaryWeight:
    """Binary category prototype."""
    bits: np.ndarray
    update_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'bits', frozen_array(self.bits, dtype=np.bool_))

    @property
    def dimension(self) -> int:
        return int(self.bits.shape[0])

    @property
    def norm(self) -> int:
        return int(self.bits.sum())


class BinaryKernel(ResonanceKernel):
    """ART1 resonance kernel."""

    parameters_type = BinaryParameters

    def convert(self, pattern: Pattern) -> np.ndarray:
        values = pattern.values
        if not np.all((values == 0.0) | (values == 1.0)):
            raise InvalidArgumentError("ART1 inputs must be binary (0 or 1)")
        bits = values.astype(np.bool_)
        bits.setflags(write=False)
        return bits

    def _overlap(self, x: np.ndarray, weight: BinaryWeight) -> int:
        require_dimension(weight.dimension, x.shape[0])
        return int(np.logical_and(x, weight.bits).sum())

    def activation(self, x: np.ndarray, weight: BinaryWeight, params: BinaryParameters) -> float:
        return self._overlap(x, weight) / (params.choice_l - 1.0 + weight.norm)

    def vigilance(self, x: np.ndarray, weight: BinaryWeight, params: BinaryParameters) -> MatchResult:
        overlap = self._overlap(x, weight)
        norm = int(x.sum())
        score = 1.0 if norm == 0 else overlap / norm
        return match_result(score, params.vigilance)

    def update(self, x: np.ndarray, weight: BinaryWeight, params: BinaryParameters) -> BinaryWeight:
        require_dimension(weight.dimension, x.shape[0])
        return BinaryWeight(np.logical_and(x, weight.bits), weight.update_count + 1)

    def initial_weight(self, x: np.ndarray, params: BinaryParameters) -> BinaryWeight:
        return BinaryWeight(x)
