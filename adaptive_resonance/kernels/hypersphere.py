"""
HypersphereART Kernel

Each category is a ball (center c, radius r) in input space.

    choice:     T_j = 1 / (1 + ‖x - c_j‖)
    match:      r_j > 0:  M_j = max(0, 1 - ‖x - c_j‖ / r_j)
                r_j = 0:  M_j = 1 if ‖x - c_j‖ ≤ 1 - ρ else 0
    learning:   r_j' = min(max(r_j, ‖x - c_j‖), r_max)   (center fixed)
    new:        c = x, r = default_radius
"""

from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidArgumentError
from ..kernel import ResonanceKernel, frozen_array, require_dimension
from ..parameters import HypersphereParameters
from ..results import MatchResult, match_result


@dataclass(frozen=True)
class HypersphereWeight:
    center: np.ndarray
    radius: float = 0.0
    update_count: int = 0

    def __post_init__(self):
        if self.radius < 0.0:
            raise InvalidArgumentError("Hypersphere radius must be >= 0")
        object.__setattr__(self, 'center', frozen_array(self.center))

    @property
    def dimension(self) -> int:
        return int(self.center.shape[0])


class HypersphereKernel(ResonanceKernel):
    """HypersphereART resonance kernel."""

    parameters_type = HypersphereParameters

    def distance(self, x: np.ndarray, weight: HypersphereWeight) -> float:
        require_dimension(weight.dimension, x.shape[0])
        return float(np.linalg.norm(x - weight.center))

    def activation(self, x: np.ndarray, weight: HypersphereWeight,
                   params: HypersphereParameters) -> float:
        return 1.0 / (1.0 + self.distance(x, weight))

    def vigilance(self, x: np.ndarray, weight: HypersphereWeight,
                  params: HypersphereParameters) -> MatchResult:
        d = self.distance(x, weight)
        if weight.radius == 0.0:
            score = 1.0 if d <= 1.0 - params.vigilance else 0.0
        else:
            score = max(0.0, 1.0 - d / weight.radius)
        return match_result(score, params.vigilance)

    def update(self, x: np.ndarray, weight: HypersphereWeight,
               params: HypersphereParameters) -> HypersphereWeight:
        d = self.distance(x, weight)
        radius = min(max(weight.radius, d), params.max_radius)
        return HypersphereWeight(weight.center, radius, weight.update_count + 1)

    def initial_weight(self, x: np.ndarray, params: HypersphereParameters) -> HypersphereWeight:
        return HypersphereWeight(x, params.default_radius)
