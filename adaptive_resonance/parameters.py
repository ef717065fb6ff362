"""
Resonance Parameters

Engine-level configuration shared by every kernel, plus one subclass per
reference kernel. All parameter objects are frozen; derive variants with
`replace()` or `with_vigilance()`.
"""

from __future__ import annotations
from typing import Optional
from dataclasses import dataclass, replace as _replace

from .constants import (
    DEFAULT_VIGILANCE,
    DEFAULT_PARALLEL_THRESHOLD,
    DEFAULT_LEAF_SIZE,
    DEFAULT_PARALLELISM_LEVEL,
    DEFAULT_MAX_CACHE_SIZE,
    DEFAULT_MEMORY_OPTIMIZATION_THRESHOLD,
    DEFAULT_ALPHA,
    DEFAULT_LEARNING_RATE,
    DEFAULT_CHOICE_L,
    DEFAULT_RADIUS,
    DEFAULT_MAX_RADIUS,
)
from .errors import InvalidArgumentError


# =============================================================================
# SECTION 1: Engine Parameters
# =============================================================================

@dataclass(frozen=True)
class ResonanceParameters:
    """Configuration consumed by the search engine and the learning step."""
    vigilance: float = DEFAULT_VIGILANCE

    # Parallel scan
    parallelism_level: int = DEFAULT_PARALLELISM_LEVEL   # Worker pool size
    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD # Go parallel above this
    leaf_size: int = DEFAULT_LEAF_SIZE                   # Sequential leaf size

    # Conversion cache
    enable_cache: bool = True
    max_cache_size: int = DEFAULT_MAX_CACHE_SIZE
    memory_optimization_threshold: float = DEFAULT_MEMORY_OPTIMIZATION_THRESHOLD

    # Capacity (None = unbounded)
    max_categories: Optional[int] = None

    def __post_init__(self):
        """Validate configuration."""
        if not (0.0 <= self.vigilance <= 1.0):
            raise InvalidArgumentError(
                f"Vigilance must satisfy 0 ≤ ρ ≤ 1, got {self.vigilance}"
            )
        if self.parallelism_level < 1:
            raise InvalidArgumentError("parallelism_level must be >= 1")
        if self.parallel_threshold < 0:
            raise InvalidArgumentError("parallel_threshold must be >= 0")
        if self.leaf_size < 1:
            raise InvalidArgumentError("leaf_size must be >= 1")
        if self.max_cache_size < 0:
            raise InvalidArgumentError("max_cache_size must be >= 0")
        if not (0.0 < self.memory_optimization_threshold <= 1.0):
            raise InvalidArgumentError(
                "memory_optimization_threshold must satisfy 0 < t ≤ 1"
            )
        if self.max_categories is not None and self.max_categories < 1:
            raise InvalidArgumentError("max_categories must be >= 1 or None")

    def replace(self, **changes) -> ResonanceParameters:
        """Return a copy with the given fields changed (revalidated)."""
        return _replace(self, **changes)

    def with_vigilance(self, vigilance: float) -> ResonanceParameters:
        return self.replace(vigilance=vigilance)


# =============================================================================
# SECTION 2: Kernel Parameters
# =============================================================================

@dataclass(frozen=True)
class FuzzyParameters(ResonanceParameters):
    """FuzzyART: choice parameter α > 0 and learning rate β ∈ (0, 1]."""
    alpha: float = DEFAULT_ALPHA
    learning_rate: float = DEFAULT_LEARNING_RATE

    def __post_init__(self):
        super().__post_init__()
        if self.alpha <= 0.0:
            raise InvalidArgumentError(f"alpha must be > 0, got {self.alpha}")
        if not (0.0 < self.learning_rate <= 1.0):
            raise InvalidArgumentError(
                f"learning_rate must satisfy 0 < β ≤ 1, got {self.learning_rate}"
            )


@dataclass(frozen=True)
class BinaryParameters(ResonanceParameters):
    """ART1: choice parameter L > 1."""
    choice_l: float = DEFAULT_CHOICE_L

    def __post_init__(self):
        super().__post_init__()
        if self.choice_l <= 1.0:
            raise InvalidArgumentError(f"choice_l must be > 1, got {self.choice_l}")


@dataclass(frozen=True)
class HypersphereParameters(ResonanceParameters):
    """HypersphereART: initial radius and radius ceiling."""
    default_radius: float = DEFAULT_RADIUS
    max_radius: float = DEFAULT_MAX_RADIUS

    def __post_init__(self):
        super().__post_init__()
        if self.default_radius < 0.0:
            raise InvalidArgumentError("default_radius must be >= 0")
        if self.max_radius < self.default_radius:
            raise InvalidArgumentError("max_radius must be >= default_radius")
