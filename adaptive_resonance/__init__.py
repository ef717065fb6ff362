"""
Adaptive Resonance - A Shared Engine for ART Clustering

One resonance-search-and-learning engine drives every Adaptive Resonance
Theory variant. Variants differ only in their kernel: how match strength,
acceptance and learning are computed.
"""

__version__ = "0.1.0"

from .errors import (
    ResonanceError,
    InvalidArgumentError,
    DimensionMismatchError,
    CapacityExceededError,
    IllegalStateError,
)
from .pattern import Pattern
from .results import Accepted, Rejected, Success, NoMatch, NO_MATCH, match_result
from .parameters import (
    ResonanceParameters,
    FuzzyParameters,
    BinaryParameters,
    HypersphereParameters,
)
from .kernel import ResonanceKernel, Weight
from .kernels import (
    FuzzyKernel,
    FuzzyWeight,
    BinaryKernel,
    BinaryWeight,
    HypersphereKernel,
    HypersphereWeight,
)
from .store import CategoryStore, StoreSnapshot
from .cache import ConversionCache
from .search import ResonanceSearch
from .telemetry import PerformanceSnapshot, PerformanceTracker
from .engine import ResonanceEngine

__all__ = [
    "ResonanceError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "CapacityExceededError",
    "IllegalStateError",
    "Pattern",
    "Accepted",
    "Rejected",
    "Success",
    "NoMatch",
    "NO_MATCH",
    "match_result",
    "ResonanceParameters",
    "FuzzyParameters",
    "BinaryParameters",
    "HypersphereParameters",
    "ResonanceKernel",
    "Weight",
    "FuzzyKernel",
    "FuzzyWeight",
    "BinaryKernel",
    "BinaryWeight",
    "HypersphereKernel",
    "HypersphereWeight",
    "CategoryStore",
    "StoreSnapshot",
    "ConversionCache",
    "ResonanceSearch",
    "PerformanceSnapshot",
    "PerformanceTracker",
    "ResonanceEngine",
]
