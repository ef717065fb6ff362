"""
Resonance Kernel: The Numeric Contract Behind Every ART Variant

Each ART variant (binary, fuzzy, hypersphere, ...) differs only in how a
category's match strength, acceptance and learning are computed. The kernel
captures exactly that; everything else lives in the shared engine.

================================================================================
ARCHITECTURAL ROLE
================================================================================

┌─────────────────────────────────────────────────────────────────────────────┐
│  engine            - Learning step: create / update / predict              │
├─────────────────────────────────────────────────────────────────────────────┤
│  search            - Sequential + divide-and-conquer parallel scan         │
├─────────────────────────────────────────────────────────────────────────────┤
│  kernel            - activation, vigilance, update, initial_weight         │
├─────────────────────────────────────────────────────────────────────────────┤
│  pattern / weight  - Immutable values                                      │
└─────────────────────────────────────────────────────────────────────────────┘

================================================================================
CONTRACT
================================================================================

- convert: Pattern → ndarray (fast-path input, cached by content hash)
- activation: x × Weight × Params → float (relative ordering only)
- vigilance: x × Weight × Params → Accepted | Rejected
- update: x × Weight × Params → Weight (new value, never in place)
- initial_weight: x × Params → Weight

All four operations are pure. A dimension disagreement raises
DimensionMismatchError; nothing is truncated or padded.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Protocol, Type, runtime_checkable

import numpy as np

from .constants import DEFAULT_INITIAL_ACTIVATION
from .errors import DimensionMismatchError, InvalidArgumentError
from .parameters import ResonanceParameters
from .pattern import Pattern
from .results import MatchResult


@runtime_checkable
class Weight(Protocol):
    """A category representation. `dimension` is the pattern dimension it accepts."""

    @property
    def dimension(self) -> int:
        ...


def require_dimension(expected: int, actual: int) -> None:
    """Raise DimensionMismatchError unless expected == actual."""
    if expected != actual:
        raise DimensionMismatchError(expected, actual)


def frozen_array(values: Any, dtype=np.float64) -> np.ndarray:
    """Copy values into a read-only array."""
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


class ResonanceKernel(ABC):
    """
    Pluggable per-algorithm math.

    Subclasses set `parameters_type` and implement the four operations. The
    input `x` they receive is whatever `convert()` produced for the pattern.
    """

    parameters_type: Type[ResonanceParameters] = ResonanceParameters
    initial_activation: float = DEFAULT_INITIAL_ACTIVATION

    @property
    def name(self) -> str:
        return type(self).__name__

    def validate_parameters(self, params: Any) -> None:
        """Reject absent parameters or parameters meant for another kernel."""
        if params is None:
            raise InvalidArgumentError("Parameters cannot be None")
        if not isinstance(params, self.parameters_type):
            raise InvalidArgumentError(
                f"{self.name} requires {self.parameters_type.__name__}, "
                f"got {type(params).__name__}"
            )

    def convert(self, pattern: Pattern) -> np.ndarray:
        """
        Fast-path representation of a pattern.

        Must depend only on the pattern's content: results are cached by
        `pattern.content_hash` and shared across calls.
        """
        return pattern.values

    def input_dimension(self, x: np.ndarray) -> int:
        """Pattern dimension recovered from a converted input."""
        return int(x.shape[0])

    # -------------------------------------------------------------------------
    # Resonance Operations (Pure Functions)
    # -------------------------------------------------------------------------

    @abstractmethod
    def activation(self, x: np.ndarray, weight: Weight, params: ResonanceParameters) -> float:
        """Choice value: higher means more preferred."""

    @abstractmethod
    def vigilance(self, x: np.ndarray, weight: Weight, params: ResonanceParameters) -> MatchResult:
        """Accepted if the category's match score meets the threshold."""

    @abstractmethod
    def update(self, x: np.ndarray, weight: Weight, params: ResonanceParameters) -> Weight:
        """Learning rule: new weight after resonating with x."""

    @abstractmethod
    def initial_weight(self, x: np.ndarray, params: ResonanceParameters) -> Weight:
        """Category representation built from x alone."""

    def __repr__(self) -> str:
        return f"{self.name}()"
