"""
Resonance Results

Tagged outcomes produced by kernels and the search engine:

- MatchResult:      Accepted(score, threshold) | Rejected(score, threshold)
- ActivationResult: Success(category_index, activation_value, weight) | NO_MATCH
"""

from __future__ import annotations
from typing import Any, Union
from dataclasses import dataclass


# =============================================================================
# SECTION 1: Vigilance Verdicts
# =============================================================================

@dataclass(frozen=True)
class Accepted:
    """Category passed the vigilance test."""
    score: float
    threshold: float

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Category failed the vigilance test."""
    score: float
    threshold: float

    @property
    def accepted(self) -> bool:
        return False


MatchResult = Union[Accepted, Rejected]


def match_result(score: float, threshold: float) -> MatchResult:
    """Verdict for score ≥ threshold."""
    if score >= threshold:
        return Accepted(score, threshold)
    return Rejected(score, threshold)


# =============================================================================
# SECTION 2: Activation Outcomes
# =============================================================================

@dataclass(frozen=True)
class Success:
    """
    A category resonated with the pattern.

    For learn() the weight is the category's weight after the step; for
    predict() it is the stored weight. `created` marks a category that did
    not exist before this step.
    """
    category_index: int
    activation_value: float
    weight: Any
    created: bool = False

    @property
    def matched(self) -> bool:
        return True


class _NoMatch:
    """No category resonated. Singleton: use NO_MATCH."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def matched(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoMatch"

    def __reduce__(self):
        return (_NoMatch, ())


NO_MATCH = _NoMatch()
NoMatch = _NoMatch

ActivationResult = Union[Success, _NoMatch]
