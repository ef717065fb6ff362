"""
Error Taxonomy

Every failure of a learn/predict call surfaces as one of these. None of them
is retried inside the engine.
"""

from typing import Optional


class ResonanceError(Exception):
    """Base class for all resonance engine errors."""


class InvalidArgumentError(ResonanceError, ValueError):
    """Absent or malformed input, or parameters of the wrong kernel type."""


class DimensionMismatchError(ResonanceError, ValueError):
    """Pattern and category weight disagree on dimension."""

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message or f"Dimension mismatch: expected {expected}, got {actual}"
        )


class CapacityExceededError(ResonanceError, RuntimeError):
    """Category count is already at the configured maximum."""

    def __init__(self, current: int, maximum: int):
        self.current = current
        self.maximum = maximum
        super().__init__(
            f"Maximum categories reached: {current} of {maximum}"
        )


class IllegalStateError(ResonanceError, RuntimeError):
    """Operation attempted on a closed engine or a store cleared mid-use."""
