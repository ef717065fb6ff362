"""
Pattern - Immutable Input Vector

A Pattern is the unit of input to every resonance engine:
- fixed dimension d ≥ 1
- finite real values, stored as a read-only float64 array
- content-addressed: identity = SHA1(dtype, shape, bytes)

Usage:
    p = Pattern.of(1.0, 0.0, 1.0, 0.0)
    q = Pattern(np.array([0.2, 0.8]))

    p.dimension      # 4
    p.content_hash   # stable key used by the conversion cache
"""

from __future__ import annotations
from typing import Iterator, Sequence, Union
from dataclasses import dataclass, field
import hashlib

import numpy as np

from .errors import InvalidArgumentError


@dataclass(frozen=True, eq=False)
class Pattern:
    """
    Immutable fixed-length real-valued vector.

    Equality and hashing are by content, so two Patterns built from the same
    numbers are interchangeable (and share a conversion cache entry).
    """
    values: np.ndarray
    content_hash: str = field(init=False, repr=False)

    def __post_init__(self):
        """Validate and freeze the underlying array."""
        if self.values is None:
            raise InvalidArgumentError("Pattern values cannot be None")
        try:
            arr = np.array(self.values, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Pattern values must be numeric: {e}") from e

        if arr.ndim != 1:
            raise InvalidArgumentError(f"Pattern must be 1-D, got {arr.ndim}-D")
        if arr.size < 1:
            raise InvalidArgumentError("Pattern dimension must be >= 1")
        if not np.all(np.isfinite(arr)):
            raise InvalidArgumentError("Pattern values must be finite")

        arr.setflags(write=False)
        object.__setattr__(self, 'values', arr)

        header = f"{arr.dtype.str}:{arr.shape[0]}:".encode()
        digest = hashlib.sha1(header + arr.tobytes()).hexdigest()
        object.__setattr__(self, 'content_hash', digest)

    @classmethod
    def of(cls, *values: float) -> Pattern:
        """Create a Pattern from positional values."""
        return cls(np.array(values, dtype=np.float64))

    @classmethod
    def coerce(cls, data: Union[Pattern, Sequence[float], np.ndarray]) -> Pattern:
        """Return data as a Pattern, wrapping raw sequences."""
        if isinstance(data, Pattern):
            return data
        if data is None:
            raise InvalidArgumentError("Pattern cannot be None")
        return cls(data)

    @property
    def dimension(self) -> int:
        return int(self.values.shape[0])

    def __len__(self) -> int:
        return self.dimension

    def __getitem__(self, index):
        return self.values[index]

    def __iter__(self) -> Iterator[float]:
        return iter(self.values.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.content_hash == other.content_hash

    def __hash__(self) -> int:
        return hash(self.content_hash)

    def __repr__(self) -> str:
        shown = ", ".join(f"{v:g}" for v in self.values[:8])
        more = ", ..." if self.dimension > 8 else ""
        return f"Pattern([{shown}{more}], d={self.dimension})"
