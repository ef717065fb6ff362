"""
Category Store: Append-Only, Index-Addressed Category Weights
==============================================================

Design Principles:
1. Indices are dense 0..n-1 and equal to append order
2. Weights are immutable: an update replaces the value at its index
3. Snapshots are immutable tuples, consistent while the store keeps growing
4. One re-entrant lock serializes append / replace / clear

Generations:
    clear() is the only shrink path. Every clear() bumps `generation`, so a
    writer holding a snapshot from before the clear can tell its indices no
    longer refer to the same categories.

Usage:
    store = CategoryStore()
    idx = store.append(weight)          # single critical section
    snap = store.snapshot()             # point-in-time read
    with store.lock:
        if store.generation == snap.generation:
            store.replace(idx, new_weight)
"""

from __future__ import annotations
from typing import Any, Iterator, List, Optional, Tuple
from dataclasses import dataclass
import threading
import time

from .errors import CapacityExceededError


@dataclass(frozen=True)
class StoreSnapshot:
    """Ordered, immutable view of the store at one instant."""
    weights: Tuple[Any, ...]
    generation: int

    def __len__(self) -> int:
        return len(self.weights)

    def __getitem__(self, index):
        return self.weights[index]

    def __iter__(self) -> Iterator[Any]:
        return iter(self.weights)


class CategoryStore:
    """
    Ordered collection of category weights with usage statistics.

    `get` and `snapshot` are safe alongside writers. `clear` must only run
    while no search or write is in flight.
    """

    def __init__(self):
        self._weights: List[Any] = []
        self._usage: List[int] = []
        self._last_used: List[float] = []
        self._total_activations = 0
        self._generation = 0
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        """Write lock; hold it to combine a check with a write."""
        return self._lock

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._weights)

    def get(self, index: int) -> Any:
        """Weight at index (bounds-checked, no negative indexing)."""
        weights = self._weights
        if index < 0 or index >= len(weights):
            raise IndexError(
                f"Category index {index} out of bounds for {len(weights)} categories"
            )
        return weights[index]

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(tuple(self._weights), self._generation)

    def weights(self) -> List[Any]:
        """Copy of the ordered weights."""
        return list(self.snapshot().weights)

    # -------------------------------------------------------------------------
    # Writes (serialized)
    # -------------------------------------------------------------------------

    def append(self, weight: Any, max_categories: Optional[int] = None) -> int:
        """
        Add a category and return its index.

        Capacity check and append happen as one atomic unit.
        """
        with self._lock:
            n = len(self._weights)
            if max_categories is not None and n >= max_categories:
                raise CapacityExceededError(n, max_categories)
            self._weights.append(weight)
            self._usage.append(1)
            self._last_used.append(time.time())
            self._total_activations += 1
            return n

    def replace(self, index: int, weight: Any) -> None:
        """Swap the weight at index for a new value."""
        with self._lock:
            self.get(index)
            self._weights[index] = weight

    def record_use(self, index: int) -> None:
        """Count one resonance of the category at index."""
        with self._lock:
            self.get(index)
            self._usage[index] += 1
            self._last_used[index] = time.time()
            self._total_activations += 1

    def clear(self) -> None:
        with self._lock:
            self._weights = []
            self._usage = []
            self._last_used = []
            self._total_activations = 0
            self._generation += 1

    # -------------------------------------------------------------------------
    # Usage Statistics
    # -------------------------------------------------------------------------

    def usage_count(self, index: int) -> int:
        """Times the category was created or resonated with."""
        with self._lock:
            self.get(index)
            return self._usage[index]

    def last_used(self, index: int) -> float:
        """Unix timestamp of the category's last creation or resonance."""
        with self._lock:
            self.get(index)
            return self._last_used[index]

    @property
    def total_activations(self) -> int:
        return self._total_activations

    def __repr__(self) -> str:
        return f"CategoryStore(categories={len(self)}, generation={self._generation})"
