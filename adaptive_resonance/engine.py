"""
ResonanceEngine: The Shared ART Learning Step
==============================================

One generic engine drives every ART variant; the variant is the injected
ResonanceKernel.

Learning step (state machine):

    ┌─────────┐  store empty   ┌────────────────────────────────┐
    │  learn  │──────────────▶│ create: initial_weight, append │──▶ Success(new)
    └────┬────┘                └────────────────────────────────┘
         │ store non-empty                 ▲
         ▼                                 │ NoMatch
    ┌──────────┐   Success    ┌──────────────────────────┐
    │ Scanning │────────────▶│ update: replace at index  │──▶ Success(index)
    └──────────┘              └──────────────────────────┘

    predict: same scan, never updates, never appends; NoMatch stays NoMatch.

Concurrency:
- Searches read an immutable store snapshot and run without locks.
- Every write (update-in-place or create) happens inside the store lock.
  A create first rescans categories appended after the snapshot, so two
  learners that both missed cannot create duplicate categories.
- An update whose winner was replaced since the snapshot re-checks vigilance
  against the current weight and rescans if it no longer resonates.
- A snapshot from before clear() is rejected with IllegalStateError.

Usage:
    with ResonanceEngine(FuzzyKernel(), FuzzyParameters(vigilance=0.75)) as art:
        art.learn([1, 0, 1, 0])        # Success(0, ..., created=True)
        art.learn([1, 0, 1, 0])        # Success(0, ...)
        art.learn([0, 1, 0, 1])        # Success(1, ..., created=True)
        art.predict([1, 0, 1, 0])      # Success(0, ...)
"""

from __future__ import annotations
from typing import Any, Iterable, List, Optional
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager
import logging
import threading
import time

import numpy as np

from .cache import ConversionCache
from .errors import IllegalStateError, InvalidArgumentError
from .kernel import ResonanceKernel, require_dimension
from .parameters import ResonanceParameters
from .pattern import Pattern
from .results import ActivationResult, NO_MATCH, Success
from .search import ResonanceSearch, SearchOutcome
from .store import CategoryStore, StoreSnapshot
from .telemetry import PerformanceSnapshot, PerformanceTracker

logger = logging.getLogger(__name__)


class ResonanceEngine:
    """
    Generic resonance-search-and-learning engine.

    Args:
        kernel: The ART variant's math
        parameters: Default parameters (kernel.parameters_type() if None)
        executor: Shared worker pool. If None the engine creates one with
                  `parameters.parallelism_level` workers and shuts it down
                  on close().
    """

    def __init__(self,
                 kernel: ResonanceKernel,
                 parameters: Optional[ResonanceParameters] = None,
                 executor: Optional[Executor] = None):
        if not isinstance(kernel, ResonanceKernel):
            raise InvalidArgumentError(
                f"kernel must be a ResonanceKernel, got {type(kernel).__name__}"
            )
        params = parameters if parameters is not None else kernel.parameters_type()
        kernel.validate_parameters(params)

        self.kernel = kernel
        self.parameters = params

        self._owns_executor = executor is None
        if executor is None:
            executor = ThreadPoolExecutor(
                max_workers=params.parallelism_level,
                thread_name_prefix="resonance",
            )
        self._executor = executor

        self._store = CategoryStore()
        self._cache = ConversionCache(params.max_cache_size)
        self._search = ResonanceSearch(kernel, executor)
        self._tracker = PerformanceTracker()

        self._state_lock = threading.Lock()
        self._active_calls = 0
        self._closed = False

        logger.info("Initialized ResonanceEngine with %s, %d parallel threads (%s pool)",
                    kernel.name, params.parallelism_level,
                    "owned" if self._owns_executor else "shared")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def _operation(self):
        """Track an in-flight call; reject it if the engine is closed."""
        with self._state_lock:
            if self._closed:
                raise IllegalStateError("ResonanceEngine is closed")
            self._active_calls += 1
        try:
            yield
        finally:
            with self._state_lock:
                self._active_calls -= 1

    def close(self) -> None:
        """Release the owned worker pool and the conversion cache."""
        with self._state_lock:
            if self._closed:
                return
            if self._active_calls:
                raise IllegalStateError(
                    f"Cannot close with {self._active_calls} call(s) in flight"
                )
            self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=True)
        self._cache.clear()
        logger.info("ResonanceEngine closed and resources cleaned up")

    def __enter__(self) -> ResonanceEngine:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def _resolve(self, pattern: Any, params: Optional[ResonanceParameters]):
        if pattern is None:
            raise InvalidArgumentError("Pattern cannot be None")
        pattern = Pattern.coerce(pattern)
        params = self.parameters if params is None else params
        self.kernel.validate_parameters(params)
        return pattern, params

    def _convert(self, pattern: Pattern, params: ResonanceParameters) -> np.ndarray:
        if params.enable_cache:
            return self._cache.get_or_insert(pattern, self.kernel.convert)
        return self.kernel.convert(pattern)

    def _check_dimension(self, x: np.ndarray, snapshot: StoreSnapshot) -> None:
        if len(snapshot):
            require_dimension(snapshot[0].dimension, self.kernel.input_dimension(x))

    def _check_generation(self, snapshot: StoreSnapshot) -> None:
        if self._store.generation != snapshot.generation:
            raise IllegalStateError("Category store was cleared during the search")

    def _record(self, outcome: SearchOutcome) -> None:
        self._tracker.record_scan(
            activations=outcome.activations,
            matches=outcome.matches,
            vector_ops=outcome.vector_ops,
            parallel_tasks=outcome.parallel_tasks,
        )

    # -------------------------------------------------------------------------
    # Learning Step
    # -------------------------------------------------------------------------

    def learn(self, pattern: Any, params: Optional[ResonanceParameters] = None) -> ActivationResult:
        """
        Present a pattern for learning.

        Returns:
            Success(index, activation, weight): the updated category, or a
            new one (created=True) when nothing resonated.

        Raises:
            InvalidArgumentError: pattern or params invalid
            DimensionMismatchError: pattern dimension differs from the store's
            CapacityExceededError: a new category would exceed max_categories
            IllegalStateError: engine closed, or store cleared mid-call
        """
        started = time.perf_counter()
        with self._operation():
            try:
                pattern, params = self._resolve(pattern, params)
                return self._learn(pattern, params)
            finally:
                self._tracker.record_call(True, (time.perf_counter() - started) * 1000.0)

    def _learn(self, pattern: Pattern, params: ResonanceParameters) -> Success:
        x = self._convert(pattern, params)
        snapshot = self._store.snapshot()
        self._check_dimension(x, snapshot)

        if not len(snapshot):
            return self._create(x, params, snapshot)

        outcome = self._search.search(x, snapshot, params, learn=True)
        self._record(outcome)
        if isinstance(outcome.result, Success):
            return self._commit_update(x, params, snapshot, outcome.result)
        return self._create(x, params, snapshot)

    def _commit_update(self, x: np.ndarray, params: ResonanceParameters,
                       snapshot: StoreSnapshot, result: Success) -> Success:
        """
        Replace the winner's weight.

        If a writer replaced it after the snapshot, the current weight is
        re-checked against vigilance. Accepted: the update is re-derived from
        it. Rejected: the whole store is rescanned under the lock.
        """
        index = result.category_index
        weight = result.weight
        activation = result.activation_value
        with self._store.lock:
            self._check_generation(snapshot)
            current = self._store.get(index)
            if current is not snapshot[index]:
                self._tracker.record_scan(matches=1)
                if not self.kernel.vigilance(x, current, params).accepted:
                    logger.debug("Category %d no longer resonates, rescanning", index)
                    return self._rescan_locked(x, params)
                activation = self.kernel.activation(x, current, params)
                weight = self.kernel.update(x, current, params)
                self._tracker.record_scan(activations=1, vector_ops=2)
            self._store.replace(index, weight)
            self._store.record_use(index)
        return Success(index, activation, weight)

    def _rescan_locked(self, x: np.ndarray, params: ResonanceParameters) -> Success:
        """Search the whole store while holding its lock; create on no match."""
        latest = self._store.snapshot()
        outcome = self._search.search(x, latest, params, learn=True)
        self._record(outcome)
        if isinstance(outcome.result, Success):
            return self._commit_update(x, params, latest, outcome.result)
        return self._append_locked(x, params)

    def _create(self, x: np.ndarray, params: ResonanceParameters,
                snapshot: StoreSnapshot) -> Success:
        """The single serialized no-match → new-category transition."""
        with self._store.lock:
            self._check_generation(snapshot)

            if len(self._store) > len(snapshot):
                # Categories appeared since our snapshot; one may already fit.
                latest = self._store.snapshot()
                self._check_dimension(x, latest)
                outcome = self._search.search(x, latest, params, learn=True,
                                              start=len(snapshot))
                self._record(outcome)
                if isinstance(outcome.result, Success):
                    logger.debug("Concurrent create resolved to category %d",
                                 outcome.result.category_index)
                    return self._commit_update(x, params, latest, outcome.result)

            return self._append_locked(x, params)

    def _append_locked(self, x: np.ndarray, params: ResonanceParameters) -> Success:
        weight = self.kernel.initial_weight(x, params)
        self._tracker.record_scan(vector_ops=1)
        index = self._store.append(weight, params.max_categories)
        logger.debug("Created category %d", index)
        return Success(index, self.kernel.initial_activation, weight, created=True)

    # -------------------------------------------------------------------------
    # Prediction (read-only)
    # -------------------------------------------------------------------------

    def predict(self, pattern: Any, params: Optional[ResonanceParameters] = None) -> ActivationResult:
        """Best resonating category without learning; NO_MATCH if none."""
        started = time.perf_counter()
        with self._operation():
            try:
                pattern, params = self._resolve(pattern, params)
                x = self._convert(pattern, params)
                snapshot = self._store.snapshot()
                self._check_dimension(x, snapshot)
                if not len(snapshot):
                    return NO_MATCH
                outcome = self._search.search(x, snapshot, params, learn=False)
                self._record(outcome)
                return outcome.result
            finally:
                self._tracker.record_call(False, (time.perf_counter() - started) * 1000.0)

    def activation_value(self, pattern: Any, index: int,
                         params: Optional[ResonanceParameters] = None) -> float:
        """Activation of a single category for a pattern."""
        with self._operation():
            pattern, params = self._resolve(pattern, params)
            weight = self._store.get(index)
            x = self._convert(pattern, params)
            require_dimension(weight.dimension, self.kernel.input_dimension(x))
            self._tracker.record_scan(activations=1, vector_ops=1)
            return self.kernel.activation(x, weight, params)

    # -------------------------------------------------------------------------
    # Batch Operations
    # -------------------------------------------------------------------------

    def learn_batch(self, patterns: Iterable[Any],
                    params: Optional[ResonanceParameters] = None,
                    epochs: int = 1) -> List[int]:
        """
        Learn patterns in order, `epochs` times over.

        Returns:
            Category index of each pattern in the final epoch
        """
        if epochs < 1:
            raise InvalidArgumentError("epochs must be >= 1")
        patterns = list(patterns)
        labels: List[int] = []
        for _ in range(epochs):
            labels = [self.learn(p, params).category_index for p in patterns]
        return labels

    def predict_batch(self, patterns: Iterable[Any],
                      params: Optional[ResonanceParameters] = None) -> List[Optional[int]]:
        """Predicted category index per pattern (None where nothing resonates)."""
        labels: List[Optional[int]] = []
        for p in patterns:
            result = self.predict(p, params)
            labels.append(result.category_index if isinstance(result, Success) else None)
        return labels

    # -------------------------------------------------------------------------
    # Category Access
    # -------------------------------------------------------------------------

    def category_count(self) -> int:
        return len(self._store)

    def get_category(self, index: int) -> Any:
        """Weight of the category at index (IndexError if out of range)."""
        return self._store.get(index)

    def get_categories(self) -> List[Any]:
        """Ordered weights, index i at position i."""
        return self._store.weights()

    def usage_count(self, index: int) -> int:
        return self._store.usage_count(index)

    def last_used(self, index: int) -> float:
        return self._store.last_used(index)

    @property
    def total_activations(self) -> int:
        """Creations plus resonances since the last clear()."""
        return self._store.total_activations

    def clear(self) -> None:
        """
        Remove every category. Only valid while the engine is idle.

        Raises:
            IllegalStateError: engine closed or calls in flight
        """
        with self._state_lock:
            if self._closed:
                raise IllegalStateError("ResonanceEngine is closed")
            if self._active_calls:
                raise IllegalStateError(
                    f"Cannot clear with {self._active_calls} call(s) in flight"
                )
            self._store.clear()

    # -------------------------------------------------------------------------
    # Performance Telemetry
    # -------------------------------------------------------------------------

    def performance_snapshot(self) -> PerformanceSnapshot:
        return self._tracker.snapshot(
            cache_size=self._cache.size(),
            category_count=len(self._store),
            cache_hits=self._cache.hits,
            cache_misses=self._cache.misses,
        )

    def reset_performance_tracking(self) -> None:
        """Zero all counters and empty the conversion cache."""
        self._tracker.reset()
        self._cache.clear()
        self._cache.reset_stats()
        logger.info("Performance tracking reset")

    def optimize_memory(self) -> bool:
        """Empty the conversion cache once it passes the fill threshold."""
        limit = self.parameters.memory_optimization_threshold * self._cache.max_size
        if self._cache.size() > limit:
            self._cache.clear()
            logger.info("Conversion cache cleared to optimize memory usage")
            return True
        return False

    def __repr__(self) -> str:
        snap = self._tracker
        return (f"ResonanceEngine(kernel={self.kernel.name}, categories={len(self._store)}, "
                f"vector_ops={snap.vector_ops}, parallel_tasks={snap.parallel_tasks}, "
                f"avg_compute_ms={snap.avg_compute_time_ms:.3f})")
