"""
Resonance Search: Best Accepted Category Over a Store Snapshot
================================================================

Sequential scan (n ≤ parallel_threshold):

    best ← -∞
    for i in range(n):
        T_i = activation(x, w_i)
        if T_i > best and vigilance(x, w_i) is Accepted:   # lazy vigilance
            best ← T_i, winner ← i

Parallel scan (n > parallel_threshold):

    [0, n) ──split at midpoint──▶ [0, n/2) [n/2, n) ──▶ ... ──▶ leaves ≤ leaf_size
       leaves scanned concurrently on the worker pool
       partial results merged pairwise (divide and conquer)

Merge rule: keep the strictly greater activation; on a tie keep the left
(lower-index) side; a one-sided success wins; two misses stay a miss. The
rule is associative and order-preserving, so the selected index is the same
for any split and any pool size, and equals the sequential answer
(first-found-wins on ties).
"""

from __future__ import annotations
from typing import Any, List, Optional, Tuple
from concurrent.futures import Executor
from dataclasses import dataclass
import logging

import numpy as np

from .kernel import ResonanceKernel
from .parameters import ResonanceParameters
from .results import ActivationResult, NO_MATCH, Success

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 1: Partial Results
# =============================================================================

@dataclass(frozen=True)
class Candidate:
    """Best accepted category found in one index range."""
    index: int
    activation: float
    weight: Any


@dataclass(frozen=True)
class LeafResult:
    """Outcome of scanning one index range."""
    candidate: Optional[Candidate]
    activations: int
    matches: int


@dataclass(frozen=True)
class SearchOutcome:
    """Result of a search round plus the work it took (for telemetry)."""
    result: ActivationResult
    activations: int = 0
    matches: int = 0
    vector_ops: int = 0
    parallel_tasks: int = 0


def choose_best(left: Optional[Candidate], right: Optional[Candidate]) -> Optional[Candidate]:
    """Merge two partial results; `left` must cover the lower indices."""
    if left is None:
        return right
    if right is None:
        return left
    return right if right.activation > left.activation else left


def merge_results(results: List[LeafResult]) -> LeafResult:
    """
    Merge ordered leaf results by divide and conquer.

    merge(A, B, C, D) = merge(merge(A, B), merge(C, D))
    """
    if not results:
        return LeafResult(None, 0, 0)
    if len(results) == 1:
        return results[0]

    mid = len(results) // 2
    left = merge_results(results[:mid])
    right = merge_results(results[mid:])
    return LeafResult(
        choose_best(left.candidate, right.candidate),
        left.activations + right.activations,
        left.matches + right.matches,
    )


def split_range(start: int, end: int, leaf_size: int) -> List[Tuple[int, int]]:
    """Split [start, end) at midpoints into ordered ranges of ≤ leaf_size."""
    if end - start <= leaf_size:
        return [(start, end)]
    mid = (start + end) // 2
    return split_range(start, mid, leaf_size) + split_range(mid, end, leaf_size)


# =============================================================================
# SECTION 2: Search Engine
# =============================================================================

class ResonanceSearch:
    """
    Finds the best-activation category that also passes vigilance.

    Holds no state besides the kernel and an optional executor; safe to call
    from many threads at once.
    """

    def __init__(self, kernel: ResonanceKernel, executor: Optional[Executor] = None):
        self.kernel = kernel
        self.executor = executor

    def scan_range(self, x: np.ndarray, weights, params: ResonanceParameters,
                   start: int, end: int) -> LeafResult:
        """Sequential scan of weights[start:end]."""
        kernel = self.kernel
        best = float("-inf")
        candidate = None
        activations = 0
        matches = 0

        for i in range(start, end):
            weight = weights[i]
            value = kernel.activation(x, weight, params)
            activations += 1
            if value > best:
                matches += 1
                if kernel.vigilance(x, weight, params).accepted:
                    best = value
                    candidate = Candidate(i, value, weight)

        return LeafResult(candidate, activations, matches)

    def search(self, x: np.ndarray, snapshot, params: ResonanceParameters,
               learn: bool = True, start: int = 0) -> SearchOutcome:
        """
        Search snapshot[start:] for the resonating category.

        Args:
            x: Converted input (kernel.convert output)
            snapshot: Ordered sequence of weights
            params: Kernel parameters
            learn: Apply kernel.update to the winner's weight
            start: First index to consider

        Returns:
            SearchOutcome whose result is Success(index, activation, weight)
            or NO_MATCH
        """
        n = len(snapshot)
        count = n - start
        if count <= 0:
            return SearchOutcome(NO_MATCH)

        parallel_tasks = 0
        if (self.executor is None
                or count <= params.parallel_threshold
                or count <= params.leaf_size):
            merged = self.scan_range(x, snapshot, params, start, n)
        else:
            ranges = split_range(start, n, params.leaf_size)
            parallel_tasks = len(ranges)
            logger.debug("Parallel scan: %d categories in %d tasks", count, parallel_tasks)
            merged = merge_results(self._run_parallel(x, snapshot, params, ranges))

        vector_ops = merged.activations
        candidate = merged.candidate
        if candidate is None:
            result = NO_MATCH
        elif learn:
            updated = self.kernel.update(x, candidate.weight, params)
            vector_ops += 1
            result = Success(candidate.index, candidate.activation, updated)
        else:
            result = Success(candidate.index, candidate.activation, candidate.weight)

        return SearchOutcome(
            result=result,
            activations=merged.activations,
            matches=merged.matches,
            vector_ops=vector_ops,
            parallel_tasks=parallel_tasks,
        )

    def _run_parallel(self, x, snapshot, params, ranges) -> List[LeafResult]:
        """
        Scan ranges on the executor; any failing leaf fails the round.

        The calling thread scans the first range itself and takes back every
        range no worker has started, so a search issued from a worker of the
        same pool never waits on a queue only it could drain.
        """
        futures = [
            self.executor.submit(self.scan_range, x, snapshot, params, lo, hi)
            for lo, hi in ranges[1:]
        ]
        try:
            lo, hi = ranges[0]
            results = [self.scan_range(x, snapshot, params, lo, hi)]
            for (lo, hi), future in zip(ranges[1:], futures):
                if future.cancel():
                    results.append(self.scan_range(x, snapshot, params, lo, hi))
                else:
                    results.append(future.result())
        except BaseException:
            for future in futures:
                future.cancel()
            raise
        return results
