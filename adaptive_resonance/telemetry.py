"""
Performance Telemetry

Counters and a latency moving average, updated by the engine and read by
external monitoring through `PerformanceSnapshot`.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict
import threading

from .constants import LATENCY_SMOOTHING


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Point-in-time copy of an engine's performance counters."""
    vector_ops: int
    parallel_tasks: int
    avg_compute_time_ms: float
    cache_size: int
    category_count: int
    activation_calls: int
    match_calls: int
    learning_calls: int
    prediction_calls: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return (f"Performance Snapshot:\n"
                f"  Categories: {self.category_count}\n"
                f"  Vector ops: {self.vector_ops}\n"
                f"  Parallel tasks: {self.parallel_tasks}\n"
                f"  Avg compute: {self.avg_compute_time_ms:.3f} ms\n"
                f"  Calls: learn={self.learning_calls} predict={self.prediction_calls} "
                f"activation={self.activation_calls} match={self.match_calls}\n"
                f"  Cache: size={self.cache_size} hits={self.cache_hits} misses={self.cache_misses}\n")


class PerformanceTracker:
    """Thread-safe accumulator behind PerformanceSnapshot."""

    def __init__(self, smoothing: float = LATENCY_SMOOTHING):
        self.smoothing = smoothing
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self.vector_ops = 0
            self.parallel_tasks = 0
            self.activation_calls = 0
            self.match_calls = 0
            self.learning_calls = 0
            self.prediction_calls = 0
            self._avg_ms: Optional[float] = None

    def record_scan(self, activations: int = 0, matches: int = 0,
                    vector_ops: int = 0, parallel_tasks: int = 0) -> None:
        """Add the counts of one search round (or any kernel work)."""
        with self._lock:
            self.activation_calls += activations
            self.match_calls += matches
            self.vector_ops += vector_ops
            self.parallel_tasks += parallel_tasks

    def record_call(self, learning: bool, elapsed_ms: float) -> None:
        """Count one learn/predict call and fold its latency into the average."""
        with self._lock:
            if learning:
                self.learning_calls += 1
            else:
                self.prediction_calls += 1
            if self._avg_ms is None:
                self._avg_ms = elapsed_ms
            else:
                self._avg_ms = (1.0 - self.smoothing) * self._avg_ms + self.smoothing * elapsed_ms

    @property
    def avg_compute_time_ms(self) -> float:
        return self._avg_ms or 0.0

    def snapshot(self, cache_size: int, category_count: int,
                 cache_hits: int = 0, cache_misses: int = 0) -> PerformanceSnapshot:
        with self._lock:
            return PerformanceSnapshot(
                vector_ops=self.vector_ops,
                parallel_tasks=self.parallel_tasks,
                avg_compute_time_ms=self.avg_compute_time_ms,
                cache_size=cache_size,
                category_count=category_count,
                activation_calls=self.activation_calls,
                match_calls=self.match_calls,
                learning_calls=self.learning_calls,
                prediction_calls=self.prediction_calls,
                cache_hits=cache_hits,
                cache_misses=cache_misses,
            )
