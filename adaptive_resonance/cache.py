"""
Conversion Cache

Bounded map from pattern content hash to the kernel's converted
representation (e.g. a complement-coded or reduced-precision array), so the
same pattern is not re-converted on every call.

Eviction removes an arbitrary entry once the bound is reached; in practice
the oldest insertion, because dicts keep insertion order. Hits do not
refresh an entry, so this is NOT an LRU cache.

The cache is advisory: a miss or eviction only means the conversion is
recomputed, never a different numeric result.
"""

from __future__ import annotations
from typing import Any, Callable, Dict
import threading

from .errors import InvalidArgumentError
from .pattern import Pattern


class ConversionCache:
    """Thread-safe bounded conversion cache with arbitrary eviction."""

    def __init__(self, max_size: int):
        if max_size < 0:
            raise InvalidArgumentError("max_size must be >= 0")
        self.max_size = max_size
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get_or_insert(self, pattern: Pattern, convert: Callable[[Pattern], Any]) -> Any:
        """Cached conversion of pattern, computing and storing it on a miss."""
        key = pattern.content_hash
        with self._lock:
            if key in self._entries:
                self.hits += 1
                return self._entries[key]
            self.misses += 1

        # Convert outside the lock; concurrent misses on one key both compute
        # the same value and the second insert is a no-op.
        value = convert(pattern)

        if self.max_size == 0:
            return value
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            if len(self._entries) >= self.max_size:
                self._evict_one_locked()
            self._entries[key] = value
        return value

    def evict_one(self) -> bool:
        """Remove one arbitrary entry. Returns False if the cache was empty."""
        with self._lock:
            return self._evict_one_locked()

    def _evict_one_locked(self) -> bool:
        if not self._entries:
            return False
        del self._entries[next(iter(self._entries))]
        self.evictions += 1
        return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def reset_stats(self) -> None:
        with self._lock:
            self.hits = 0
            self.misses = 0
            self.evictions = 0

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pattern: Pattern) -> bool:
        return pattern.content_hash in self._entries

    def __repr__(self) -> str:
        return f"ConversionCache(size={self.size()}, max_size={self.max_size})"
