"""Generic bounded cache with TTL eviction."""

import threading
import time
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class BoundedCache(Generic[T]):
    """Thread-safe cache with max size and TTL.

    A TTL of zero disables caching: ``set`` stores nothing and every ``get``
    is a miss.
    """

    def __init__(self, max_size: int = 100, ttl_seconds: int = 300):
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._entries: dict[str, tuple[T, float]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    def get(self, key: str) -> T | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            value, stored_at = entry
            if time.monotonic() - stored_at >= self._ttl:
                del self._entries[key]
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, key: str, value: T) -> None:
        if not self.enabled:
            return
        with self._lock:
            if len(self._entries) >= self._max_size and key not in self._entries:
                oldest_key = min(self._entries, key=lambda k: self._entries[k][1])
                del self._entries[oldest_key]
            self._entries[key] = (value, time.monotonic())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_stats(self) -> dict[str, Any]:
        with self._lock:
            total = self._hits + self._misses
            return {
                "enabled": self.enabled,
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 2) if total > 0 else 0.0,
                "max_size": self._max_size,
                "ttl_seconds": self._ttl,
            }
