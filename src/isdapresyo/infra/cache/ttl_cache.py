"""Process-local TTL cache for hot read queries."""

import threading
import time
from typing import Any, Callable, Optional


class TTLCache:
    """Dict of key -> (value, expires_at) with lazy expiry and prefix invalidation.

    Unbounded; the key space is a handful of query shapes. Every operation
    holds the same lock. `generation` advances on every invalidation so a
    reader that fetched before a write can tell its value is stale.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[Any, float]] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at < self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def set_if_generation(self, key: str, value: Any, ttl: float, generation: int) -> bool:
        """Store only if no invalidation happened since `generation` was read."""
        with self._lock:
            if generation != self._generation:
                return False
            self._entries[key] = (value, self._clock() + ttl)
            return True

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every key starting with prefix. Returns how many were removed."""
        with self._lock:
            self._generation += 1
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
