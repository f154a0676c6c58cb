"""In-process result cache with per-entry expiry."""

import time
from collections.abc import Callable
from threading import Lock
from typing import Any

from wip_analytics.application.ports.result_cache import ResultCachePort


class InMemoryResultCache(ResultCachePort):
    """ResultCachePort implementation keeping entries in a dictionary."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            clock: Monotonic clock returning seconds.
        """
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        with self._lock:
            now = self._clock()
            self._drop_expired(now)
            self._entries[key] = (now + ttl_seconds, value)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _drop_expired(self, now: float) -> None:
        expired = [
            key
            for key, (expires_at, _) in self._entries.items()
            if now >= expires_at
        ]
        for key in expired:
            del self._entries[key]


__all__ = ["InMemoryResultCache"]
