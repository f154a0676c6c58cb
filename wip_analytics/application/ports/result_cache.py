"""Port for caching computed analytics payloads."""

from typing import Any, Protocol


class ResultCachePort(Protocol):
    """Port exposing a key/value cache with expiry."""

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds`` seconds."""


__all__ = ["ResultCachePort"]
