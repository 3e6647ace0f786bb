"""Key-value cache with per-entry expiry used for cache-aside reads."""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, NamedTuple, Protocol

from cachetools import TLRUCache


class TTLStore(Protocol):
    """Minimal cache interface the listing endpoint composes against."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any, ttl_seconds: float) -> None: ...

    def clear(self) -> None: ...


class _Entry(NamedTuple):
    value: Any
    ttl_seconds: float


def _expires_at(_key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl_seconds


class MemoryTTLStore:
    """In-process TTL store backed by ``cachetools.TLRUCache``.

    Every entry carries its own lifetime. When the store is full the least
    recently used entry is evicted. Access is serialized with a lock because
    the cache is shared by all requests of the process.
    """

    def __init__(self, maxsize: int = 1024, timer: Callable[[], float] = time.monotonic) -> None:
        self._cache: TLRUCache = TLRUCache(maxsize=maxsize, ttu=_expires_at, timer=timer)
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._cache.get(key)
        return None if entry is None else entry.value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            self._cache[key] = _Entry(value, ttl_seconds)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)


def users_page_key(page: int, per_page: int) -> str:
    return f"users_page_{page}_per_page_{per_page}"
