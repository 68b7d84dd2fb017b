"""Stores – CacheStore protocol and the in-memory TTL implementation."""
from __future__ import annotations

import copy
import threading
import time
from typing import Any, Callable, Protocol, runtime_checkable

__all__ = ["CacheStore", "MemoryCacheStore"]


@runtime_checkable
class CacheStore(Protocol):
    """Async key/value store used by the caching policy.

    ``get`` returns ``None`` for a missing key.  ``ttl`` is in seconds.
    Stores may additionally provide ``async clear()``.
    """

    async def get(self, key: str) -> Any: ...
    async def set(self, key: str, value: Any, ttl: float) -> None: ...
    async def delete(self, key: str) -> None: ...


class MemoryCacheStore:
    """In-process :class:`CacheStore` with per-entry expiry.

    Entries are ``key -> (value, expires_at)``; a read past ``expires_at``
    evicts the entry and reports a miss.  Values are deep-copied on the way
    in and out, so mutating a result never changes what is cached.  The table
    is guarded by a lock so one instance may be shared by event loops running
    in different threads.
    Build one per pipeline rather than sharing a module-level instance.

    Parameters
    ----------
    default_ttl:
        TTL in seconds used when ``set`` is called without one.
    clock:
        Monotonic clock in seconds; tests inject a controllable one.
    """

    def __init__(self, default_ttl: float = 60.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() > expires_at:
                del self._entries[key]
                return None
        return copy.deepcopy(value)

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        expires_at = self._clock() + (self._default_ttl if ttl is None else ttl)
        value = copy.deepcopy(value)
        with self._lock:
            self._entries[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
