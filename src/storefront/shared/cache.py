"""Small thread-safe in-process cache with per-entry expiry."""

import threading
import time
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

_MISSING = object()

DEFAULT_MAX_ENTRIES = 1024


class TTLCache:
    """Key/value cache whose entries expire ``ttl_seconds`` after they are set.

    Every ``set`` drops expired entries. When the cache is still full, the
    entry closest to expiry makes room for the new one.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return default
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            if key not in self._entries and len(self._entries) >= self._max_entries:
                soonest = min(self._entries, key=lambda k: self._entries[k][0])
                del self._entries[soonest]
            self._entries[key] = (now + ttl_seconds, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]
        for k in expired:
            del self._entries[k]
        if expired:
            logger.debug("Evicted expired cache entries", count=len(expired))

    def get_or_load(self, key: str, loader: Callable[[], Any], ttl_seconds: float) -> Any:
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            logger.debug("Cache hit", key=key)
            return value

        value = loader()
        self.set(key, value, ttl_seconds)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
