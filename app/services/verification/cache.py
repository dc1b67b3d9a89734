"""In-memory TTL cache for verification results."""

import threading
import time
from collections.abc import Callable
from typing import Any

from loguru import logger


class TTLCache:
    """Time-bounded memoization.

    Expired entries are evicted on read, and every write sweeps the rest so
    keys that are never read again do not accumulate.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self._ttl:
                del self._entries[key]
                logger.debug("Cache expired: {}", key)
                return None
        logger.debug("Cache hit: {}", key)
        return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            now = self._clock()
            expired = [k for k, (stored_at, _) in self._entries.items() if now - stored_at >= self._ttl]
            for k in expired:
                del self._entries[k]
            if expired:
                logger.debug("Cache swept {} expired entries", len(expired))
            self._entries[key] = (now, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
