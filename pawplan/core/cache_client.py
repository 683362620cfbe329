"""In-memory TTL cache for derived rows that can always be recomputed.

Values are JSON strings keyed by ``pawplan:<kind>:<household_id>:...`` so a
household's entries can be found with a glob and dropped together.
"""

import fnmatch
import logging
import threading
import time


logger = logging.getLogger(__name__)


class InMemoryCache:
    """Thread-safe in-memory cache with TTL support."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._lock = threading.Lock()

    def _is_expired(self, key: str, now: float) -> bool:
        _, expires_at = self._entries[key]
        return expires_at is not None and expires_at <= now

    async def get(self, key: str) -> str | None:
        """Get a value, or None if it is missing or expired."""
        with self._lock:
            if key not in self._entries:
                return None
            if self._is_expired(key, time.time()):
                del self._entries[key]
                return None
            logger.debug("Cache hit for key: %s", key)
            return self._entries[key][0]

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value; ``ttl_seconds <= 0`` keeps it until deleted."""
        expires_at = time.time() + ttl_seconds if ttl_seconds > 0 else None
        with self._lock:
            self._entries[key] = (value, expires_at)
        logger.debug("Cached key: %s (TTL: %ds)", key, ttl_seconds)

    async def delete(self, *keys: str) -> None:
        with self._lock:
            for key in keys:
                self._entries.pop(key, None)

    async def keys(self, pattern: str) -> list[str]:
        """Live keys matching a glob pattern (e.g. 'pawplan:streaks:h1:*')."""
        now = time.time()
        with self._lock:
            for key in [key for key in self._entries if self._is_expired(key, now)]:
                del self._entries[key]
            return [key for key in self._entries if fnmatch.fnmatch(key, pattern)]


# Global cache client instance
cache_client = InMemoryCache()
