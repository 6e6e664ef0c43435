"""In-memory TTL cache for pricing configuration snapshots.

Evaluator services receive a ``ConfigCache`` instance instead of reaching for
module state, so tests can hand in a fresh cache and admin writes can
invalidate exactly the keys they touch.
"""

import logging
import time
from collections.abc import Callable
from threading import Lock
from typing import Any, TypeVar

from storefront.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Distinguishes a missing key from a cached None
_MISSING = object()


class ConfigCache:
    """Thread-safe key/value cache where every entry expires after a TTL."""

    def __init__(self, ttl_seconds: int = 300):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[Any, float]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""
        value = self._lookup(key)
        return None if value is _MISSING else value

    def _lookup(self, key: str) -> Any:
        now = time.monotonic()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return _MISSING
            value, expires_at = entry
            if expires_at <= now:
                del self._entries[key]
                return _MISSING
            return value

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._entries[key] = (value, time.monotonic() + ttl)

    def get_or_load(self, key: str, loader: Callable[[], T], ttl_seconds: int | None = None) -> T:
        """Return the cached value for ``key``, calling ``loader`` on a miss.

        The loader runs outside the lock; two concurrent misses may both load,
        and the later write wins.
        """
        cached = self._lookup(key)
        if cached is not _MISSING:
            return cached  # type: ignore[no-any-return]
        value = loader()
        self.set(key, value, ttl_seconds)
        return value

    def invalidate(self, key: str) -> bool:
        """Drop a single key. Returns True if it was present."""
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            logger.info("Invalidated cache key %s", key)
        return removed

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every key starting with ``prefix``. Returns the number removed."""
        with self._lock:
            keys = [k for k in self._entries if k.startswith(prefix)]
            for k in keys:
                del self._entries[k]
        if keys:
            logger.info("Invalidated %d cache keys with prefix %s", len(keys), prefix)
        return len(keys)

    def clear(self) -> None:
        """Clear all entries (useful for testing)."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


config_cache = ConfigCache(ttl_seconds=settings.PRICING_CACHE_TTL_SECONDS)


def get_config_cache() -> ConfigCache:
    """FastAPI dependency returning the process-wide configuration cache."""
    return config_cache
