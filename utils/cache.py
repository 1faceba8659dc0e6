# utils/cache.py
"""In-memory TTL cache used to memoize third-party scripture responses."""
import logging
import threading
import time
from typing import Any, Callable, Dict, Hashable, NamedTuple, Optional

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 12 * 60 * 60

_MISSING = object()


class CacheEntry(NamedTuple):
    value: Any
    expiry: float


class TTLCache:
    """
    Key -> (value, expiry) map with lazy expiry.

    An entry is served only while now < expiry. When max_entries is set,
    inserting into a full cache first drops expired entries, then the oldest
    inserted ones. Concurrent misses on the same key share a single fetch.

    Usage:
        cache = TTLCache(default_ttl=60)
        data = cache.get_or_fetch(url, lambda: session.get(url).json())
    """

    def __init__(self, default_ttl: float = DEFAULT_TTL_SECONDS,
                 max_entries: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic):
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[Hashable, CacheEntry] = {}
        self._lock = threading.Lock()
        self._inflight: Dict[Hashable, threading.Lock] = {}

    def _lookup(self, key):
        entry = self._entries.get(key)
        if entry is not None and entry.expiry > self._clock():
            return entry.value
        return _MISSING

    def get(self, key, default=None):
        with self._lock:
            value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key, value, ttl: Optional[float] = None):
        ttl = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._entries.pop(key, None)
            if self.max_entries is not None and len(self._entries) >= self.max_entries:
                self._evict()
            self._entries[key] = CacheEntry(value, self._clock() + ttl)

    def _evict(self):
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.expiry <= now]:
            del self._entries[key]
        while len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug(f"Evicted cache entry {oldest!r}")

    def get_or_fetch(self, key, fetcher: Callable[[], Any], ttl: Optional[float] = None):
        """Return the live cached value for key, or call fetcher() and cache its result.

        Nothing is cached when fetcher raises; the exception propagates.
        """
        with self._lock:
            value = self._lookup(key)
            if value is not _MISSING:
                return value
            key_lock = self._inflight.setdefault(key, threading.Lock())

        with key_lock:
            try:
                # Another thread may have filled the entry while we waited
                with self._lock:
                    value = self._lookup(key)
                if value is not _MISSING:
                    return value

                value = fetcher()
                self.set(key, value, ttl)
                return value
            finally:
                with self._lock:
                    if self._inflight.get(key) is key_lock:
                        del self._inflight[key]

    def clear(self):
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def __len__(self):
        return self.size()

    def __contains__(self, key):
        with self._lock:
            return self._lookup(key) is not _MISSING
