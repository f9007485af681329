"""In-memory TTL cache with per-key compute-once support."""
import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from selection_analysis.core.metrics import set_cache_size, track_cache_hit, track_cache_miss

logger = logging.getLogger(__name__)

T = TypeVar('T')


def generate_cache_key(prefix: str, *args: Any, **kwargs: Any) -> str:
    """
    Generate a consistent cache key from function arguments.

    Args:
        prefix: Cache key prefix (e.g., function name)
        *args: Positional arguments
        **kwargs: Keyword arguments

    Returns:
        Hash-based cache key string
    """
    key_data = {
        "args": args,
        "kwargs": {k: v for k, v in sorted(kwargs.items()) if v is not None},
    }
    key_hash = hashlib.sha256(json.dumps(key_data, sort_keys=True, default=str).encode()).hexdigest()
    return f"{prefix}:{key_hash}"


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and its validity window (monotonic clock seconds)."""

    key: str
    value: T
    timestamp: float
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class TTLCache(Generic[T]):
    """
    Thread-safe in-memory cache whose entries expire after a time-to-live.

    Entries are VALID while ``now < expires_at`` and are evicted on the next
    access once expired. Expired entries are also swept on every write.

    Concurrent misses for the same key are collapsed: one caller computes
    while the others wait for its result.

    Usage:
        cache = TTLCache(ttl_seconds=300, name="selection_analysis")
        value, hit = cache.get_or_compute(key, lambda: expensive())
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        name: str = "default",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        self._inflight: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> T | None:
        """Return a valid cached value, evicting it if expired."""
        with self._lock:
            entry = self._lookup(key)
        if entry is None:
            track_cache_miss(self.name)
            return None
        track_cache_hit(self.name)
        return entry.value

    def set(self, key: str, value: T, ttl_seconds: float | None = None) -> CacheEntry[T]:
        """Store a value, sweeping expired entries first."""
        with self._lock:
            return self._store(key, value, ttl_seconds)

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
            set_cache_size(self.name, len(self._entries))

    def clear(self) -> None:
        """Drop every entry unconditionally."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            set_cache_size(self.name, 0)
        logger.debug(f"Cache '{self.name}' cleared ({count} entries)")

    def get_or_compute(
        self,
        key: str,
        compute: Callable[[], T],
        ttl_seconds: float | None = None,
    ) -> tuple[T, bool]:
        """
        Return the cached value for key, computing and storing it on a miss.

        At most one caller computes a given key at a time; callers that
        arrive while a computation is in flight wait and reuse its result.
        If the computation raises, the error propagates to that caller and
        waiting callers retry the computation themselves.

        Args:
            key: Cache key
            compute: Zero-argument callable producing the value
            ttl_seconds: Optional TTL override for this entry

        Returns:
            Tuple of (value, was_cache_hit)
        """
        with self._lock:
            entry = self._lookup(key)
            if entry is not None:
                track_cache_hit(self.name)
                return entry.value, True
            key_lock = self._inflight.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                entry = self._lookup(key)
            if entry is not None:
                track_cache_hit(self.name)
                return entry.value, True

            track_cache_miss(self.name)
            try:
                value = compute()
                with self._lock:
                    self._store(key, value, ttl_seconds)
            finally:
                with self._lock:
                    if self._inflight.get(key) is key_lock:
                        del self._inflight[key]
            return value, False

    def _lookup(self, key: str) -> CacheEntry[T] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_valid(self._clock()):
            del self._entries[key]
            set_cache_size(self.name, len(self._entries))
            return None
        return entry

    def _store(self, key: str, value: T, ttl_seconds: float | None) -> CacheEntry[T]:
        now = self._clock()
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        self._evict_expired(now)
        entry = CacheEntry(key=key, value=value, timestamp=now, expires_at=now + ttl)
        self._entries[key] = entry
        set_cache_size(self.name, len(self._entries))
        return entry

    def _evict_expired(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if not e.is_valid(now)]
        for k in expired:
            del self._entries[k]
        if expired:
            logger.debug(f"Cache '{self.name}' evicted {len(expired)} expired entries")
