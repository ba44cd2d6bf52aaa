"""
In-memory cache for upstream API responses.

Provides a time-aware key/value store for JSON payloads, enabling:
- Fast repeat reads of identical GET requests
- Lazy expiration of stale entries at read time
- Thread-safe operations for concurrent access

Entries are keyed by the inbound request's path and query string. A hit is
served only while the current time is before the entry's expiry. There is
no in-flight coalescing: two concurrent misses for the same key both go
upstream, and the later ``set`` wins.
"""

import functools
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from flask import current_app, request

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cached payload with its absolute expiry time."""
    value: Any
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class ResponseCache:
    """
    Thread-safe TTL cache for upstream responses.

    Expiry is checked lazily on read; an optional background sweeper
    drops expired entries so idle keys don't accumulate.
    """

    def __init__(
        self,
        default_ttl: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self._clock = clock

        self._cache: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

        # Background sweeping
        self._sweeper: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._sets = 0

    def get(self, key: str) -> Optional[Any]:
        """
        Get cached value by key.

        Returns None if not cached or expired.
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None:
                if not entry.is_expired(self._clock()):
                    self._hits += 1
                    return entry.value
                # Expired
                del self._cache[key]
            self._misses += 1
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store value under key, replacing any existing entry."""
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        with self._lock:
            self._cache[key] = CacheEntry(value=value, created_at=now, expires_at=now + ttl)
            self._sets += 1

    def clear(self, key: Optional[str] = None) -> int:
        """
        Remove one entry, or every entry when key is None.

        Returns the number of entries removed.
        """
        with self._lock:
            if key is not None:
                return 1 if self._cache.pop(key, None) is not None else 0
            removed = len(self._cache)
            self._cache.clear()
            return removed

    def keys(self) -> List[str]:
        """List keys of entries that have not expired."""
        now = self._clock()
        with self._lock:
            return [k for k, entry in self._cache.items() if not entry.is_expired(now)]

    def sweep(self) -> int:
        """Drop expired entries. Returns count removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired:
                del self._cache[key]
        if expired:
            logger.debug(f'Swept {len(expired)} expired cache entries')
        return len(expired)

    def start_sweeper(self, interval_seconds: float) -> None:
        """Run sweep() every interval on a daemon thread."""
        if interval_seconds <= 0 or self._sweeper is not None:
            return

        self._stop_event.clear()

        def _loop():
            while not self._stop_event.wait(interval_seconds):
                try:
                    self.sweep()
                except Exception as e:
                    logger.error(f'Cache sweep failed: {e}')

        self._sweeper = threading.Thread(target=_loop, name='cache-sweeper', daemon=True)
        self._sweeper.start()
        logger.info(f'Cache sweeper started (every {interval_seconds}s)')

    def stop_sweeper(self) -> None:
        """Stop the background sweeper if running."""
        if self._sweeper is None:
            return
        self._stop_event.set()
        self._sweeper.join(timeout=5)
        self._sweeper = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    @property
    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            lookups = self._hits + self._misses
            return {
                'entries': len(self._cache),
                'hits': self._hits,
                'misses': self._misses,
                'sets': self._sets,
                'hit_rate': self._hits / lookups if lookups > 0 else 0,
            }


def request_cache_key() -> str:
    """Cache key for the current request: path plus query string."""
    query = request.query_string.decode('utf-8', errors='replace')
    return f'{request.path}?{query}' if query else request.path


def cached_response(ttl: Optional[int] = None):
    """
    Memoize a view's JSON payload for ttl seconds.

    Only payloads returned normally are stored; a view that raises is
    never cached, so failures are retried on the next request.
    """
    def decorator(view):
        @functools.wraps(view)
        def wrapper(*args, **kwargs):
            cache: ResponseCache = current_app.extensions['windair'].cache
            key = request_cache_key()

            cached = cache.get(key)
            if cached is not None:
                logger.debug(f'Cache HIT: {key}')
                # Envelopes carry a 'cached' flag; passthrough payloads stay untouched
                if isinstance(cached, dict) and 'cached' in cached:
                    return {**cached, 'cached': True}
                return cached

            logger.debug(f'Cache MISS: {key}')
            payload = view(*args, **kwargs)
            if isinstance(payload, (dict, list)):
                cache.set(key, payload, ttl)
            return payload

        return wrapper

    return decorator
