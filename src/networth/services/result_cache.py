"""Time-boxed in-memory memo for expensive computations."""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

from networth.core.timezone import now_local

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheStatus(str, Enum):
    """Whether a value was served from cache."""

    HIT = "HIT"
    MISS = "MISS"


@dataclass
class CacheEntry:
    value: Any
    expires_at: datetime


class ResultCache:
    """
    Single-process TTL cache.

    Owned by whoever builds the services (the FastAPI app state, or a test),
    never a module global. Expired entries are not swept; they are simply
    overwritten by the next computation for the same key.

    Concurrent misses on the same key each compute and the last writer wins.
    The computations cached here are read-only, so the duplicate work is
    harmless.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or now_local
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get_or_compute(
        self,
        key: str,
        ttl_minutes: float,
        compute_fn: Callable[[], T],
    ) -> tuple[T, CacheStatus]:
        """
        Return the cached value for key, computing and storing it on a miss.

        compute_fn runs outside the lock. If it raises, nothing is stored and
        the exception propagates.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self._clock() < entry.expires_at:
                return entry.value, CacheStatus.HIT

        logger.debug("Cache miss for %s", key)
        value = compute_fn()
        expires_at = self._clock() + timedelta(minutes=ttl_minutes)
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=expires_at)
        return value, CacheStatus.MISS

    def invalidate(self, key: str) -> None:
        """Drop one key."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every key."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
