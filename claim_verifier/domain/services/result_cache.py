"""Bounded verdict cache with TTL expiry and FIFO eviction."""

import logging
import re
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from cachetools import FIFOCache

from ..models.verification import Verdict
from .admission_gate import monotonic_ms

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_claim(claim: str) -> str:
    """Normalize a claim into a cache key.

    Lowercases, trims and collapses internal whitespace so that claims
    differing only in case or spacing share an entry.
    """
    return _WHITESPACE.sub(" ", claim.strip().lower())


@dataclass(frozen=True)
class CacheEntry:
    """A cached verdict and the time it was stored."""

    key: str
    value: Verdict
    stored_at: float


class ResultCache:
    """Normalized-claim to verdict cache.

    Capacity eviction removes the oldest *inserted* entry, not the least
    recently used one. Expired entries are only dropped when read.
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl_ms: float = 300_000,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries held
            ttl_ms: Entry lifetime in milliseconds
            clock: Millisecond clock, monotonic time by default
        """
        self.max_size = max_size
        self.ttl_ms = ttl_ms
        self._clock = clock or monotonic_ms
        self._store: FIFOCache = FIFOCache(maxsize=max_size)
        self._lock = threading.Lock()

    def get(self, claim: str) -> Optional[Verdict]:
        """Get the cached verdict for a claim, if still fresh."""
        key = normalize_claim(claim)
        with self._lock:
            entry: Optional[CacheEntry] = self._store.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at > self.ttl_ms:
                del self._store[key]
                logger.debug(f"📦 Cache entry expired: {key[:50]}")
                return None

        logger.info(f"📦 Cache hit: {key[:50]}...")
        return entry.value

    def put(self, claim: str, verdict: Verdict) -> None:
        """Store a verdict, evicting the oldest entry when full."""
        key = normalize_claim(claim)
        with self._lock:
            # Re-storing a key counts as a fresh insertion
            self._store.pop(key, None)
            if len(self._store) >= self.max_size:
                evicted_key, _ = self._store.popitem()
                logger.debug(f"📦 Cache full, evicted: {evicted_key[:50]}")
            self._store[key] = CacheEntry(key=key, value=verdict, stored_at=self._clock())

        logger.info(f"📦 Cache set: {key[:50]}...")

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._store.clear()

    def stats(self) -> Dict[str, float]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._store),
                "max_size": self.max_size,
                "ttl_ms": self.ttl_ms,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
