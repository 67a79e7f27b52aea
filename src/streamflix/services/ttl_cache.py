"""In-memory TTL cache for catalog responses.

Entries carry their insertion timestamp and are evicted lazily: a stale
entry is dropped on the read that discovers it, not by a background sweep.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from streamflix.shared.constants import Cache
from streamflix.shared.errors import create_validation_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


def make_cache_key(endpoint: str, params: dict[str, Any] | None = None) -> str:
    """Build a deterministic cache key for a logical endpoint call.

    Parameters are serialized as compact JSON with sorted keys, so two
    mappings holding the same items always produce the same key regardless
    of insertion order.

    Example:
        >>> make_cache_key("popular_movies", {"page": 1})
        'popular_movies_{"page":1}'
    """
    serialized = json.dumps(
        params or {},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return f"{endpoint}{Cache.KEY_SEPARATOR}{serialized}"


@dataclass
class CacheEntry(Generic[T]):
    """A cached value and the wall-clock time it was stored."""

    value: T
    inserted_at: float

    def age(self, now: float) -> float:
        return now - self.inserted_at

    def is_expired(self, ttl_seconds: float, now: float) -> bool:
        """Return True once the entry is older than ``ttl_seconds``."""
        return self.age(now) > ttl_seconds


class TTLCache(Generic[T]):
    """Key/value store whose entries expire a fixed time after insertion.

    Args:
        ttl_seconds: Maximum entry age in seconds (default: 5 minutes)
        max_entries: Optional bound; inserting beyond it drops the
            oldest-inserted entry
        clock: Wall-clock source, ``time.time`` by default
    """

    def __init__(
        self,
        ttl_seconds: float = Cache.TTL,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise create_validation_error(
                f"ttl_seconds must be positive, got: {ttl_seconds}",
                field="ttl_seconds",
                operation="ttl_cache_init",
            )
        if max_entries is not None and max_entries <= 0:
            raise create_validation_error(
                f"max_entries must be positive, got: {max_entries}",
                field="max_entries",
                operation="ttl_cache_init",
            )

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> T | None:
        """Return the cached value, or None if absent or stale.

        A stale entry is removed as a side effect.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if entry.is_expired(self.ttl_seconds, self._clock()):
                del self._entries[key]
                logger.debug("Evicted stale cache entry: %s", key)
                return None

            return entry.value

    def set(self, key: str, value: T) -> None:
        """Insert or overwrite ``key``, stamping the current time."""
        with self._lock:
            # Re-inserting moves the key to the newest position
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    oldest = next(iter(self._entries))
                    del self._entries[oldest]
                    logger.debug("Dropped oldest cache entry: %s", oldest)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return ``{"count": int, "keys": list[str]}`` without touching entries."""
        with self._lock:
            return {
                "count": len(self._entries),
                "keys": list(self._entries),
            }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
