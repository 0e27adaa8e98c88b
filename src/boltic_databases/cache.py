# Boltic Databases SDK
# File: cache.py
# Version: v2

"""In-process TTL cache for table-name -> table-id lookups.

Almost every table-scoped call starts by resolving a table name to its
id with a list request. The cache keeps those ids for a short time; a
rename or delete through this SDK evicts the affected entry.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional, Tuple


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    sets: int = 0
    evictions: int = 0
    expirations: int = 0
    invalidations: int = 0


class TTLCache:
    """TTL cache with least-recently-used eviction.

    A ttl or capacity of 0 disables caching entirely.
    """

    def __init__(self, ttl_seconds: int = 60, max_entries: int = 256) -> None:
        self.ttl_seconds = int(ttl_seconds)
        self.max_entries = int(max_entries)
        self._store: "OrderedDict[Hashable, Tuple[float, Any]]" = OrderedDict()
        self._stats = CacheStats()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0 and self.max_entries > 0

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value, or None when absent or expired."""
        if not self.enabled:
            self._stats.misses += 1
            return None

        entry = self._store.get(key)
        if entry is None:
            self._stats.misses += 1
            return None

        expires_at, value = entry
        if expires_at < time.monotonic():
            self._stats.misses += 1
            self._stats.expirations += 1
            del self._store[key]
            return None

        self._store.move_to_end(key)
        self._stats.hits += 1
        return value

    def set(self, key: Hashable, value: Any) -> None:
        if not self.enabled:
            return

        self._store[key] = (time.monotonic() + self.ttl_seconds, value)
        self._store.move_to_end(key)
        self._stats.sets += 1

        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)
            self._stats.evictions += 1

    def invalidate(self, key: Hashable) -> bool:
        """Drop one entry; returns True if it was present."""
        if self._store.pop(key, None) is None:
            return False
        self._stats.invalidations += 1
        return True

    def clear(self) -> None:
        self._store.clear()

    def stats(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "ttl_seconds": self.ttl_seconds,
            "max_entries": self.max_entries,
            "size": len(self._store),
            "hits": self._stats.hits,
            "misses": self._stats.misses,
            "sets": self._stats.sets,
            "evictions": self._stats.evictions,
            "expirations": self._stats.expirations,
            "invalidations": self._stats.invalidations,
        }
