from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, List

# Same TTL for every entry kind.
CACHE_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    payload: Any
    timestamp: float


class TTLCache:
    """
    In-memory keyed cache with a single time-to-live.

    Expiry is checked lazily on read; nothing is evicted. A write always
    stores a new CacheEntry, so a reader holding an entry never sees it change.
    """

    def __init__(self, ttl: float = CACHE_TTL_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, key: str, payload: Any) -> None:
        self._entries[key] = CacheEntry(payload=payload, timestamp=self._clock())

    def age(self, key: str) -> float | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        return self._clock() - entry.timestamp

    def is_valid(self, key: str) -> bool:
        """
        Return True if an entry exists and is younger than the TTL.
        """
        age = self.age(key)
        return age is not None and age < self.ttl

    def keys(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
