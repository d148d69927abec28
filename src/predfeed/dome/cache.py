"""Bounded-staleness response cache keyed by path + canonical query string."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import structlog

log = structlog.get_logger(__name__)

DEFAULT_TTL_SEC = 30.0


@dataclass
class CacheEntry:
    key: str
    payload: Any
    fetched_at: float


class TTLCache:
    """
    Key -> payload store with a fixed freshness window.

    Expiry is lazy: an entry is dropped when read at or after fetched_at + ttl.
    There is no per-key lock, so two concurrent misses on one key both fetch and
    the later one overwrites the entry.
    """

    def __init__(
        self,
        ttl_sec: float = DEFAULT_TTL_SEC,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_sec = ttl_sec
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def _fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.fetched_at < self.ttl_sec

    def get(self, key: str) -> CacheEntry | None:
        """Return the live entry for key, or None (dropping it if expired)."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._fresh(entry, self._clock()):
            del self._entries[key]
            return None
        return entry

    def put(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(key=key, payload=payload, fetched_at=self._clock())
        self._entries[key] = entry
        return entry

    async def get_or_fetch(self, key: str, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        """Return cached payload if fresh, else await fetcher() and store its result."""
        entry = self.get(key)
        if entry is not None:
            log.debug("cache_hit", key=key)
            return entry.payload
        log.debug("cache_miss", key=key)
        payload = await fetcher()
        self.put(key, payload)
        return payload

    def purge_expired(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        stale = [k for k, e in self._entries.items() if not self._fresh(e, now)]
        for k in stale:
            del self._entries[k]
        return len(stale)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
