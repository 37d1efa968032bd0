from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterable, Optional

from translation_seo.adapters.db_sqlite_trends import TrendStore
from translation_seo.config import DEFAULT_CACHE_CAPACITY
from translation_seo.domain import ScoreKey, ScoreRecord

LOGGER = logging.getLogger(__name__)

FetchFn = Callable[[ScoreKey], Awaitable[float]]


@dataclass
class CacheStats:
    memory_hits: int = 0
    store_hits: int = 0
    fetches: int = 0


class TrendCache:
    """
    In-memory LRU of trend scores in front of a `TrendStore`.

    Concurrent lookups of a key that is not cached share a single load task,
    so the upstream fetch runs at most once per key. A failed load is not
    remembered; the next lookup starts over.
    """

    def __init__(self, store: TrendStore, *, capacity: int = DEFAULT_CACHE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._store = store
        self._capacity = capacity
        self._entries: "OrderedDict[ScoreKey, float]" = OrderedDict()
        self._inflight: Dict[ScoreKey, "asyncio.Task[float]"] = {}
        self.stats = CacheStats()

    @classmethod
    def from_store(cls, store: TrendStore, *, capacity: int = DEFAULT_CACHE_CAPACITY) -> "TrendCache":
        cache = cls(store, capacity=capacity)
        loaded = cache.prime(store.load_all())
        LOGGER.info("primed trend cache with %d scores from %s", loaded, store.path)
        return cache

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def prime(self, records: Iterable[ScoreRecord]) -> int:
        """Seed memory from stored records; the first record for a key wins."""
        count = 0
        for record in records:
            if record.key in self._entries:
                continue
            self._insert(record.key, record.score)
            count += 1
        return count

    def peek(self, key: ScoreKey) -> Optional[float]:
        value = self._entries.get(key)
        if value is not None:
            self._entries.move_to_end(key)
        return value

    def in_flight(self, key: ScoreKey) -> bool:
        return key in self._inflight

    def _insert(self, key: ScoreKey, score: float) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
            return
        self._entries[key] = score
        while len(self._entries) > self._capacity:
            self._entries.popitem(last=False)

    async def get_or_fetch(self, key: ScoreKey, fetch_fn: FetchFn) -> float:
        value = self.peek(key)
        if value is not None:
            self.stats.memory_hits += 1
            return value

        # reserve-or-join: nothing between the lookup and the insert yields
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, fetch_fn))
            self._inflight[key] = task
        return await asyncio.shield(task)

    async def _load(self, key: ScoreKey, fetch_fn: FetchFn) -> float:
        try:
            record = await self._store.aget(key)
            if record is not None:
                self.stats.store_hits += 1
                self._insert(key, record.score)
                return record.score

            self.stats.fetches += 1
            score = float(await fetch_fn(key))
            await self._store.aput(ScoreRecord(key=key, score=score))
            self._insert(key, score)
            return score
        finally:
            self._inflight.pop(key, None)


__all__ = ["CacheStats", "FetchFn", "TrendCache"]
