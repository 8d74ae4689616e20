"""Read-through result cache keyed by normalized URL.

Owned by one ContentPipeline instance. Entries are fresh while
now - stored_at < ttl; stale entries are evicted on read. Results are copied
in and out, so callers may mutate what they get back. Concurrent
writers for the same key are last-writer-wins.
"""

import time
from collections.abc import Callable

from cachetools import TTLCache

from article_pipeline.models.pipeline import CacheEntry, PipelineResult


class ResultCache:
    """TTL cache of PipelineResults with an injectable clock (seconds)."""

    def __init__(
        self,
        ttl: float = 3600.0,
        maxsize: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=clock)

    def get(self, key: str) -> PipelineResult | None:
        entry: CacheEntry | None = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock()):
            self._entries.pop(key, None)
            return None
        return entry.result.model_copy(deep=True)

    def set(self, key: str, result: PipelineResult) -> None:
        self._entries[key] = CacheEntry(result=result.model_copy(deep=True), stored_at=self._clock(), ttl=self.ttl)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> dict:
        """Current size and keys, expired entries excluded."""
        self._entries.expire()
        keys = list(self._entries.keys())
        return {"size": len(keys), "keys": keys}
