"""
score_store.py
--------------
Durable key/value persistence with an in-process read-through cache.

Responsibilities
----------------
- Encode values as JSON and write them through a storage backend.
- Serve reads from a time-bounded cache, falling back to the backend.
- Treat unreadable or undecodable data as absent instead of failing.
- Raise StorageError when a write or delete does not reach the backend.

Cache entries expire a fixed time after they were written or refreshed; reads
do not extend their lifetime. Only this class touches the backend.
"""

import asyncio
import json
from typing import Any, Callable, Dict, Iterable, List, Optional

from dino_dash.core.debug.debug_logger import DebugLogger
from dino_dash.core.errors import StorageError
from dino_dash.core.game_settings import Storage
from dino_dash.core.timing import epoch_millis
from dino_dash.scores.score_models import CacheEntry, Score, ScoreStats


class ScoreStore:
    """Cached async key/value store for score data."""

    # ===========================================================
    # Initialization
    # ===========================================================
    def __init__(self, backend, clock: Optional[Callable[[], int]] = None,
                 cache_ttl_ms: int = Storage.CACHE_TTL_MS):
        """
        Args:
            backend: Object with async get_item/set_item/remove_item/get_all_keys
            clock: Returns epoch milliseconds; drives cache expiry
            cache_ttl_ms: How long a cache entry stays valid
        """
        self.backend = backend
        self.clock = clock or epoch_millis
        self.cache_ttl_ms = cache_ttl_ms
        self._cache: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    # ===========================================================
    # Core Key/Value API
    # ===========================================================
    async def put(self, key: str, value: Any) -> None:
        """
        Serialize and persist a value, then cache it.

        Raises:
            StorageError: if the value is not JSON-serializable or the write fails
        """
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            DebugLogger.fail(f"Cannot serialize {key}: {e}", category="storage")
            raise StorageError("serialize", [key]) from e

        try:
            await self.backend.set_item(key, raw)
        except OSError as e:
            DebugLogger.fail(f"Error saving {key}: {e}", category="storage")
            raise StorageError("write", [key]) from e

        DebugLogger.trace(f"Saved {key} ({len(raw)} bytes)", category="storage")
        self._cache[key] = CacheEntry(data=json.loads(raw), timestamp=self.clock())

    async def get(self, key: str) -> Optional[Any]:
        """
        Read a value, preferring a fresh cache entry.

        Returns:
            The decoded value, or None if it is missing, unreadable or corrupt.
        """
        now = self.clock()
        cached = self._cache.get(key)
        if cached and cached.is_fresh(now, self.cache_ttl_ms):
            self._hits += 1
            DebugLogger.trace(f"Cache hit for {key}", category="storage")
            return cached.data

        self._misses += 1
        try:
            raw = await self.backend.get_item(key)
        except (OSError, ValueError) as e:
            DebugLogger.warn(f"Error reading {key}: {e}", category="storage")
            return None

        if raw is None:
            DebugLogger.trace(f"No data found for {key}", category="storage")
            return None

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            DebugLogger.warn(f"JSON parse error for {key}: {e}", category="storage")
            return None

        self._cache[key] = CacheEntry(data=data, timestamp=now)
        return data

    def invalidate_all(self) -> None:
        """Drop every cache entry. Durable data is untouched."""
        self._cache.clear()

    async def clear(self, keys: Iterable[str]) -> None:
        """
        Delete keys from durable storage, attempting every key.

        Not atomic: keys deleted before a failure stay deleted. The cache is
        invalidated whatever the outcome.

        Raises:
            StorageError: listing every key whose delete failed
        """
        keys = list(keys)
        results = await asyncio.gather(
            *(self.backend.remove_item(key) for key in keys),
            return_exceptions=True,
        )
        self.invalidate_all()

        failed = []
        for key, result in zip(keys, results):
            if isinstance(result, OSError):
                DebugLogger.fail(f"Error deleting {key}: {result}", category="storage")
                failed.append(key)
            elif isinstance(result, BaseException):
                raise result

        if failed:
            raise StorageError("delete", failed)
        DebugLogger.system(f"Cleared {len(keys)} keys", category="storage")

    # ===========================================================
    # Score Accessors
    # ===========================================================
    async def save_top_scores(self, scores: Iterable[Score]) -> None:
        await self.put(Storage.TOP_SCORES_KEY, [s.to_dict() for s in scores])

    async def get_top_scores(self) -> List[Score]:
        data = await self.get(Storage.TOP_SCORES_KEY)
        if not data:
            return []
        try:
            return [Score.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            DebugLogger.warn(f"Malformed top scores ({e}), ignoring", category="storage")
            return []

    async def save_highest_score(self, value: int) -> None:
        await self.put(Storage.HIGHEST_SCORE_KEY, int(value))

    async def get_highest_score(self) -> int:
        data = await self.get(Storage.HIGHEST_SCORE_KEY)
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            return 0
        return int(data)

    async def save_score_stats(self, stats: ScoreStats) -> None:
        await self.put(Storage.SCORE_STATS_KEY, stats.to_dict())

    async def get_score_stats(self) -> Optional[ScoreStats]:
        data = await self.get(Storage.SCORE_STATS_KEY)
        if not isinstance(data, dict):
            return None
        try:
            return ScoreStats.from_dict(data)
        except (TypeError, ValueError) as e:
            DebugLogger.warn(f"Malformed score stats ({e}), ignoring", category="storage")
            return None

    async def clear_all_score_data(self) -> None:
        await self.clear(Storage.SCORE_KEYS)

    # ===========================================================
    # Diagnostics
    # ===========================================================
    def get_cache_stats(self) -> dict:
        return {
            "size": len(self._cache),
            "keys": list(self._cache.keys()),
            "hits": self._hits,
            "misses": self._misses,
        }

    def get_cache_hit_rate(self) -> float:
        total = self._hits + self._misses
        return self._hits / total if total else 0.0

    async def force_refresh(self) -> dict:
        """
        Drop the cache and read every score key raw from the backend.

        Returns:
            {"all_keys": [...], "results": {key: raw string or None}}
        """
        self.invalidate_all()
        all_keys = await self.backend.get_all_keys()
        results = {}
        for key in Storage.SCORE_KEYS:
            results[key] = await self.backend.get_item(key)
        DebugLogger.system(f"Force refresh found {len(all_keys)} stored keys", category="storage")
        return {"all_keys": all_keys, "results": results}

    async def get_storage_size(self) -> int:
        """Total encoded size of all stored values in bytes; 0 if unreadable."""
        try:
            total = 0
            for key in await self.backend.get_all_keys():
                value = await self.backend.get_item(key)
                if value:
                    total += len(value.encode("utf-8"))
            return total
        except OSError as e:
            DebugLogger.warn(f"Error calculating storage size: {e}", category="storage")
            return 0
