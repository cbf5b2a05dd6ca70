"""
test_score_store.py
-------------------
Unit tests for the cached ScoreStore.

Responsibilities
----------------
- Verify read-through caching and fixed-window expiry.
- Ensure corrupt or unreadable data reads as absent and is not cached.
- Validate typed StorageError on failed writes and deletes.
- Check best-effort multi-key clear and cache invalidation.
"""

import asyncio

import pytest

from dino_dash.core.errors import StorageError
from dino_dash.core.game_settings import Storage
from dino_dash.scores.score_models import Score, ScoreStats
from dino_dash.scores.score_store import ScoreStore
from dino_dash.scores.storage_backend import MemoryBackend


FIVE_MINUTES = 5 * 60 * 1000


class FailingBackend(MemoryBackend):
    """MemoryBackend that raises OSError for selected operations/keys."""

    def __init__(self, initial=None, fail_reads=False, fail_writes=False, fail_removes=()):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.fail_removes = set(fail_removes)

    async def get_item(self, key):
        if self.fail_reads:
            raise OSError("disk unavailable")
        return await super().get_item(key)

    async def set_item(self, key, value):
        if self.fail_writes:
            raise OSError("disk full")
        await super().set_item(key, value)

    async def remove_item(self, key):
        if key in self.fail_removes:
            raise OSError("read-only")
        await super().remove_item(key)


# ===========================================================
# Read-Through Cache
# ===========================================================

class TestCache:

    def test_second_read_within_window_skips_backend(self, clock):
        backend = MemoryBackend({"k": '{"a": [1, 2]}'})
        store = ScoreStore(backend, clock=clock)

        first = asyncio.run(store.get("k"))
        clock.advance(FIVE_MINUTES - 1)
        second = asyncio.run(store.get("k"))

        assert first == {"a": [1, 2]}
        assert second is first
        assert backend.read_count == 1

    def test_read_after_window_hits_backend_again(self, clock):
        backend = MemoryBackend({"k": "7"})
        store = ScoreStore(backend, clock=clock)

        asyncio.run(store.get("k"))
        clock.advance(FIVE_MINUTES)
        asyncio.run(store.get("k"))

        assert backend.read_count == 2

    def test_reads_do_not_extend_expiry(self, clock):
        backend = MemoryBackend({"k": "7"})
        store = ScoreStore(backend, clock=clock)

        asyncio.run(store.get("k"))
        clock.advance(FIVE_MINUTES - 10)
        asyncio.run(store.get("k"))
        clock.advance(10)
        asyncio.run(store.get("k"))

        assert backend.read_count == 2

    def test_put_populates_cache(self, store, backend):
        asyncio.run(store.put("k", {"v": 1}))

        assert asyncio.run(store.get("k")) == {"v": 1}
        assert backend.read_count == 0

    def test_invalidate_all_keeps_durable_data(self, store, backend):
        asyncio.run(store.put("k", 3))
        store.invalidate_all()

        assert store.get_cache_stats()["size"] == 0
        assert asyncio.run(store.get("k")) == 3
        assert backend.read_count == 1

    def test_missing_key_reads_none(self, store):
        assert asyncio.run(store.get("nothing")) is None


# ===========================================================
# Soft Read Failures
# ===========================================================

def test_corrupt_json_reads_as_absent_and_is_not_cached(clock):
    backend = MemoryBackend({"k": "{not json"})
    store = ScoreStore(backend, clock=clock)

    assert asyncio.run(store.get("k")) is None
    assert store.get_cache_stats()["size"] == 0

    asyncio.run(store.get("k"))
    assert backend.read_count == 2


def test_backend_read_error_reads_as_absent(clock):
    store = ScoreStore(FailingBackend({"k": "1"}, fail_reads=True), clock=clock)

    assert asyncio.run(store.get("k")) is None


def test_malformed_top_scores_read_as_empty(clock):
    backend = MemoryBackend({Storage.TOP_SCORES_KEY: '[{"value": 5}]'})
    store = ScoreStore(backend, clock=clock)

    assert asyncio.run(store.get_top_scores()) == []


# ===========================================================
# Write Failures
# ===========================================================

def test_failed_write_raises_and_keeps_old_cache(clock):
    backend = FailingBackend()
    store = ScoreStore(backend, clock=clock)
    asyncio.run(store.put("k", 1))
    backend.fail_writes = True

    with pytest.raises(StorageError) as exc_info:
        asyncio.run(store.put("k", 2))

    assert exc_info.value.operation == "write"
    assert exc_info.value.keys == ("k",)
    assert asyncio.run(store.get("k")) == 1


def test_unserializable_value_raises(store):
    with pytest.raises(StorageError) as exc_info:
        asyncio.run(store.put("k", object()))

    assert exc_info.value.operation == "serialize"


# ===========================================================
# Clear
# ===========================================================

def test_clear_removes_keys_and_cache(store, backend):
    for key in Storage.SCORE_KEYS:
        asyncio.run(store.put(key, 1))

    asyncio.run(store.clear_all_score_data())

    assert asyncio.run(backend.get_all_keys()) == []
    assert store.get_cache_stats()["size"] == 0


def test_partial_clear_failure_still_invalidates_cache(clock):
    backend = FailingBackend(fail_removes={Storage.HIGHEST_SCORE_KEY})
    store = ScoreStore(backend, clock=clock)
    for key in Storage.SCORE_KEYS:
        asyncio.run(store.put(key, 1))

    with pytest.raises(StorageError) as exc_info:
        asyncio.run(store.clear_all_score_data())

    assert exc_info.value.operation == "delete"
    assert exc_info.value.keys == (Storage.HIGHEST_SCORE_KEY,)
    assert store.get_cache_stats()["size"] == 0
    assert asyncio.run(backend.get_all_keys()) == [Storage.HIGHEST_SCORE_KEY]


# ===========================================================
# Typed Accessors & Diagnostics
# ===========================================================

def test_typed_accessors_use_saved_layout(store, backend):
    scores = [Score("a", 90, 1), Score("b", 70, 2)]
    stats = ScoreStats(90, 80, 2, 2)

    asyncio.run(store.save_top_scores(scores))
    asyncio.run(store.save_highest_score(90))
    asyncio.run(store.save_score_stats(stats))
    store.invalidate_all()

    assert asyncio.run(store.get_top_scores()) == scores
    assert asyncio.run(store.get_highest_score()) == 90
    assert asyncio.run(store.get_score_stats()) == stats

    raw = asyncio.run(backend.get_item(Storage.SCORE_STATS_KEY))
    assert '"highestScore": 90' in raw


def test_defaults_when_empty(store):
    assert asyncio.run(store.get_top_scores()) == []
    assert asyncio.run(store.get_highest_score()) == 0
    assert asyncio.run(store.get_score_stats()) is None


def test_force_refresh_reads_raw_values(store):
    asyncio.run(store.save_highest_score(12))

    result = asyncio.run(store.force_refresh())

    assert result["all_keys"] == [Storage.HIGHEST_SCORE_KEY]
    assert result["results"][Storage.HIGHEST_SCORE_KEY] == "12"
    assert result["results"][Storage.TOP_SCORES_KEY] is None
    assert store.get_cache_stats()["size"] == 0


def test_storage_size_counts_bytes(store):
    asyncio.run(store.put("a", "xyz"))
    asyncio.run(store.put("b", 10))

    assert asyncio.run(store.get_storage_size()) == len('"xyz"') + len("10")


def test_cache_hit_rate(store):
    asyncio.run(store.put("k", 1))
    asyncio.run(store.get("k"))
    asyncio.run(store.get("missing"))

    assert store.get_cache_hit_rate() == pytest.approx(0.5)
