"""
score_service.py
----------------
Score admission, ranking and statistics on top of the ScoreStore.

Responsibilities
----------------
- Reject scores below the save threshold without touching storage.
- Keep a descending top-N leaderboard; ties stay in insertion order.
- Track the highest score and recompute stats from the leaderboard.
- Suggest the next score worth chasing during a run.

The ranking helpers at module level are pure and shared with the
ScoreContext, so both layers apply the same policies.
"""

import math
import random
import string
import time
from typing import Callable, Iterable, List, Optional, Sequence

from dino_dash.core.debug.debug_logger import DebugLogger
from dino_dash.core.game_settings import Scoring
from dino_dash.core.timing import epoch_millis
from dino_dash.scores.score_models import EMPTY_STATS, Score, ScoreStats


_ID_ALPHABET = string.digits + string.ascii_lowercase


# ===========================================================
# Ranking Helpers
# ===========================================================

def rank_scores(scores: Iterable[Score], new_score: Score,
                max_size: int = Scoring.MAX_TOP_SCORES) -> List[Score]:
    """Merge a score into a leaderboard: descending by value, stable, truncated."""
    merged = list(scores) + [new_score]
    return sorted(merged, key=lambda s: s.value, reverse=True)[:max_size]


def calculate_score_stats(scores: Sequence[Score]) -> ScoreStats:
    """Stats over a descending leaderboard. Empty board gives all zeros."""
    if not scores:
        return EMPTY_STATS

    total = sum(s.value for s in scores)
    return ScoreStats(
        highest_score=scores[0].value,
        average_score=math.floor(total / len(scores) + 0.5),
        total_games=len(scores),
        last_played=max(s.timestamp for s in scores),
    )


def next_target_score(leaderboard: Sequence[Score], current_score: int,
                      step: int = Scoring.TARGET_STEP) -> int:
    """
    Next value to beat, scanning the board from lowest to highest.

    If nothing on the board is above current_score, the target is the best
    score plus step; with an empty board it is current_score plus step.
    """
    if not leaderboard:
        return current_score + step

    for score in reversed(leaderboard):
        if score.value > current_score:
            return score.value

    return leaderboard[0].value + step


# ===========================================================
# Score Service
# ===========================================================

class ScoreService:
    """Business logic for the local leaderboard."""

    def __init__(self, store, clock: Optional[Callable[[], int]] = None,
                 id_factory: Optional[Callable[[int], str]] = None,
                 max_top_scores: int = Scoring.MAX_TOP_SCORES,
                 min_score_to_save: int = Scoring.MIN_SCORE_TO_SAVE,
                 target_step: int = Scoring.TARGET_STEP):
        """
        Args:
            store: ScoreStore used for all persistence
            clock: Returns epoch milliseconds for score timestamps
            id_factory: Builds a unique score id from a timestamp
            max_top_scores: Leaderboard size
            min_score_to_save: Lowest value that is recorded
            target_step: Margin added to the best score for the next target
        """
        self.store = store
        self.clock = clock or epoch_millis
        self.id_factory = id_factory or self._generate_score_id
        self.max_top_scores = max_top_scores
        self.min_score_to_save = min_score_to_save
        self.target_step = target_step
        self._metrics = self._empty_metrics()

    @classmethod
    def from_config(cls, store, config, clock=None):
        return cls(
            store,
            clock=clock,
            max_top_scores=config.max_top_scores,
            min_score_to_save=config.min_score_to_save,
            target_step=config.target_step,
        )

    # ===========================================================
    # Submission
    # ===========================================================
    async def submit_score(self, value) -> bool:
        """
        Record a finished run.

        Returns:
            True if the board was empty or value beats its previous top entry.
            False for values below the save threshold, which are not stored.

        Raises:
            StorageError: if persisting the board, best score or stats fails
        """
        start = time.perf_counter()

        if value < self.min_score_to_save:
            DebugLogger.trace(f"Score {value} below save threshold", category="score")
            return False

        now = self.clock()
        new_score = Score(id=self.id_factory(now), value=int(math.floor(value)), timestamp=now)

        current = await self.store.get_top_scores()
        is_new_high = not current or new_score.value > current[0].value

        updated = rank_scores(current, new_score, self.max_top_scores)
        await self.store.save_top_scores(updated)

        if is_new_high:
            await self.store.save_highest_score(new_score.value)

        await self.store.save_score_stats(calculate_score_stats(updated))

        self._metrics["save_time_ms"] = (time.perf_counter() - start) * 1000
        DebugLogger.action(
            f"Saved score {new_score.value}" + (" (new high score)" if is_new_high else ""),
            category="score"
        )
        return is_new_high

    async def add_score(self, value) -> bool:
        """Alias of submit_score."""
        return await self.submit_score(value)

    # ===========================================================
    # Queries
    # ===========================================================
    async def get_top_scores(self, limit: Optional[int] = None) -> List[Score]:
        start = time.perf_counter()
        if limit is None:
            limit = self.max_top_scores
        scores = (await self.store.get_top_scores())[:max(limit, 0)]
        self._metrics["load_time_ms"] = (time.perf_counter() - start) * 1000
        return scores

    async def get_highest_score(self) -> int:
        return await self.store.get_highest_score()

    async def get_next_target_score(self, current_score: int) -> int:
        board = await self.get_top_scores()
        return next_target_score(board, current_score, self.target_step)

    async def is_new_high_score(self, value: int) -> bool:
        return value > await self.get_highest_score()

    async def get_score_stats(self) -> ScoreStats:
        """
        Stats recomputed from the current leaderboard, then persisted.

        Previously stored stats are never trusted.
        """
        stats = calculate_score_stats(await self.get_top_scores())
        await self.store.save_score_stats(stats)
        return stats

    # ===========================================================
    # Maintenance
    # ===========================================================
    async def clear_all_scores(self) -> None:
        """
        Delete the leaderboard, best score and stats.

        Raises:
            StorageError: if any key could not be deleted
        """
        await self.store.clear_all_score_data()
        DebugLogger.action("All scores cleared", category="score")

    def clear_cache(self) -> None:
        self.store.invalidate_all()

    def get_cache_stats(self) -> dict:
        return self.store.get_cache_stats()

    # ===========================================================
    # Performance Metrics
    # ===========================================================
    def get_performance_metrics(self) -> dict:
        metrics = dict(self._metrics)
        metrics["cache_hit_rate"] = self.store.get_cache_hit_rate()
        return metrics

    def reset_performance_metrics(self) -> None:
        self._metrics = self._empty_metrics()

    @staticmethod
    def _empty_metrics() -> dict:
        return {"save_time_ms": 0.0, "load_time_ms": 0.0}

    # ===========================================================
    # Helpers
    # ===========================================================
    @staticmethod
    def _generate_score_id(now_ms: int) -> str:
        suffix = "".join(random.choices(_ID_ALPHABET, k=9))
        return f"score_{now_ms}_{suffix}"
