"""
score_context.py
----------------
Coordinates run results, the ScoreService and presentation state.

Responsibilities
----------------
- Hold the leaderboard, best score, stats, loading flag and last error.
- Apply every change through score_reducer, a pure transition per action.
- Submit finished runs without blocking the frame loop.
- Refresh board, best score and stats together after each change.

State is eventually consistent: a reader right after a submission may see
the previous board until the refresh completes. Nothing is retried.
"""

import asyncio
import dataclasses
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Set, Tuple, Type

from dino_dash.core.debug.debug_logger import DebugLogger
from dino_dash.core.game_settings import Scoring
from dino_dash.core.services.event_manager import RunEndedEvent, ScoresChangedEvent
from dino_dash.scores.score_models import Score, ScoreStats
from dino_dash.scores.score_service import next_target_score, rank_scores


# ===========================================================
# State
# ===========================================================

@dataclass(frozen=True)
class ScoreContextState:
    top_scores: Tuple[Score, ...] = ()
    highest_score: int = 0
    score_stats: Optional[ScoreStats] = None
    is_loading: bool = False
    error: Optional[str] = None
    max_top_scores: int = Scoring.MAX_TOP_SCORES


INITIAL_STATE = ScoreContextState()


# ===========================================================
# Actions
# ===========================================================

@dataclass(frozen=True)
class SetLoading:
    is_loading: bool


@dataclass(frozen=True)
class SetError:
    error: Optional[str]


@dataclass(frozen=True)
class SetTopScores:
    top_scores: Tuple[Score, ...]


@dataclass(frozen=True)
class SetHighestScore:
    highest_score: int


@dataclass(frozen=True)
class SetScoreStats:
    score_stats: Optional[ScoreStats]


@dataclass(frozen=True)
class AddScore:
    score: Score


@dataclass(frozen=True)
class ClearScores:
    pass


# ===========================================================
# Transitions
# ===========================================================

def _set_loading(state, action):
    return dataclasses.replace(state, is_loading=action.is_loading)


def _set_error(state, action):
    return dataclasses.replace(state, error=action.error, is_loading=False)


def _set_top_scores(state, action):
    return dataclasses.replace(state, top_scores=tuple(action.top_scores))


def _set_highest_score(state, action):
    return dataclasses.replace(state, highest_score=action.highest_score)


def _set_score_stats(state, action):
    return dataclasses.replace(state, score_stats=action.score_stats)


def _add_score(state, action):
    board = rank_scores(state.top_scores, action.score, state.max_top_scores)
    return dataclasses.replace(
        state,
        top_scores=tuple(board),
        highest_score=max(state.highest_score, action.score.value),
    )


def _clear_scores(state, action):
    return dataclasses.replace(state, top_scores=(), highest_score=0, score_stats=None)


TRANSITIONS: Dict[Type, Callable] = {
    SetLoading: _set_loading,
    SetError: _set_error,
    SetTopScores: _set_top_scores,
    SetHighestScore: _set_highest_score,
    SetScoreStats: _set_score_stats,
    AddScore: _add_score,
    ClearScores: _clear_scores,
}


def score_reducer(state: ScoreContextState, action) -> ScoreContextState:
    """Pure state transition. Unknown actions leave the state unchanged."""
    transition = TRANSITIONS.get(type(action))
    if transition is None:
        return state
    return transition(state, action)


# ===========================================================
# Score Context
# ===========================================================

class ScoreContext:
    """Orchestration layer between the game loop, ScoreService and UI."""

    # ===========================================================
    # Initialization
    # ===========================================================
    def __init__(self, service, events=None):
        """
        Args:
            service: ScoreService performing all persistence
            events: Optional EventManager; RunEndedEvent triggers a submission
                and every state change is announced as ScoresChangedEvent
        """
        self.service = service
        self.events = events
        self._state = dataclasses.replace(INITIAL_STATE, max_top_scores=service.max_top_scores)
        self._pending: Set[asyncio.Task] = set()

        if self.events:
            self.events.subscribe(RunEndedEvent, self._on_run_ended)

    @property
    def state(self) -> ScoreContextState:
        return self._state

    def dispatch(self, action) -> ScoreContextState:
        self._state = score_reducer(self._state, action)
        if self.events:
            self.events.dispatch(ScoresChangedEvent(self._state))
        return self._state

    def close(self) -> None:
        """Stop listening for run results."""
        if self.events:
            self.events.unsubscribe(RunEndedEvent, self._on_run_ended)

    # ===========================================================
    # Operations
    # ===========================================================
    async def load_initial_data(self) -> None:
        await self._refresh("Failed to load scores")

    async def refresh_scores(self) -> None:
        await self._refresh("Failed to refresh scores")

    async def add_score(self, value) -> bool:
        """
        Submit a score and refresh the board.

        Returns:
            True for a new high score; False when rejected or on failure.
        """
        try:
            self.dispatch(SetLoading(True))
            is_new_high = await self.service.submit_score(value)
            await self._fetch_all()
            self.dispatch(SetLoading(False))
            return is_new_high
        except Exception as e:
            DebugLogger.fail(f"Error adding score: {e}", category="context")
            self.dispatch(SetError("Failed to save score"))
            return False

    async def clear_scores(self) -> None:
        try:
            self.dispatch(SetLoading(True))
            await self.service.clear_all_scores()
            self.dispatch(ClearScores())
            self.dispatch(SetLoading(False))
        except Exception as e:
            DebugLogger.fail(f"Error clearing scores: {e}", category="context")
            self.dispatch(SetError("Failed to clear scores"))

    async def force_refresh_data(self) -> None:
        """Drop the store cache, re-read durable storage, then refresh."""
        try:
            self.dispatch(SetLoading(True))
            await self.service.store.force_refresh()
            await self._fetch_all()
            self.dispatch(SetLoading(False))
        except Exception as e:
            DebugLogger.fail(f"Error force refreshing data: {e}", category="context")
            self.dispatch(SetError("Failed to refresh scores"))

    def get_next_target_score(self, current_score: int) -> int:
        """Synchronous target lookup over the board currently held in state."""
        return next_target_score(self._state.top_scores, current_score, self.service.target_step)

    # ===========================================================
    # Run Results
    # ===========================================================
    def _on_run_ended(self, event: RunEndedEvent) -> None:
        """Schedule the submission on the running loop; never blocks the frame."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            DebugLogger.warn(
                f"No running event loop, score {event.final_score} not saved",
                category="context"
            )
            return

        task = loop.create_task(self.add_score(event.final_score))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def wait_pending(self) -> None:
        """Wait for every scheduled submission to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # ===========================================================
    # Internal
    # ===========================================================
    async def _refresh(self, error_message: str) -> None:
        try:
            self.dispatch(SetLoading(True))
            await self._fetch_all()
            self.dispatch(SetLoading(False))
        except Exception as e:
            DebugLogger.fail(f"{error_message}: {e}", category="context")
            self.dispatch(SetError(error_message))

    async def _fetch_all(self) -> None:
        """Read board, best score and stats concurrently, then apply them."""
        top_scores, highest_score, score_stats = await asyncio.gather(
            self.service.get_top_scores(),
            self.service.get_highest_score(),
            self.service.get_score_stats(),
        )
        self.dispatch(SetTopScores(tuple(top_scores)))
        self.dispatch(SetHighestScore(highest_score))
        self.dispatch(SetScoreStats(score_stats))
