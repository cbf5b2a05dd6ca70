"""
Score layer exports.

Provides storage backends, the cached ScoreStore, the ScoreService and the
ScoreContext orchestration layer.
"""

from dino_dash.scores.score_models import Score, ScoreStats
from dino_dash.scores.storage_backend import JsonFileBackend, MemoryBackend
from dino_dash.scores.score_store import ScoreStore
from dino_dash.scores.score_service import ScoreService
from dino_dash.scores.score_context import ScoreContext, ScoreContextState

__all__ = [
    'Score',
    'ScoreStats',
    'JsonFileBackend',
    'MemoryBackend',
    'ScoreStore',
    'ScoreService',
    'ScoreContext',
    'ScoreContextState',
]
