"""
score_models.py
---------------
Score records, derived statistics and cache entries.

Scores and stats serialize to the JSON layout used by existing save files
("id"/"value"/"timestamp" and camelCase stat keys), so those keys must not
change between releases.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Score:
    """One finished run. Immutable once created."""
    id: str
    value: int
    timestamp: int

    def to_dict(self) -> dict:
        return {"id": self.id, "value": self.value, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict) -> "Score":
        """
        Build from a persisted record.

        Raises:
            KeyError, TypeError, ValueError: if the record is malformed
        """
        return cls(
            id=str(data["id"]),
            value=int(data["value"]),
            timestamp=int(data["timestamp"]),
        )


@dataclass(frozen=True)
class ScoreStats:
    """Statistics derived from the current leaderboard."""
    highest_score: int = 0
    average_score: int = 0
    total_games: int = 0
    last_played: int = 0

    def to_dict(self) -> dict:
        return {
            "highestScore": self.highest_score,
            "averageScore": self.average_score,
            "totalGames": self.total_games,
            "lastPlayed": self.last_played,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScoreStats":
        return cls(
            highest_score=int(data.get("highestScore", 0)),
            average_score=int(data.get("averageScore", 0)),
            total_games=int(data.get("totalGames", 0)),
            last_played=int(data.get("lastPlayed", 0)),
        )


EMPTY_STATS = ScoreStats()


@dataclass(frozen=True)
class CacheEntry:
    """A cached decoded value and the time it was written or refreshed."""
    data: Any
    timestamp: int
    is_valid: bool = True

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        return self.is_valid and now_ms - self.timestamp < ttl_ms
