"""
simulation_state.py
-------------------
Plain data snapshots produced by the game loop.

Every tick builds a new SimulationState; nothing here is mutated in place.
Renderers read these fields directly.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Obstacle:
    """An axis-aligned obstacle box in screen coordinates."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class SimulationState:
    """
    Complete state of one run.

    Attributes:
        player_y: Top edge of the dino in screen coordinates (y grows down)
        player_velocity_y: Vertical velocity in px per reference frame
        is_airborne: True while the dino is above the ground line
        obstacles: Live obstacles, in spawn order (left to right)
        score: Points earned so far, derived from elapsed time
        is_terminal: Set once a collision happens; never cleared within a run
        started_at_ms: Wall-clock time the run started
        clock_ms: Wall-clock time of the latest frame of this run
    """
    player_y: float
    player_velocity_y: float = 0.0
    is_airborne: bool = False
    obstacles: Tuple[Obstacle, ...] = field(default_factory=tuple)
    score: int = 0
    is_terminal: bool = False
    started_at_ms: int = 0
    clock_ms: float = 0

    @property
    def elapsed_ms(self) -> float:
        return self.clock_ms - self.started_at_ms
