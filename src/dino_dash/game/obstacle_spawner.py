"""
obstacle_spawner.py
-------------------
Moves, culls and spawns the obstacle stream.

Responsibilities
----------------
- Scroll every obstacle left at a constant world speed.
- Remove obstacles once they are fully past the left edge.
- Roll for a new obstacle at the right edge each frame, up to a cap.

Obstacle order is spawn order and is never rearranged, only filtered.
The random source is injected so tests can force or suppress spawns.
"""

import random
from typing import Optional, Tuple

from dino_dash.core.debug.debug_logger import DebugLogger
from dino_dash.core.services.event_manager import ObstacleSpawnedEvent
from dino_dash.game.simulation_state import Obstacle


class ObstacleSpawner:
    """Owns obstacle movement and spawn rolls for the game loop."""

    def __init__(self, config, rng: Optional[random.Random] = None, events=None):
        """
        Args:
            config: GameConfig with obstacle size, speed and spawn policy
            rng: Source of uniform draws in [0, 1); defaults to a fresh Random
            events: Optional EventManager notified of each spawn
        """
        self.config = config
        self.rng = rng or random.Random()
        self.events = events
        self.total_spawned = 0

    # ===========================================================
    # Movement
    # ===========================================================
    def step(self, obstacles: Tuple[Obstacle, ...], scale: float) -> Tuple[Obstacle, ...]:
        """Scroll obstacles left and drop those whose right edge passed x=0."""
        if scale <= 0:
            return tuple(obstacles)

        dx = self.config.obstacle_speed * scale
        moved = (
            Obstacle(o.x - dx, o.y, o.width, o.height)
            for o in obstacles
        )
        return tuple(o for o in moved if o.right > 0)

    # ===========================================================
    # Spawning
    # ===========================================================
    def maybe_spawn(self, obstacles: Tuple[Obstacle, ...], scale: float) -> Tuple[Obstacle, ...]:
        """
        Roll once and append a new obstacle at the right edge on success.

        The chance scales with the time step so spawn density per second is
        frame-rate independent.
        """
        roll = self.rng.random()
        if roll >= self.config.spawn_chance * scale:
            return obstacles
        if len(obstacles) >= self.config.max_obstacles:
            return obstacles

        obstacle = Obstacle(
            x=self.config.screen_width,
            y=self.config.ground_y,
            width=self.config.obstacle_width,
            height=self.config.obstacle_height,
        )
        self.total_spawned += 1
        DebugLogger.trace(f"Spawned obstacle #{self.total_spawned}", category="spawn")

        if self.events:
            self.events.dispatch(ObstacleSpawnedEvent(obstacle))

        return obstacles + (obstacle,)
