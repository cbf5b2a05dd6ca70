"""
collision.py
------------
Axis-aligned bounding box collision between the dino and obstacles.

Responsibilities
----------------
- Build the dino's collision box, narrower than its visual sprite so near
  misses do not end the run.
- Build obstacle boxes from obstacle data.
- Report whether the dino overlaps any obstacle.

Boxes touching along an edge do not collide; overlap must be strictly positive
on both axes.
"""

from dataclasses import dataclass
from typing import Iterable

from dino_dash.core.debug.debug_logger import DebugLogger
from dino_dash.game.simulation_state import Obstacle


@dataclass(frozen=True)
class Hitbox:
    """Rectangular collision boundary."""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> "Hitbox":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def overlaps(self, other: "Hitbox") -> bool:
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )


def player_hitbox(player_y: float, config) -> Hitbox:
    """Collision box of the dino whose top edge is at player_y."""
    return Hitbox.from_rect(config.dino_x, player_y, config.hitbox_width, config.hitbox_height)


def obstacle_hitbox(obstacle: Obstacle) -> Hitbox:
    return Hitbox.from_rect(obstacle.x, obstacle.y, obstacle.width, obstacle.height)


def check_collision(player_y: float, obstacles: Iterable[Obstacle], config) -> bool:
    """
    Check the dino against every obstacle.

    Args:
        player_y: Top edge of the dino
        obstacles: Obstacles to test
        config: GameConfig providing dino position and hitbox size

    Returns:
        True if any obstacle overlaps the dino's hitbox
    """
    dino = player_hitbox(player_y, config)
    for obstacle in obstacles:
        if dino.overlaps(obstacle_hitbox(obstacle)):
            DebugLogger.trace(
                f"Dino hit obstacle at x={obstacle.x:.1f} (dino y={player_y:.1f})",
                category="collision"
            )
            return True
    return False
