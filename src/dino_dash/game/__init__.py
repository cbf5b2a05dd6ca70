"""
src/dino_dash/game/__init__.py
------------------------------
Simulation exports.

Exports:
    GameLoop         - Per-frame state transition
    SimulationState  - Immutable snapshot of one run
    Obstacle         - Obstacle box data
"""

from dino_dash.game.game_loop import GameLoop
from dino_dash.game.simulation_state import Obstacle, SimulationState

__all__ = [
    'GameLoop',
    'SimulationState',
    'Obstacle',
]
