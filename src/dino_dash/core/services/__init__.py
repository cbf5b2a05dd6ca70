"""
Core services exports.

Provides the event system and configuration loading. The pygame-backed
InputManager is imported from its own module by the frame driver.
"""

from dino_dash.core.services.config_manager import GameConfig, load_config, load_game_config
from dino_dash.core.services.event_manager import (
    EventManager,
    BaseEvent,
    RunEndedEvent,
    ObstacleSpawnedEvent,
    ScoresChangedEvent,
)

__all__ = [
    # Config
    'GameConfig',
    'load_config',
    'load_game_config',
    # Events
    'EventManager',
    'BaseEvent',
    'RunEndedEvent',
    'ObstacleSpawnedEvent',
    'ScoresChangedEvent',
]
