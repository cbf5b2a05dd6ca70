"""
config_manager.py
-----------------
Configuration loader for the runner and score settings.

Features:
- Loads .json override files from a small set of search directories
- Recursively merges overrides over the built-in defaults
- Ignores '_notes' keys for human-readable configs
- Builds the immutable GameConfig consumed by the simulation and score layer
"""

import os
import json
from dataclasses import dataclass

from dino_dash.core import game_settings as gs
from dino_dash.core.debug.debug_logger import DebugLogger


# ===========================================================
# Configuration
# ===========================================================

SEARCH_DIRS = [
    ".",
    "config",
]


# ===========================================================
# Public API
# ===========================================================

def load_config(filename, default_dict=None, strict=False):
    """
    Load a JSON configuration file merged over defaults.

    Args:
        filename: Filename or full path
        default_dict: Default fallback config
        strict: If True, raise exception on missing or unreadable file

    Returns:
        dict: Merged configuration
    """
    if default_dict is None:
        default_dict = {}

    path = _resolve_search_path(filename)

    try:
        data = _load_json(path)
        return _merge_dicts(default_dict, data)

    except (json.JSONDecodeError, FileNotFoundError, IOError) as e:
        if strict:
            raise FileNotFoundError(f"Config not found: {filename}") from e
        DebugLogger.warn(f"Failed to load {path}: {e} - using defaults", category="loading")
        return _merge_dicts(default_dict, {})


def default_config_dict():
    """Nested dict view of game_settings, the base every override merges onto."""
    return {
        "display": {
            "width": gs.Display.WIDTH,
            "height": gs.Display.HEIGHT,
            "fps": gs.Display.FPS,
        },
        "physics": {
            "reference_fps": gs.Physics.REFERENCE_FPS,
            "max_time_scale": gs.Physics.MAX_TIME_SCALE,
            "gravity": gs.Physics.GRAVITY,
            "jump_impulse": gs.Physics.JUMP_IMPULSE,
        },
        "dino": {
            "x": gs.Dino.X,
            "sprite_size": gs.Dino.SPRITE_SIZE,
            "hitbox_width": gs.Dino.HITBOX_WIDTH,
            "hitbox_height": gs.Dino.HITBOX_HEIGHT,
            "ground_offset": gs.Dino.GROUND_OFFSET,
        },
        "obstacles": {
            "width": gs.Obstacles.WIDTH,
            "height": gs.Obstacles.HEIGHT,
            "speed": gs.Obstacles.SPEED,
            "spawn_chance": gs.Obstacles.SPAWN_CHANCE,
            "max_concurrent": gs.Obstacles.MAX_CONCURRENT,
        },
        "scoring": {
            "interval_ms": gs.Scoring.INTERVAL_MS,
            "max_top_scores": gs.Scoring.MAX_TOP_SCORES,
            "min_score_to_save": gs.Scoring.MIN_SCORE_TO_SAVE,
            "target_step": gs.Scoring.TARGET_STEP,
        },
        "storage": {
            "data_file": gs.Storage.DATA_FILE,
            "cache_ttl_ms": gs.Storage.CACHE_TTL_MS,
        },
    }


def load_game_config(filename=gs.CONFIG_FILE, strict=False):
    """
    Build a GameConfig from defaults plus an optional override file.

    Args:
        filename: Override file name (searched in SEARCH_DIRS) or path
        strict: Raise if the file is missing instead of using defaults

    Returns:
        GameConfig
    """
    defaults = default_config_dict()
    if not strict and not os.path.exists(_resolve_search_path(filename)):
        DebugLogger.system(f"No {filename} found, using built-in settings", category="loading")
        return GameConfig.from_dict(defaults)
    return GameConfig.from_dict(load_config(filename, defaults, strict=strict))


# ===========================================================
# Game Config
# ===========================================================

@dataclass(frozen=True)
class GameConfig:
    """Flattened, immutable settings shared by the game loop and score layer."""

    # Display
    screen_width: float = gs.Display.WIDTH
    screen_height: float = gs.Display.HEIGHT
    fps: int = gs.Display.FPS

    # Physics
    target_frame_ms: float = gs.Physics.TARGET_FRAME_MS
    max_time_scale: float = gs.Physics.MAX_TIME_SCALE
    gravity: float = gs.Physics.GRAVITY
    jump_impulse: float = gs.Physics.JUMP_IMPULSE

    # Dino
    dino_x: float = gs.Dino.X
    sprite_size: float = gs.Dino.SPRITE_SIZE
    hitbox_width: float = gs.Dino.HITBOX_WIDTH
    hitbox_height: float = gs.Dino.HITBOX_HEIGHT
    ground_y: float = gs.Display.HEIGHT - gs.Dino.GROUND_OFFSET

    # Obstacles
    obstacle_width: float = gs.Obstacles.WIDTH
    obstacle_height: float = gs.Obstacles.HEIGHT
    obstacle_speed: float = gs.Obstacles.SPEED
    spawn_chance: float = gs.Obstacles.SPAWN_CHANCE
    max_obstacles: int = gs.Obstacles.MAX_CONCURRENT

    # Scoring
    score_interval_ms: int = gs.Scoring.INTERVAL_MS
    max_top_scores: int = gs.Scoring.MAX_TOP_SCORES
    min_score_to_save: int = gs.Scoring.MIN_SCORE_TO_SAVE
    target_step: int = gs.Scoring.TARGET_STEP

    # Storage
    data_file: str = gs.Storage.DATA_FILE
    cache_ttl_ms: int = gs.Storage.CACHE_TTL_MS

    @classmethod
    def from_dict(cls, data):
        """
        Build from the nested layout produced by default_config_dict().

        Missing sections or keys fall back to the built-in defaults.
        """
        data = _merge_dicts(default_config_dict(), data or {})
        display = data["display"]
        physics = data["physics"]
        dino = data["dino"]
        obstacles = data["obstacles"]
        scoring = data["scoring"]
        storage = data["storage"]

        return cls(
            screen_width=float(display["width"]),
            screen_height=float(display["height"]),
            fps=int(display["fps"]),
            target_frame_ms=1000 / float(physics["reference_fps"]),
            max_time_scale=float(physics["max_time_scale"]),
            gravity=float(physics["gravity"]),
            jump_impulse=float(physics["jump_impulse"]),
            dino_x=float(dino["x"]),
            sprite_size=float(dino["sprite_size"]),
            hitbox_width=float(dino["hitbox_width"]),
            hitbox_height=float(dino["hitbox_height"]),
            ground_y=float(display["height"]) - float(dino["ground_offset"]),
            obstacle_width=float(obstacles["width"]),
            obstacle_height=float(obstacles["height"]),
            obstacle_speed=float(obstacles["speed"]),
            spawn_chance=float(obstacles["spawn_chance"]),
            max_obstacles=int(obstacles["max_concurrent"]),
            score_interval_ms=int(scoring["interval_ms"]),
            max_top_scores=int(scoring["max_top_scores"]),
            min_score_to_save=int(scoring["min_score_to_save"]),
            target_step=int(scoring["target_step"]),
            data_file=str(storage["data_file"]),
            cache_ttl_ms=int(storage["cache_ttl_ms"]),
        )


# ===========================================================
# Path Resolution
# ===========================================================

def _resolve_search_path(filename):
    """Return the first existing match in SEARCH_DIRS, else the name as given."""
    if os.path.isabs(filename):
        return filename

    filename = filename.replace("\\", "/").lstrip("/")
    for directory in SEARCH_DIRS:
        candidate = os.path.join(directory, filename)
        if os.path.exists(candidate):
            return candidate
    return filename


# ===========================================================
# File Loaders
# ===========================================================

def _load_json(path):
    """Load JSON config file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    DebugLogger.system(f"Loaded {os.path.basename(path)}", category="loading")
    return data


# ===========================================================
# Merge Utilities
# ===========================================================

def _merge_dicts(default, override):
    """Recursively merge two dicts. Ignores '_notes' keys."""
    merged = {}
    for key, value in default.items():
        merged[key] = _merge_dicts(value, {}) if isinstance(value, dict) else value
    for key, value in override.items():
        if key == "_notes":
            continue
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
