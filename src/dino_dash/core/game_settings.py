"""
game_settings.py
----------------
Centralized default configuration for the runner simulation and score layer.

Values here are the built-in defaults. A JSON override file can replace any of
them at startup (see config_manager.load_game_config).
"""


# ===========================================================
# Display & Timing
# ===========================================================
class Display:
    WIDTH = 960
    HEIGHT = 540
    FPS = 60
    CAPTION = "Dino Dash"


class Physics:
    REFERENCE_FPS = 60  # Hz, the frame rate all per-frame constants assume
    TARGET_FRAME_MS = 1000 / REFERENCE_FPS
    MAX_TIME_SCALE = 2.0  # Catch-up cap after a frame hitch
    GRAVITY = 0.8  # px/frame^2
    JUMP_IMPULSE = -15.0  # px/frame, negative is up


# ===========================================================
# Entities
# ===========================================================
class Dino:
    X = 50
    SPRITE_SIZE = 50
    HITBOX_WIDTH = 35  # Narrower than the sprite
    HITBOX_HEIGHT = 50
    GROUND_OFFSET = 200  # Ground line sits this far above the bottom edge


class Obstacles:
    WIDTH = 30
    HEIGHT = 50
    SPEED = 5.0  # px/frame
    SPAWN_CHANCE = 0.02  # per reference frame
    MAX_CONCURRENT = 3


# ===========================================================
# Scoring & Persistence
# ===========================================================
class Scoring:
    INTERVAL_MS = 100  # 1 point per 100 ms alive
    MAX_TOP_SCORES = 5
    MIN_SCORE_TO_SAVE = 1
    TARGET_STEP = 100  # Added to the best score once it is beaten


class Storage:
    DATA_FILE = "dino_dash_scores.json"
    CACHE_TTL_MS = 5 * 60 * 1000

    TOP_SCORES_KEY = "@dino_dash_top_scores"
    HIGHEST_SCORE_KEY = "@dino_dash_highest_score"
    SCORE_STATS_KEY = "@dino_dash_score_stats"

    SCORE_KEYS = (TOP_SCORES_KEY, HIGHEST_SCORE_KEY, SCORE_STATS_KEY)


CONFIG_FILE = "dino_dash.json"
