"""
Dino Dash: an endless-runner simulation with a local leaderboard.
"""

__version__ = "1.0.0"
