"""
debug_logger.py
---------------
Console diagnostics for the runner and the score layer.

Every message belongs to a category (game_loop, storage, ...) that can be
switched off on its own, and to a severity that is compared against
LoggerConfig.LOG_LEVEL. Lines look like:

    [12:04:31] [storage][WARN] JSON parse error for @dino_dash_top_scores
"""

import sys
from datetime import datetime


# ===========================================================
# Logger Configuration
# ===========================================================

class LoggerConfig:
    """Runtime switches; tests flip ENABLE_LOGGING off."""

    ENABLE_LOGGING = True
    LOG_LEVEL = "INFO"  # NONE, ERROR, WARN, INFO, VERBOSE
    SHOW_TIME = True
    STREAM = None  # None -> sys.stdout at write time

    CATEGORIES = {
        "system": True,
        "loading": False,
        "input": False,
        "event_manager": False,

        "game_loop": True,
        "spawn": False,
        "collision": True,

        "score": True,
        "storage": True,
        "context": True,
    }


# ===========================================================
# Severities
# ===========================================================

RESET = "\033[0m"
WHITE = "\033[97m"

# tag -> (minimum LOG_LEVEL rank, ANSI color)
SEVERITIES = {
    "INIT":   (3, WHITE),
    "SYSTEM": (3, "\033[95m"),
    "STATE":  (3, "\033[96m"),
    "ACTION": (3, "\033[92m"),
    "TRACE":  (4, "\033[94m"),
    "WARN":   (2, "\033[93m"),
    "FAIL":   (1, "\033[91m"),
}

LEVEL_RANKS = {"NONE": 0, "ERROR": 1, "WARN": 2, "INFO": 3, "VERBOSE": 4}

STATUS_COLORS = {"OK": "\033[92m", "LOADING": "\033[96m", "FAIL": "\033[91m"}


class DebugLogger:
    """Static category logger. Nothing here raises."""

    LINE_LENGTH = 59

    # ===========================================================
    # Filtering & Output
    # ===========================================================

    @staticmethod
    def enabled(category: str, tag: str = "SYSTEM") -> bool:
        if not LoggerConfig.ENABLE_LOGGING:
            return False
        if not LoggerConfig.CATEGORIES.get(category, False):
            return False
        rank, _ = SEVERITIES[tag]
        return rank <= LEVEL_RANKS.get(LoggerConfig.LOG_LEVEL, 3)

    @staticmethod
    def _write(line: str = ""):
        stream = LoggerConfig.STREAM or sys.stdout
        stream.write(line + "\n")

    @staticmethod
    def _emit(tag: str, msg: str, category: str):
        if not DebugLogger.enabled(category, tag):
            return
        _, color = SEVERITIES[tag]
        stamp = f"[{datetime.now():%H:%M:%S}] " if LoggerConfig.SHOW_TIME else ""
        DebugLogger._write(f"{color}{stamp}[{category}][{tag}] {msg}{RESET}")

    # ===========================================================
    # Public Log Methods
    # ===========================================================

    @staticmethod
    def init(msg: str = "", category: str = "system"):
        """Startup message. An empty message prints a blank line."""
        if not msg.strip():
            if LoggerConfig.ENABLE_LOGGING:
                DebugLogger._write()
            return
        DebugLogger._emit("INIT", msg, category)

    @staticmethod
    def system(msg: str, category: str = "system"):
        DebugLogger._emit("SYSTEM", msg, category)

    @staticmethod
    def state(msg: str, category: str = "system"):
        DebugLogger._emit("STATE", msg, category)

    @staticmethod
    def action(msg: str, category: str = "system"):
        DebugLogger._emit("ACTION", msg, category)

    @staticmethod
    def trace(msg: str, category: str = "collision"):
        """Per-frame detail; only shown at VERBOSE."""
        DebugLogger._emit("TRACE", msg, category)

    @staticmethod
    def warn(msg: str, category: str = "system"):
        DebugLogger._emit("WARN", msg, category)

    @staticmethod
    def fail(msg: str, category: str = "system"):
        DebugLogger._emit("FAIL", msg, category)

    # ===========================================================
    # Startup Report
    # ===========================================================

    @staticmethod
    def section(title: str):
        """Boxed header between startup phases."""
        if not LoggerConfig.ENABLE_LOGGING:
            return
        rule = "─" * DebugLogger.LINE_LENGTH
        DebugLogger._write(f"\n{WHITE}{rule}\n{f'[{title}]'.center(DebugLogger.LINE_LENGTH)}{RESET}\n")

    @staticmethod
    def init_entry(module: str, status: str = "OK"):
        """
        One dotted status line, e.g.

            > Score Systems ................................ [OK]
        """
        if not LoggerConfig.ENABLE_LOGGING:
            return
        label = f"> {module}"
        badge = f"[{status}]"
        dots = max(DebugLogger.LINE_LENGTH - len(label) - len(badge) - 2, 1)
        color = STATUS_COLORS.get(status.upper(), WHITE)
        DebugLogger._write(f"{WHITE}{label} {'.' * dots} {color}{badge}{RESET}")

    @staticmethod
    def init_sub(detail: str, level: int = 1):
        if not LoggerConfig.ENABLE_LOGGING:
            return
        DebugLogger._write(f"{' ' * (4 * level)}• {WHITE}{detail}{RESET}")
