"""
timing.py
---------
Wall-clock helpers. Components take a clock callable so tests can freeze time.
"""

import time


def epoch_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)
