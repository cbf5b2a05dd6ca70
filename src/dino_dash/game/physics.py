"""
physics.py
----------
Time-scale-normalized vertical kinematics for the dino.

All per-frame constants (gravity, jump impulse, obstacle speed) are tuned for
a 60 Hz reference frame. Each step scales them by the ratio of the real
elapsed time to that reference frame so the game runs at the same speed on
slow and fast displays.
"""

from typing import Tuple


def time_scale(elapsed_ms: float, target_frame_ms: float, max_time_scale: float) -> float:
    """
    Ratio of elapsed time to the reference frame, capped after hitches.

    The cap keeps a long stall from moving obstacles far enough in one step to
    tunnel through the player. Negative input is treated as zero.
    """
    elapsed_ms = max(elapsed_ms, 0.0)
    return min(elapsed_ms / target_frame_ms, max_time_scale)


def integrate(y: float, velocity: float, scale: float,
              gravity: float, ground_y: float) -> Tuple[float, float, bool]:
    """
    Advance the dino one scaled step.

    Args:
        y: Current top edge
        velocity: Current vertical velocity (positive is down)
        scale: Time scale for this step
        gravity: Per-frame acceleration
        ground_y: Resting y of the dino

    Returns:
        (y, velocity, is_airborne) after the step. Landing zeroes the
        velocity; no bounce.
    """
    velocity += gravity * scale
    y += velocity * scale

    if y >= ground_y:
        return ground_y, 0.0, False
    return y, velocity, True


def apply_jump(velocity: float, is_airborne: bool, requested: bool,
               jump_impulse: float) -> Tuple[float, bool]:
    """
    Start a jump if one was requested while grounded.

    Requests while airborne are dropped, not queued.

    Returns:
        (velocity, is_airborne)
    """
    if requested and not is_airborne:
        return jump_impulse, True
    return velocity, is_airborne
