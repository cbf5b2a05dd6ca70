"""
game_loop.py
------------
Per-frame state transition for the endless runner.

Responsibilities
----------------
- Apply gravity and jump input to the dino with time-scale normalization.
- Scroll, cull and spawn obstacles.
- Detect the collision that ends a run.
- Derive the score from elapsed run time.
- Announce the end of a run on the event bus exactly once.

advance() is a pure function of (state, elapsed time, jump input) plus one
random draw. The frame driver owns scheduling and calls it once per display
refresh; it never runs re-entrantly and never waits on I/O.
"""

import dataclasses
from typing import Callable, Optional

from dino_dash.core.debug.debug_logger import DebugLogger
from dino_dash.core.services.event_manager import RunEndedEvent
from dino_dash.core.timing import epoch_millis
from dino_dash.game import physics
from dino_dash.game.collision import check_collision
from dino_dash.game.obstacle_spawner import ObstacleSpawner
from dino_dash.game.simulation_state import SimulationState


class GameLoop:
    """Simulation core: turns one SimulationState into the next."""

    # ===========================================================
    # Initialization
    # ===========================================================
    def __init__(self, config, events=None, rng=None,
                 clock: Optional[Callable[[], int]] = None):
        """
        Args:
            config: GameConfig with physics, obstacle and scoring policy
            events: Optional EventManager receiving RunEndedEvent
            rng: Random source for obstacle spawns (anything with .random())
            clock: Returns epoch milliseconds; used only when a run starts
        """
        self.config = config
        self.events = events
        self.clock = clock or epoch_millis
        self.spawner = ObstacleSpawner(config, rng=rng, events=events)
        self.runs_started = 0

    # ===========================================================
    # Run Lifecycle
    # ===========================================================
    def new_run(self, now_ms: Optional[int] = None) -> SimulationState:
        """Fresh grounded state with no obstacles and a zero score."""
        if now_ms is None:
            now_ms = self.clock()
        self.runs_started += 1
        DebugLogger.state(f"Run {self.runs_started} started", category="game_loop")
        return SimulationState(
            player_y=self.config.ground_y,
            started_at_ms=now_ms,
            clock_ms=now_ms,
        )

    def reset(self) -> SimulationState:
        """Discard the current run and start a new one now."""
        return self.new_run()

    # ===========================================================
    # Frame Step
    # ===========================================================
    def advance(self, state: SimulationState, elapsed_ms: float,
                jump_requested: bool) -> SimulationState:
        """
        Advance the simulation by one frame.

        Args:
            state: Current state (not modified)
            elapsed_ms: Real time since the previous frame; negatives count as 0
            jump_requested: Whether a jump input arrived since the previous frame

        Returns:
            The next state, or the same object if the run is already over.
        """
        if state.is_terminal:
            return state

        cfg = self.config
        elapsed_ms = max(elapsed_ms, 0)
        scale = physics.time_scale(elapsed_ms, cfg.target_frame_ms, cfg.max_time_scale)

        # 1. Dino kinematics
        y, velocity, airborne = state.player_y, state.player_velocity_y, state.is_airborne
        if scale > 0:
            y, velocity, airborne = physics.integrate(y, velocity, scale, cfg.gravity, cfg.ground_y)
        velocity, airborne = physics.apply_jump(velocity, airborne, jump_requested, cfg.jump_impulse)

        # 2. Obstacles
        obstacles = self.spawner.step(state.obstacles, scale)
        obstacles = self.spawner.maybe_spawn(obstacles, scale)

        # 3. Collision
        collided = check_collision(y, obstacles, cfg)

        # 4. Score from run time
        clock_ms = state.clock_ms + elapsed_ms
        score = int((clock_ms - state.started_at_ms) // cfg.score_interval_ms)

        next_state = dataclasses.replace(
            state,
            player_y=y,
            player_velocity_y=velocity,
            is_airborne=airborne,
            obstacles=obstacles,
            score=max(score, state.score),
            is_terminal=collided,
            clock_ms=clock_ms,
        )

        if collided:
            self._on_run_ended(next_state)

        return next_state

    # ===========================================================
    # Run End
    # ===========================================================
    def _on_run_ended(self, state: SimulationState) -> None:
        DebugLogger.state(f"Run ended with score {state.score}", category="game_loop")
        if self.events:
            self.events.dispatch(RunEndedEvent(final_score=state.score))
