"""
main_loop.py
------------
Frame driver wiring pygame to the simulation and score layer.

Responsibilities:
- Initialize pygame, the window and the score systems
- Feed elapsed time and the jump edge into GameLoop.advance once per frame
- Restart a finished run on request
- Draw plain shapes and text from the current state
- Yield to asyncio every frame so score saving runs in the background
"""

import asyncio

import pygame

from dino_dash.core.debug.debug_logger import DebugLogger
from dino_dash.core.game_settings import Display
from dino_dash.core.services.config_manager import load_game_config
from dino_dash.core.services.event_manager import EventManager
from dino_dash.core.services.input_manager import InputManager
from dino_dash.game.game_loop import GameLoop
from dino_dash.scores.score_context import ScoreContext
from dino_dash.scores.score_service import ScoreService
from dino_dash.scores.score_store import ScoreStore
from dino_dash.scores.storage_backend import JsonFileBackend


# ===========================================================
# Palette
# ===========================================================

BACKGROUND = (247, 247, 247)
FOREGROUND = (83, 83, 83)
OBSTACLE = (60, 140, 60)
ALERT = (200, 60, 60)


class MainLoop:
    """Runtime controller for one game window."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, config=None, backend=None, rng=None):
        """
        Args:
            config: GameConfig; loaded from dino_dash.json/defaults if None
            backend: Storage backend; a JsonFileBackend on config.data_file if None
            rng: Random source for obstacle spawns
        """
        DebugLogger.section("Initializing MainLoop")

        self.config = config or load_game_config()
        self._init_pygame()
        self._init_score_systems(backend)
        self._init_simulation(rng)

    def _init_pygame(self):
        pygame.init()
        pygame.font.init()

        self.screen = pygame.display.set_mode(
            (int(self.config.screen_width), int(self.config.screen_height))
        )
        pygame.display.set_caption(Display.CAPTION)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 32)
        self.running = False

        DebugLogger.init_entry("Pygame")

    def _init_score_systems(self, backend):
        self.events = EventManager()
        self.store = ScoreStore(
            backend or JsonFileBackend(self.config.data_file),
            cache_ttl_ms=self.config.cache_ttl_ms,
        )
        self.score_service = ScoreService.from_config(self.store, self.config)
        self.score_context = ScoreContext(self.score_service, self.events)

        DebugLogger.init_entry("Score Systems")
        DebugLogger.init_sub(f"Data file: {self.config.data_file}")

    def _init_simulation(self, rng):
        self.input_manager = InputManager()
        self.game_loop = GameLoop(self.config, events=self.events, rng=rng)
        self.state = self.game_loop.new_run()

        DebugLogger.init_entry("Simulation")

    # ===========================================================
    # Main Loop
    # ===========================================================

    async def run(self):
        """Run frames until quit, then let pending saves finish."""
        await self.score_context.load_initial_data()

        DebugLogger.section("Game Loop")
        self.running = True
        self.state = self.game_loop.reset()
        self.clock.tick()  # drop startup time from the first frame

        while self.running:
            elapsed_ms = self.clock.tick(self.config.fps)

            for event in pygame.event.get():
                self.input_manager.handle_event(event)

            self.step(elapsed_ms)
            self._draw()
            self.input_manager.end_frame()

            await asyncio.sleep(0)

        await self.score_context.wait_pending()
        self.score_context.close()
        pygame.quit()
        DebugLogger.system("Pygame terminated")

    def step(self, elapsed_ms: float):
        """Apply this frame's input and advance the simulation."""
        if self.input_manager.action_pressed("quit"):
            self.running = False
            DebugLogger.action("Quit signal received")
            return

        if self.state.is_terminal:
            if self.input_manager.action_pressed("restart"):
                self.state = self.game_loop.reset()
            return

        self.state = self.game_loop.advance(
            self.state, elapsed_ms, self.input_manager.action_pressed("jump")
        )

    # ===========================================================
    # Rendering
    # ===========================================================

    def _draw(self):
        cfg = self.config
        state = self.state
        self.screen.fill(BACKGROUND)

        ground_line = int(cfg.ground_y + cfg.sprite_size)
        pygame.draw.line(self.screen, FOREGROUND, (0, ground_line), (int(cfg.screen_width), ground_line), 2)

        dino = pygame.Rect(int(cfg.dino_x), int(state.player_y), int(cfg.sprite_size), int(cfg.sprite_size))
        pygame.draw.rect(self.screen, FOREGROUND, dino)

        for obstacle in state.obstacles:
            rect = pygame.Rect(int(obstacle.x), int(obstacle.y), int(obstacle.width), int(obstacle.height))
            pygame.draw.rect(self.screen, OBSTACLE, rect)

        self._draw_hud()
        pygame.display.flip()

    def _draw_hud(self):
        state = self.state
        scores = self.score_context.state

        if not state.is_terminal:
            target = self.score_context.get_next_target_score(state.score)
            self._text(f"Score {state.score:,}    Target {target:,}", 20, 20)
        else:
            self._text(f"Game Over  -  {state.score:,}", 20, 20, ALERT)
            self._text("Press R or tap to play again", 20, 56)
            for rank, score in enumerate(scores.top_scores, start=1):
                self._text(f"{rank}. {score.value:,}", 20, 92 + 30 * (rank - 1))

        if scores.is_loading:
            self._text("Saving...", int(self.config.screen_width) - 140, 20)
        elif scores.error:
            self._text(scores.error, int(self.config.screen_width) - 320, 20, ALERT)

    def _text(self, text, x, y, color=FOREGROUND):
        surface = self.font.render(text, True, color)
        self.screen.blit(surface, (x, y))
