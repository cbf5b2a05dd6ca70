"""
input_manager.py
----------------
Turns pygame events into per-frame action edges.

Provides:
- Keyboard bindings for jump, restart and quit
- Mouse clicks and touch taps as jump/restart input
- One rising edge per action per frame; repeats within a frame collapse
"""

import pygame

from dino_dash.core.debug.debug_logger import DebugLogger


# ===========================================================
# Default Key Bindings
# ===========================================================

DEFAULT_KEY_BINDINGS = {
    "jump": [pygame.K_SPACE, pygame.K_UP, pygame.K_w],
    "restart": [pygame.K_r, pygame.K_RETURN],
    "quit": [pygame.K_ESCAPE],
}

TAP_ACTIONS = ("jump", "restart")


class InputManager:
    """
    Event-driven action edges for the runner.

    Usage:
        for event in pygame.event.get():
            input_manager.handle_event(event)

        if input_manager.action_pressed("jump"):
            ...

        input_manager.end_frame()
    """

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, key_bindings=None):
        """
        Args:
            key_bindings: {action: [pygame key codes]}; defaults to DEFAULT_KEY_BINDINGS
        """
        self.key_bindings = key_bindings or DEFAULT_KEY_BINDINGS
        self._key_to_action = {}
        for action_name, keys in self.key_bindings.items():
            for key in keys:
                self._key_to_action[key] = action_name

        self._pressed = {action_name: False for action_name in self.key_bindings}
        DebugLogger.init_entry("InputManager")

    # ===========================================================
    # Event Handling
    # ===========================================================

    def handle_event(self, event) -> bool:
        """
        Record an action edge for a relevant event.

        Returns:
            True if the event mapped to an action
        """
        if event.type == pygame.QUIT:
            self._press("quit")
            return True

        if event.type == pygame.KEYDOWN:
            action_name = self._key_to_action.get(event.key)
            if action_name:
                self._press(action_name)
                return True
            return False

        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
            for action_name in TAP_ACTIONS:
                self._press(action_name)
            return True

        return False

    def _press(self, action_name: str):
        self._pressed[action_name] = True
        DebugLogger.trace(f"Action '{action_name}' pressed", category="input")

    # ===========================================================
    # Queries
    # ===========================================================

    def action_pressed(self, action: str) -> bool:
        """Check if action was pressed since the last end_frame()."""
        return self._pressed.get(action, False)

    def end_frame(self):
        """Clear all edges. Call once after the frame has consumed input."""
        for action_name in self._pressed:
            self._pressed[action_name] = False
