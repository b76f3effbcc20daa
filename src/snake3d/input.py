# input.py
from __future__ import annotations
from typing import Optional, TYPE_CHECKING

import pygame  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT
from .game import Direction

if TYPE_CHECKING:
    from .controller import GameController

KEYMAP = {
    pygame.K_UP: UP,
    pygame.K_w: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}

def direction_for_key(key: int) -> Optional[Direction]:
    return KEYMAP.get(key)


class KeyboardInput:
    """Forwards steering keys to a controller while attached."""

    def __init__(self):
        self.controller: Optional["GameController"] = None

    @property
    def attached(self) -> bool:
        return self.controller is not None

    def attach(self, controller: "GameController") -> None:
        self.controller = controller

    def detach(self) -> None:
        self.controller = None

    def dispatch(self, event) -> bool:
        """Return True if the event was a steering key handled here."""
        if self.controller is None or event.type != pygame.KEYDOWN:
            return False
        direction = direction_for_key(event.key)
        if direction is None:
            return False
        self.controller.handle_direction(direction)
        return True
