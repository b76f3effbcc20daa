# render/hud.py
from __future__ import annotations
from typing import Optional

import pygame  # type: ignore

from ..config import TEXT


class ScoreBoard:
    """Score display sink drawn in the top-left corner."""

    def __init__(self, font: pygame.font.Font):
        self.font = font
        self.score = 0
        self._label: Optional[pygame.Surface] = None

    def show_score(self, score: int) -> None:
        if score != self.score or self._label is None:
            self.score = score
            self._label = self.font.render(f"Score: {score}", True, TEXT)

    def draw(self, screen: pygame.Surface) -> None:  # pragma: no cover - visual
        if self._label is None:
            self.show_score(self.score)
        screen.blit(self._label, (8, 6))


class GameOverPrompt:
    """Restart prompt; visible between game over and the player's acknowledgment."""

    def __init__(self, font: pygame.font.Font):
        self.font = font
        self.visible = False
        self.score = 0

    def show(self, score: int) -> None:
        self.score = score
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def draw(self, screen: pygame.Surface) -> None:  # pragma: no cover - visual
        if not self.visible:
            return
        width, height = screen.get_size()

        # Dim with translucent overlay
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        screen.blit(overlay, (0, 0))

        title = self.font.render("GAME OVER", True, (240, 240, 250))
        sub   = self.font.render(f"Your score was {self.score}.", True, TEXT)
        hint  = self.font.render("Press R to restart", True, TEXT)

        screen.blit(title, title.get_rect(center=(width // 2, height // 2 - 16)))
        screen.blit(sub, sub.get_rect(center=(width // 2, height // 2 + 16)))
        screen.blit(hint, hint.get_rect(center=(width // 2, height // 2 + 44)))
