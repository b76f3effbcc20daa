from .base import EntityKind, Renderer, ScoreDisplay
from .headless import HeadlessRenderer, ScoreLog

__all__ = [
    "EntityKind",
    "Renderer",
    "ScoreDisplay",
    "HeadlessRenderer",
    "ScoreLog",
]
