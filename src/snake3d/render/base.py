# render/base.py
from __future__ import annotations
from enum import Enum
from typing import Hashable, Protocol, Tuple

from ..config import HEAD, BODY, FOOD

Cell = Tuple[int, int]


class EntityKind(Enum):
    HEAD = "head"
    BODY = "body"
    FOOD = "food"

    @property
    def color(self) -> Tuple[int, int, int]:
        return _COLORS[self]


_COLORS = {
    EntityKind.HEAD: HEAD,
    EntityKind.BODY: BODY,
    EntityKind.FOOD: FOOD,
}


class Renderer(Protocol):
    """Write-only view of the scene: the game never reads state back from it."""

    def create_entity(self, kind: EntityKind, cell: Cell) -> Hashable: ...
    def update_color(self, handle: Hashable, kind: EntityKind) -> None: ...
    def remove_entity(self, handle: Hashable) -> None: ...


class ScoreDisplay(Protocol):
    def show_score(self, score: int) -> None: ...
