# render/headless.py
from __future__ import annotations
from dataclasses import dataclass
import itertools
import logging
from typing import Dict, List, Optional

from .base import Cell, EntityKind

logger = logging.getLogger(__name__)


@dataclass
class Entity:
    kind: EntityKind
    cell: Cell


class HeadlessRenderer:
    """
    In-memory scene with no window or camera.

    Keeps the entities it was asked to create so headless runs and tests can
    look at what a real scene would be showing.
    """

    def __init__(self):
        self.entities: Dict[int, Entity] = {}
        self._ids = itertools.count(1)

    def create_entity(self, kind: EntityKind, cell: Cell) -> int:
        handle = next(self._ids)
        self.entities[handle] = Entity(kind, tuple(cell))
        return handle

    def update_color(self, handle: int, kind: EntityKind) -> None:
        self.entities[handle].kind = kind

    def remove_entity(self, handle: int) -> None:
        del self.entities[handle]

    def configure_camera(self, fixed: bool) -> None:
        logger.warning("Camera not available; ignoring fixed_camera=%s.", fixed)

    # -- inspection helpers --
    def cells(self, kind: EntityKind) -> List[Cell]:
        return [e.cell for e in self.entities.values() if e.kind is kind]

    @property
    def food(self) -> Optional[Cell]:
        cells = self.cells(EntityKind.FOOD)
        return cells[0] if cells else None


class ScoreLog:
    """Score display sink that just remembers what it was shown."""

    def __init__(self):
        self.history: List[int] = []

    def show_score(self, score: int) -> None:
        self.history.append(score)

    @property
    def current(self) -> Optional[int]:
        return self.history[-1] if self.history else None
