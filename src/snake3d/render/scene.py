# render/scene.py
"""Tiny 3D scene for the board: cubes for the snake, a ball for the food.

Entities are kept in a flat dict keyed by handle; every frame they are
projected through the camera and painted back-to-front onto a pygame surface
(no depth buffer, so faces are sorted by mean depth). Lighting is a single
directional light with an ambient floor.
"""

from __future__ import annotations
from dataclasses import dataclass
import itertools
import logging
from typing import Dict, List, Tuple

import numpy as np  # type: ignore
import pygame       # type: ignore

from ..config import BG, FLOOR, GRID, Config
from .base import Cell, EntityKind
from .camera import OrbitCamera

logger = logging.getLogger(__name__)

LIGHT_DIR = np.array([-0.4, 1.0, 0.6]) / np.linalg.norm([-0.4, 1.0, 0.6])
AMBIENT = 0.35
SEGMENT_FILL = 0.92   # cube edge relative to the cell, leaves a visible seam

# Unit cube: 8 corners and 6 faces (corner indices, outward normal)
_CORNERS = np.array(
    [[x, y, z] for x in (-0.5, 0.5) for y in (-0.5, 0.5) for z in (-0.5, 0.5)]
)
_FACES = (
    ((0, 1, 3, 2), (-1, 0, 0)),
    ((4, 6, 7, 5), (1, 0, 0)),
    ((0, 4, 5, 1), (0, -1, 0)),
    ((2, 3, 7, 6), (0, 1, 0)),
    ((0, 2, 6, 4), (0, 0, -1)),
    ((1, 5, 7, 3), (0, 0, 1)),
)


@dataclass
class SceneNode:
    kind: EntityKind
    cell: Cell


def shade(color: Tuple[int, int, int], normal) -> Tuple[int, int, int]:
    k = AMBIENT + (1.0 - AMBIENT) * max(0.0, float(np.dot(normal, LIGHT_DIR)))
    return tuple(min(255, int(c * k)) for c in color)


class SceneRenderer:
    def __init__(self, surface: pygame.Surface, cfg: Config, camera: OrbitCamera | None = None):
        self.surface = surface
        self.cfg = cfg
        self.camera = camera or OrbitCamera.framing(
            cfg.grid_size, cfg.cell_size, surface.get_width(), surface.get_height(),
            fixed=cfg.fixed_camera,
        )
        self.nodes: Dict[int, SceneNode] = {}
        self._ids = itertools.count(1)
        self._dragging = False

    # ---------- Renderer interface ----------
    def create_entity(self, kind: EntityKind, cell: Cell) -> int:
        handle = next(self._ids)
        self.nodes[handle] = SceneNode(kind, tuple(cell))
        return handle

    def update_color(self, handle: int, kind: EntityKind) -> None:
        self.nodes[handle].kind = kind

    def remove_entity(self, handle: int) -> None:
        self.nodes.pop(handle, None)

    def configure_camera(self, fixed: bool) -> None:
        self.camera.fixed = fixed
        self._dragging = False
        logger.debug("Camera %s.", "fixed" if fixed else "free (drag to orbit, wheel to zoom)")

    # ---------- Free camera ----------
    def handle_event(self, event) -> bool:
        """Mouse drag orbits, wheel zooms. Does nothing while the camera is fixed."""
        if self.camera.fixed:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._dragging = True
            return True
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._dragging = False
            return True
        if event.type == pygame.MOUSEMOTION and self._dragging:
            dx, dy = event.rel
            return self.camera.orbit(-dx * 0.01, dy * 0.01)
        if event.type == pygame.MOUSEWHEEL:
            return self.camera.zoom(0.9 if event.y > 0 else 1.1)
        return False

    # ---------- Drawing ----------
    def world_pos(self, cell: Cell) -> np.ndarray:
        s = self.cfg.cell_size
        return np.array([cell[0] * s, 0.5 * s, cell[1] * s])

    def draw(self) -> None:  # pragma: no cover - visual
        self.surface.fill(BG)
        self._draw_floor()

        items = self._collect()
        items.sort(key=lambda it: it[0], reverse=True)
        for _, draw in items:
            draw()

    def _draw_floor(self) -> None:  # pragma: no cover - visual
        s = self.cfg.cell_size
        edge = (self.cfg.half_extent + 0.5) * s
        corners = [(-edge, 0, -edge), (edge, 0, -edge), (edge, 0, edge), (-edge, 0, edge)]
        pts, depth = self.camera.project(corners)
        if (depth > self.camera.near).all():
            pygame.draw.polygon(self.surface, FLOOR, pts.tolist())

        lines = []
        for i in range(-self.cfg.half_extent, self.cfg.half_extent + 2):
            k = (i - 0.5) * s
            lines.append(((k, 0, -edge), (k, 0, edge)))
            lines.append(((-edge, 0, k), (edge, 0, k)))
        for a, b in lines:
            pts, depth = self.camera.project([a, b])
            if (depth > self.camera.near).all():
                pygame.draw.line(self.surface, GRID, pts[0], pts[1])

    def _collect(self) -> List[tuple]:
        """Depth-tagged draw calls for every visible face / ball."""
        items = []
        eye = self.camera.eye
        size = self.cfg.cell_size * SEGMENT_FILL
        for node in self.nodes.values():
            center = self.world_pos(node.cell)
            color = node.kind.color
            if node.kind is EntityKind.FOOD:
                items.extend(self._ball(center, size / 2, color))
                continue

            verts = center + _CORNERS * size
            pts, depth = self.camera.project(verts)
            for idx, normal in _FACES:
                normal = np.array(normal, dtype=np.float64)
                face_center = center + normal * size / 2
                if np.dot(normal, eye - face_center) <= 0:
                    continue
                idx = list(idx)
                if (depth[idx] <= self.camera.near).any():
                    continue
                poly = pts[idx].tolist()
                c = shade(color, normal)
                items.append((float(depth[idx].mean()), self._polygon(c, poly)))
        return items

    def _ball(self, center, radius, color) -> List[tuple]:
        pts, depth = self.camera.project(center)
        d = float(depth[0])
        if d <= self.camera.near:
            return []
        x, y = pts[0]
        r = max(1, int(self.camera.focal * radius / d))
        lit = shade(color, LIGHT_DIR)
        dark = shade(color, -LIGHT_DIR)

        def draw():
            pygame.draw.circle(self.surface, dark, (int(x), int(y)), r)
            pygame.draw.circle(self.surface, lit, (int(x - r * 0.15), int(y - r * 0.15)), int(r * 0.8))
        return [(d, draw)]

    def _polygon(self, color, poly):
        def draw():
            pygame.draw.polygon(self.surface, color, poly)
        return draw
