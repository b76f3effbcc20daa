# render/camera.py
from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Tuple

import numpy as np  # type: ignore

WORLD_UP = np.array([0.0, 1.0, 0.0])

PITCH_MIN, PITCH_MAX = 0.15, 1.45
DIST_MIN = 4.0


@dataclass
class OrbitCamera:
    """
    Perspective camera orbiting a target point.

    yaw=0 puts the eye on the +Z side of the target, pitch is the elevation
    above the floor plane (radians). With ``fixed`` set the camera ignores
    orbit/zoom requests, so the board always shows from the same angle.
    """
    width: int
    height: int
    distance: float = 24.0
    yaw: float = 0.0
    pitch: float = 0.95
    fov: float = 55.0
    near: float = 0.1
    fixed: bool = True
    target: np.ndarray = field(default_factory=lambda: np.zeros(3))

    @classmethod
    def framing(cls, grid_size: int, cell_size: float, width: int, height: int, **kw) -> "OrbitCamera":
        """A camera far enough back to keep the whole board in view."""
        span = grid_size * cell_size
        return cls(width=width, height=height, distance=span * 1.35, **kw)

    # --- derived -------------------------------------------------------------
    @property
    def eye(self) -> np.ndarray:
        cp = math.cos(self.pitch)
        return self.target + self.distance * np.array(
            [cp * math.sin(self.yaw), math.sin(self.pitch), cp * math.cos(self.yaw)]
        )

    @property
    def focal(self) -> float:
        return (self.height / 2) / math.tan(math.radians(self.fov / 2))

    def view_matrix(self) -> np.ndarray:
        """World -> camera (right-handed, looking down -Z)."""
        eye = self.eye
        f = self.target - eye
        f = f / np.linalg.norm(f)
        r = np.cross(f, WORLD_UP)
        r = r / np.linalg.norm(r)
        u = np.cross(r, f)

        m = np.eye(4)
        m[0, :3], m[1, :3], m[2, :3] = r, u, -f
        m[:3, 3] = -m[:3, :3] @ eye
        return m

    def project(self, points) -> Tuple[np.ndarray, np.ndarray]:
        """
        Project world points (N, 3) to screen pixels.

        Returns (screen (N, 2), depth (N,)); depth is the distance in front of
        the camera, points with depth <= near are behind it and should be skipped.
        """
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        homo = np.hstack([pts, np.ones((len(pts), 1))])
        cam = homo @ self.view_matrix().T
        depth = -cam[:, 2]

        safe = np.where(depth > self.near, depth, self.near)
        sx = self.width / 2 + cam[:, 0] / safe * self.focal
        sy = self.height / 2 - cam[:, 1] / safe * self.focal
        return np.stack([sx, sy], axis=1), depth

    # --- free camera ---------------------------------------------------------
    def orbit(self, d_yaw: float, d_pitch: float) -> bool:
        if self.fixed:
            return False
        self.yaw = (self.yaw + d_yaw) % (2 * math.pi)
        self.pitch = min(PITCH_MAX, max(PITCH_MIN, self.pitch + d_pitch))
        return True

    def zoom(self, factor: float) -> bool:
        if self.fixed:
            return False
        self.distance = max(DIST_MIN, self.distance * factor)
        return True
