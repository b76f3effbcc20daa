import logging
import math

import numpy as np  # type: ignore
import pygame  # type: ignore
import pytest

from snake3d.config import Config
from snake3d.render import EntityKind, HeadlessRenderer
from snake3d.render.camera import OrbitCamera, PITCH_MAX
from snake3d.render.scene import SceneRenderer


@pytest.fixture
def camera():
    return OrbitCamera(width=800, height=600, distance=20.0)


def test_target_projects_to_screen_center(camera):
    pts, depth = camera.project([0.0, 0.0, 0.0])
    assert pts[0] == pytest.approx([400, 300])
    assert depth[0] == pytest.approx(20.0)


def test_screen_axes_follow_the_board(camera):
    pts, _ = camera.project([[1, 0, 0], [0, 0, -1], [0, 0, 1]])
    right, far, near = pts
    assert right[0] > 400
    assert far[1] < 300     # grid UP is away from the viewer, i.e. up on screen
    assert near[1] > 300


def test_fixed_camera_ignores_orbit_and_zoom(camera):
    yaw, dist = camera.yaw, camera.distance
    assert not camera.orbit(0.5, 0.5)
    assert not camera.zoom(0.5)
    assert (camera.yaw, camera.distance) == (yaw, dist)


def test_free_camera_clamps_pitch(camera):
    camera.fixed = False
    assert camera.orbit(math.pi / 2, 10.0)
    assert camera.pitch == PITCH_MAX
    assert camera.yaw == pytest.approx(math.pi / 2)
    assert np.linalg.norm(camera.eye - camera.target) == pytest.approx(camera.distance)


def test_headless_renderer_bookkeeping(caplog):
    r = HeadlessRenderer()
    h = r.create_entity(EntityKind.HEAD, (0, 0))
    f = r.create_entity(EntityKind.FOOD, (3, 3))
    r.update_color(h, EntityKind.BODY)
    assert r.cells(EntityKind.BODY) == [(0, 0)]
    assert r.food == (3, 3)
    r.remove_entity(f)
    assert r.food is None
    with caplog.at_level(logging.WARNING):
        r.configure_camera(True)
    assert "Camera not available" in caplog.text


def test_scene_culls_hidden_cube_faces():
    surface = pygame.Surface((320, 240))
    scene = SceneRenderer(surface, Config(debug=False))
    scene.create_entity(EntityKind.HEAD, (0, 0))
    # straight-on camera sees only the top and the front
    assert len(scene._collect()) == 2

    food = scene.create_entity(EntityKind.FOOD, (2, 2))
    assert len(scene._collect()) == 3
    scene.remove_entity(food)
    assert len(scene._collect()) == 2


def test_scene_draws_offscreen():
    surface = pygame.Surface((320, 240))
    scene = SceneRenderer(surface, Config(debug=False))
    h = scene.create_entity(EntityKind.HEAD, (0, 0))
    scene.create_entity(EntityKind.FOOD, (1, -2))
    scene.update_color(h, EntityKind.BODY)
    scene.draw()
    assert surface.get_at((160, 120)) != pygame.Color(0, 0, 0)


def test_scene_camera_mode_follows_config():
    surface = pygame.Surface((320, 240))
    scene = SceneRenderer(surface, Config(debug=False, fixed_camera=False))
    assert not scene.camera.fixed
    scene.configure_camera(True)
    assert scene.camera.fixed
