# main.py
from __future__ import annotations
import argparse
import logging
from typing import List, Optional

import pygame # type: ignore

from .config import Config
from .controller import GameController
from .input import KeyboardInput
from .render.hud import GameOverPrompt, ScoreBoard
from .render.scene import SceneRenderer

logger = logging.getLogger(__name__)

RESTART_KEYS = (pygame.K_r, pygame.K_RETURN)


def parse_args(argv: Optional[List[str]] = None) -> Config:
    defaults = Config()
    p = argparse.ArgumentParser(prog="snake3d", description="Snake on a 3D board.")
    p.add_argument("--grid-size", type=int, default=defaults.grid_size, help="odd board side length")
    p.add_argument("--cell-size", type=float, default=defaults.cell_size)
    p.add_argument("--move-interval", type=int, default=defaults.move_interval_ms, help="ms per step")
    p.add_argument("--debug", action=argparse.BooleanOptionalAction, default=defaults.debug)
    p.add_argument("--free-camera", action="store_true", help="allow orbiting the camera with the mouse")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--width", type=int, default=defaults.width)
    p.add_argument("--height", type=int, default=defaults.height)
    args = p.parse_args(argv)

    try:
        return Config(
            grid_size=args.grid_size,
            cell_size=args.cell_size,
            move_interval_ms=args.move_interval,
            debug=args.debug,
            fixed_camera=not args.free_camera,
            seed=args.seed,
            width=args.width,
            height=args.height,
        )
    except ValueError as e:
        p.error(str(e))


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[List[str]] = None):
    cfg = parse_args(argv)
    configure_logging(cfg.debug)

    pygame.init()
    font = pygame.font.SysFont(None, 28)
    screen = pygame.display.set_mode((cfg.width, cfg.height))
    pygame.display.set_caption("Snake 3D")
    clock = pygame.time.Clock()

    scene = SceneRenderer(screen, cfg)
    scene.configure_camera(cfg.fixed_camera)
    scoreboard = ScoreBoard(font)
    prompt = GameOverPrompt(font)

    controller = GameController(cfg, scene, score_display=scoreboard, on_game_over=prompt.show)
    keyboard = KeyboardInput()
    keyboard.attach(controller)
    controller.start(pygame.time.get_ticks())

    running = True
    try:
        while running:
            # 1) input
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in RESTART_KEYS and prompt.visible:
                    if controller.acknowledge_restart(pygame.time.get_ticks()):
                        prompt.hide()
                elif not keyboard.dispatch(event):
                    scene.handle_event(event)
            if not running:
                break

            # 2) update (movement gated inside the controller)
            controller.update(pygame.time.get_ticks())

            # 3) render
            scene.draw()
            scoreboard.draw(screen)
            prompt.draw(screen)
            pygame.display.flip()
            clock.tick(cfg.fps)
    finally:
        keyboard.detach()
        controller.close()
        pygame.quit()


if __name__ == "__main__":
    main()
