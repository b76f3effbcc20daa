# controller.py
from __future__ import annotations
from collections import deque
from enum import Enum
import logging
import random
from typing import Callable, Deque, Hashable, Optional

from .config import Config
from .game import (
    Direction, GameState, TickResult,
    reset, set_pending_direction, spawn_food, tick,
)
from .render.base import EntityKind, Renderer, ScoreDisplay

logger = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    GAME_OVER_PENDING = "game_over_pending"
    AWAITING_RESTART = "awaiting_restart"
    RESTARTING = "restarting"
    STOPPED = "stopped"


# Timed transitions: waiting phase -> phase entered once its delay elapses
_TIMED = {
    Phase.STARTING: Phase.RUNNING,
    Phase.GAME_OVER_PENDING: Phase.AWAITING_RESTART,
    Phase.RESTARTING: Phase.RUNNING,
}


class GameController:
    """
    Drives one game: owns the GameState, mirrors it into a renderer and runs the
    start / game-over / restart timing.

    Time is passed in (``now_ms``) by whoever owns the clock, so there is no
    background timer to leak: once ``close()`` returns nothing fires again.
    """

    def __init__(
        self,
        cfg: Config,
        renderer: Renderer,
        score_display: Optional[ScoreDisplay] = None,
        on_game_over: Optional[Callable[[int], None]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = cfg
        self.renderer = renderer
        self.score_display = score_display
        self.on_game_over = on_game_over
        self.rng = rng or random.Random(cfg.seed)

        if score_display is None:
            logger.warning("Score display not found!")

        self._state: Optional[GameState] = None
        self._phase = Phase.IDLE
        self._deadline: Optional[int] = None
        self._last_tick = 0
        self._ticking = False

        # Handles parallel to state.snake (head first) plus the food's handle
        self._segments: Deque[Hashable] = deque()
        self._food_handle: Optional[Hashable] = None

    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> GameState:
        if self._state is None:
            raise RuntimeError("Game not started; call start() first.")
        return self._state

    @property
    def score(self) -> int:
        return self._state.score if self._state is not None else 0

    # ------------------------------------------------------------------
    def start(self, now_ms: int) -> None:
        if self._phase is Phase.STOPPED:
            raise RuntimeError("Controller is closed.")
        self._new_round()
        self._arm(Phase.STARTING, self.cfg.start_delay_ms, now_ms)

    def update(self, now_ms: int) -> Optional[TickResult]:
        """
        Fire any due timed transition, then tick if a move interval has passed.
        At most one tick per call; a call made while a tick is in progress is
        ignored. Returns the tick's result, or None when no tick ran.
        """
        if self._phase is Phase.STOPPED or self._ticking:
            return None

        self._ticking = True
        try:
            if self._deadline is not None and now_ms >= self._deadline:
                self._fire(now_ms)

            if self._phase is not Phase.RUNNING:
                return None
            if now_ms - self._last_tick < self.cfg.move_interval_ms:
                return None

            self._last_tick = now_ms
            return self._step()
        finally:
            self._ticking = False

    def handle_direction(self, direction: Direction) -> bool:
        if self._state is None or self._phase is Phase.STOPPED:
            return False
        return set_pending_direction(self._state, direction)

    def acknowledge_restart(self, now_ms: int) -> bool:
        """User confirmed the game-over prompt: start a new round after a short delay."""
        if self._phase is not Phase.AWAITING_RESTART:
            return False
        self._new_round()
        self._arm(Phase.RESTARTING, self.cfg.restart_delay_ms, now_ms)
        return True

    def close(self) -> None:
        if self._phase is Phase.STOPPED:
            return
        self._deadline = None
        self._phase = Phase.STOPPED
        self._clear_entities()
        logger.debug("Game torn down.")

    # ------------------------------------------------------------------
    def _arm(self, phase: Phase, delay_ms: int, now_ms: int) -> None:
        self._phase = phase
        self._deadline = now_ms + delay_ms

    def _fire(self, now_ms: int) -> None:
        nxt = _TIMED[self._phase]
        self._deadline = None
        self._phase = nxt

        if nxt is Phase.RUNNING:
            self._last_tick = now_ms
            logger.debug("Game movement started.")
        elif nxt is Phase.AWAITING_RESTART and self.on_game_over is not None:
            self.on_game_over(self.score)

    def _step(self) -> TickResult:
        state = self.state
        result = tick(state, self.cfg.reward)

        if result.collision is not None:
            logger.info("Game over! Score: %d", state.score)
            self._arm(Phase.GAME_OVER_PENDING, self.cfg.game_over_delay_ms, self._last_tick)
            return result

        if result.moved:
            self._mirror(result)
        return result

    def _mirror(self, result: TickResult) -> None:
        head = self.renderer.create_entity(EntityKind.HEAD, result.new_head)
        if self._segments:
            self.renderer.update_color(self._segments[0], EntityKind.BODY)
        self._segments.appendleft(head)

        if result.vacated is not None:
            self.renderer.remove_entity(self._segments.pop())

        if result.grew:
            if self._food_handle is not None:
                self.renderer.remove_entity(self._food_handle)
                self._food_handle = None
            self._show_score()
            self._spawn_food()

    def _new_round(self) -> None:
        self._clear_entities()
        self._state = reset(self.cfg.grid_size, self.cfg.start_length)

        for i, cell in enumerate(self._state.snake):
            kind = EntityKind.HEAD if i == 0 else EntityKind.BODY
            self._segments.append(self.renderer.create_entity(kind, cell))
        logger.debug("Snake created with %d segments.", len(self._segments))

        self._spawn_food()
        self._show_score()

    def _spawn_food(self) -> None:
        cell = spawn_food(self.state, self.rng, self.cfg.food_attempts)
        if cell is not None:
            self._food_handle = self.renderer.create_entity(EntityKind.FOOD, cell)

    def _clear_entities(self) -> None:
        while self._segments:
            self.renderer.remove_entity(self._segments.pop())
        if self._food_handle is not None:
            self.renderer.remove_entity(self._food_handle)
            self._food_handle = None

    def _show_score(self) -> None:
        if self.score_display is not None:
            self.score_display.show_score(self.score)
