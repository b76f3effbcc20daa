# game.py
from dataclasses import dataclass
from typing import List, Tuple, Optional
import logging
import random

from .config import DIRECTIONS, RIGHT

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Direction = Tuple[int, int]

REWARD = 10
FOOD_ATTEMPTS = 100

# ---------- Helpers ----------
def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]

# ---------- State ----------
@dataclass
class GameState:
    grid_size: int
    snake: List[Cell]      # head at index 0
    direction: Direction
    pending: Direction     # applied at the start of the next tick
    food: Optional[Cell]
    score: int
    game_over: bool

    @property
    def half_extent(self) -> int:
        return self.grid_size // 2

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def in_bounds(self, cell: Cell) -> bool:
        half = self.half_extent
        return abs(cell[0]) <= half and abs(cell[1]) <= half


@dataclass(frozen=True)
class TickResult:
    """What a single tick changed, so a renderer can mirror it.

    ``vacated`` is the tail cell freed this tick (None when the snake grew),
    ``ate`` the food cell consumed, ``collision`` is "wall" or "self" when
    the tick ended the game.
    """
    moved: bool = False
    new_head: Optional[Cell] = None
    old_head: Optional[Cell] = None
    vacated: Optional[Cell] = None
    ate: Optional[Cell] = None
    collision: Optional[str] = None

    @property
    def grew(self) -> bool:
        return self.ate is not None


NO_CHANGE = TickResult()

def reset(grid_size: int, start_length: int) -> GameState:
    """Fresh state: a horizontal snake ending at the origin, heading right, no food."""
    snake = [(-i, 0) for i in range(start_length)]
    state = GameState(
        grid_size=grid_size,
        snake=snake,
        direction=RIGHT,
        pending=RIGHT,
        food=None,
        score=0,
        game_over=False,
    )
    logger.debug("Game state reset (grid %d, snake length %d).", grid_size, start_length)
    return state

# ---------- Input / Update ----------
def set_pending_direction(state: GameState, direction: Direction) -> bool:
    """Request a turn for the next tick (no 180° turns). Returns True if accepted.

    The guard compares against the committed direction, not the pending one,
    so two quick turns between ticks cannot fold the snake back onto its neck.
    """
    direction = tuple(direction)
    if direction not in DIRECTIONS:
        raise ValueError(f"Not a cardinal direction: {direction}")
    if is_opposite(direction, state.direction):
        return False
    state.pending = direction
    return True

def tick(state: GameState, reward: int = REWARD) -> TickResult:
    """
    Advance the game by one cell.
    - No-op once the game is over.
    - Wall or self collision flips ``game_over`` and leaves the snake untouched.
    - Eating food grows the snake by one, adds ``reward`` and clears ``food``;
      respawning is up to the caller.
    """
    if state.game_over:
        return NO_CHANGE

    # Commit direction once per tick
    state.direction = state.pending

    hx, hy = state.snake[0]
    dx, dy = state.direction
    new_head = (hx + dx, hy + dy)

    # Wall collision
    if not state.in_bounds(new_head):
        logger.debug(
            "Wall collision at (%d, %d). Grid bounds: +/-%d",
            new_head[0], new_head[1], state.half_extent,
        )
        state.game_over = True
        return TickResult(collision="wall")

    # Self collision; the tail is only excluded when it moves away this tick
    grows = state.food is not None and new_head == state.food
    blocking = state.snake if grows else state.snake[:-1]
    if new_head in blocking:
        logger.debug(
            "Self collision at (%d, %d) with segment %d",
            new_head[0], new_head[1], blocking.index(new_head),
        )
        state.game_over = True
        return TickResult(collision="self")

    # Move / grow
    old_head = state.snake[0]
    state.snake.insert(0, new_head)
    if grows:
        state.score += reward
        state.food = None
        return TickResult(moved=True, new_head=new_head, old_head=old_head, ate=new_head)

    vacated = state.snake.pop()
    return TickResult(moved=True, new_head=new_head, old_head=old_head, vacated=vacated)

def spawn_food(state: GameState, rng: random.Random, attempts: int = FOOD_ATTEMPTS) -> Optional[Cell]:
    """
    Place food on a random free cell, resampling up to ``attempts`` times.
    When every sample lands on the snake the food stays unset; the game goes on
    without food until the next spawn.
    """
    half = state.half_extent
    occupied = set(state.snake)
    for _ in range(attempts):
        cell = (rng.randint(-half, half), rng.randint(-half, half))
        if cell not in occupied:
            state.food = cell
            logger.debug("Food spawned at (%d, %d).", cell[0], cell[1])
            return cell

    state.food = None
    logger.warning("Could not find valid food position after %d attempts!", attempts)
    return None
