from dataclasses import dataclass
from typing import Optional

# ----- Window -----
WIDTH, HEIGHT = 900, 720
FPS = 60

# ----- Colors -----
BG    = (18, 20, 28)
FLOOR = (40, 44, 56)
GRID  = (62, 68, 84)
HEAD  = (255, 87, 34)
BODY  = (255, 152, 0)
FOOD  = (244, 67, 54)
TEXT  = (220, 220, 230)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

# ----- Tunables -----
@dataclass
class Config:
    grid_size: int = 19          # odd; grid spans +/- grid_size // 2
    cell_size: float = 1.0       # world units per cell
    move_interval_ms: int = 200
    debug: bool = True
    fixed_camera: bool = True

    start_length: int = 3
    reward: int = 10
    food_attempts: int = 100
    start_delay_ms: int = 1000
    game_over_delay_ms: int = 100
    restart_delay_ms: int = 500

    seed: Optional[int] = None
    width: int = WIDTH
    height: int = HEIGHT
    fps: int = FPS

    def __post_init__(self):
        if self.grid_size < 3 or self.grid_size % 2 == 0:
            raise ValueError(f"grid_size must be an odd integer >= 3, got {self.grid_size}")
        if self.start_length < 1:
            raise ValueError(f"start_length must be >= 1, got {self.start_length}")
        # the initial snake lies on the negative x axis ending at the origin
        if self.start_length - 1 > self.half_extent:
            raise ValueError(
                f"start_length {self.start_length} does not fit a grid of size {self.grid_size}"
            )
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be > 0, got {self.cell_size}")
        if self.move_interval_ms <= 0:
            raise ValueError(f"move_interval_ms must be > 0, got {self.move_interval_ms}")
        for name in ("start_delay_ms", "game_over_delay_ms", "restart_delay_ms", "reward"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.food_attempts < 1:
            raise ValueError(f"food_attempts must be >= 1, got {self.food_attempts}")

    @property
    def half_extent(self) -> int:
        return self.grid_size // 2
