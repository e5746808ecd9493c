from dataclasses import dataclass
from typing import Optional

# ----- Grid & window -----
GRID_SIZE = 20
CELL_SIZE = 24
HUD_HEIGHT = 32

# ----- Colors -----
BG     = (20, 20, 24)
HEAD   = (46, 204, 113)
BODY   = (39, 174, 96)
FOOD   = (231, 76, 60)
TEXT   = (220, 220, 230)
SHADE  = (0, 0, 0, 140)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}

# ----- Boundary policies -----
BOUNDED = "bounded"     # walls kill
TOROIDAL = "toroidal"   # edges wrap
BOUNDARIES = (BOUNDED, TOROIDAL)

# ----- Speed ramp & scoring -----
BASE_TIMESTEP_MS = 150
MIN_TIMESTEP_MS = 50
TIMESTEP_DECREMENT_MS = 2
FOOD_BONUS = 10
MAX_FOOD_ATTEMPTS = 100


# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    grid_size: int = GRID_SIZE
    base_timestep_ms: float = BASE_TIMESTEP_MS
    min_timestep_ms: float = MIN_TIMESTEP_MS
    timestep_decrement_ms: float = TIMESTEP_DECREMENT_MS
    food_bonus: int = FOOD_BONUS
    boundary: str = BOUNDED
    seed: Optional[int] = None
    cell_size: int = CELL_SIZE
    fps: int = 60

    def __post_init__(self):
        if self.grid_size < 4:
            raise ValueError(f"grid_size must be at least 4, got {self.grid_size}")
        if self.boundary not in BOUNDARIES:
            raise ValueError(f"Unknown boundary policy: {self.boundary}")
        if self.min_timestep_ms <= 0 or self.base_timestep_ms < self.min_timestep_ms:
            raise ValueError(
                f"Need 0 < min_timestep_ms <= base_timestep_ms, "
                f"got {self.min_timestep_ms} / {self.base_timestep_ms}"
            )
        if self.timestep_decrement_ms < 0:
            raise ValueError("timestep_decrement_ms must be non-negative")
        if self.food_bonus < 0:
            raise ValueError("food_bonus must be non-negative")
        if self.cell_size <= 0 or self.fps <= 0:
            raise ValueError(f"cell_size and fps must be positive, got {self.cell_size} / {self.fps}")

    @property
    def window_size(self):
        side = self.grid_size * self.cell_size
        return side, side + HUD_HEIGHT
