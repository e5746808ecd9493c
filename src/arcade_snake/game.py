# game.py
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import random

import numpy as np  # type: ignore

from .config import (
    GRID_SIZE, RIGHT, DIRECTIONS,
    BOUNDED, TOROIDAL, BOUNDARIES,
    BASE_TIMESTEP_MS, MAX_FOOD_ATTEMPTS,
)

Cell = Tuple[int, int]
Vector = Tuple[int, int]


class BoardFullError(RuntimeError):
    """Raised when every cell of the grid is covered by the snake."""


class FrozenSessionError(AttributeError):
    """Raised when something tries to mutate a finished session."""


# ---------- Helpers ----------
def is_opposite(a: Vector, b: Vector) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


def spawn_food(
    snake: Iterable[Cell],
    grid_size: int,
    rng: Optional[random.Random] = None,
    max_attempts: int = MAX_FOOD_ATTEMPTS,
) -> Cell:
    """
    Pick a random cell that is not covered by the snake.

    Tries plain rejection sampling first; once ``max_attempts`` draws have
    all landed on the snake, scans the free cells directly and picks one
    uniformly, so a crowded board never stalls.
    """
    rng = rng or random
    body = set(snake)
    for _ in range(max_attempts):
        cell = (rng.randrange(grid_size), rng.randrange(grid_size))
        if cell not in body:
            return cell

    occupied = np.zeros((grid_size, grid_size), dtype=bool)
    for x, y in body:
        if 0 <= x < grid_size and 0 <= y < grid_size:
            occupied[y, x] = True
    free = np.argwhere(~occupied)  # rows of (y, x)
    if len(free) == 0:
        raise BoardFullError(f"no free cell left on a {grid_size}x{grid_size} board")
    fy, fx = free[rng.randrange(len(free))]
    return (int(fx), int(fy))


def starting_body(grid_size: int) -> List[Cell]:
    cx, cy = grid_size // 2, grid_size // 2
    return [(cx, cy), (cx - 1, cy), (cx - 2, cy)]


# ---------- Snake state machine ----------
class Snake:
    """
    Ordered body (head at index 0) plus the committed and buffered headings.

    ``pending`` holds the heading for the next tick; ``commit_direction``
    copies it into ``direction`` once per tick, before ``move``.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        boundary: str = BOUNDED,
        body: Optional[List[Cell]] = None,
        direction: Vector = RIGHT,
    ):
        if boundary not in BOUNDARIES:
            raise ValueError(f"Unknown boundary policy: {boundary}")
        self.grid_size = grid_size
        self.boundary = boundary
        self.body: List[Cell] = list(body) if body is not None else starting_body(grid_size)
        self.direction: Vector = direction
        self.pending: Vector = direction
        self.previous_body: List[Cell] = list(self.body)

    @property
    def head(self) -> Cell:
        return self.body[0]

    def change_direction(self, requested: Vector) -> None:
        """Buffer a new heading unless it reverses the committed or buffered one."""
        if requested not in DIRECTIONS.values():
            raise ValueError(f"Not a direction: {requested!r}")
        if is_opposite(requested, self.direction) or is_opposite(requested, self.pending):
            return
        self.pending = requested

    def commit_direction(self) -> None:
        self.direction = self.pending

    def snapshot(self) -> None:
        self.previous_body = list(self.body)

    def next_head(self) -> Cell:
        hx, hy = self.body[0]
        dx, dy = self.direction
        if self.boundary == TOROIDAL:
            n = self.grid_size
            return ((hx + dx + n) % n, (hy + dy + n) % n)
        return (hx + dx, hy + dy)

    def move(self, food: Cell) -> bool:
        """Step one cell; return True (and keep the tail) when the new head lands on food."""
        new_head = self.next_head()
        self.body.insert(0, new_head)
        if new_head == food:
            return True
        self.body.pop()
        return False

    def check_collision(self, grid_size: Optional[int] = None) -> bool:
        head = self.body[0]
        if self.boundary == BOUNDED:
            n = self.grid_size if grid_size is None else grid_size
            if not (0 <= head[0] < n and 0 <= head[1] < n):
                return True
        return head in self.body[1:]

    def __len__(self) -> int:
        return len(self.body)

    def __repr__(self) -> str:
        return f"Snake(boundary={self.boundary!r}, direction={self.direction}, body={self.body})"


# ---------- Session ----------
@dataclass
class GameSession:
    score: int = 0
    timestep_ms: float = BASE_TIMESTEP_MS
    leftover_ms: float = 0.0
    game_over: bool = False

    def __setattr__(self, name, value):
        # once the game is over the session is read-only
        if getattr(self, "game_over", False):
            raise FrozenSessionError(f"session is over; cannot set {name!r}")
        object.__setattr__(self, name, value)
