# loop.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, Optional, Protocol, Tuple, Union
import logging
import random
import time

from .config import Config, DIRECTIONS
from .game import (
    BoardFullError, Cell, GameSession, Snake, Vector, spawn_food,
)

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]

MOVED, ATE, DIED = "moved", "ate", "died"


# ---------- Frame scheduling ----------
class FrameScheduler(Protocol):
    def request_frame(self, callback: FrameCallback) -> Hashable: ...
    def cancel(self, handle: Hashable) -> None: ...


class ManualScheduler:
    """
    Frame scheduler driven by whoever owns the timestamps.

    ``request_frame`` only queues the callback; ``run_frame(now)`` fires every
    callback queued so far. Callbacks queued while running wait for the next
    ``run_frame``.
    """

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 0

    def request_frame(self, callback: FrameCallback) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel(self, handle: Hashable) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self, now: float) -> int:
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(now)
        return len(due)


def _wall_clock_ms() -> float:
    return time.perf_counter() * 1000.0


# ---------- Render payload ----------
@dataclass(frozen=True)
class FrameView:
    body: Tuple[Cell, ...]
    previous_body: Tuple[Cell, ...]
    alpha: float
    food: Cell
    score: int
    game_over: bool
    grid_size: int
    boundary: str


# ---------- Fixed-timestep driver ----------
class GameLoop:
    """
    Owns the live Snake/GameSession pair and advances it in fixed timesteps.

    Every scheduled frame adds the elapsed wall time to an accumulator, runs
    as many whole ``tick()`` calls as the accumulator covers, then renders
    with ``alpha`` set to the fraction of a timestep left over.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        scheduler: Optional[FrameScheduler] = None,
        render: Optional[Callable[[FrameView], None]] = None,
        on_score: Optional[Callable[[int], None]] = None,
        clock: Callable[[], float] = _wall_clock_ms,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = config or Config()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.render = render
        self.on_score = on_score
        self.clock = clock
        self.rng = rng or random.Random(self.cfg.seed)

        self.snake: Optional[Snake] = None
        self.session: Optional[GameSession] = None
        self.food: Optional[Cell] = None
        self.last_time = 0.0
        self.tick_count = 0

        self._handle: Optional[Hashable] = None
        self._generation = 0

    # ---------- Lifecycle ----------
    @property
    def running(self) -> bool:
        return self.session is not None and not self.session.game_over

    @property
    def score(self) -> int:
        return self.session.score if self.session is not None else 0

    def start(self) -> None:
        """Start a fresh game, dropping whatever game was running."""
        self._cancel_pending()
        self._generation += 1

        self.snake = Snake(self.cfg.grid_size, self.cfg.boundary)
        self.session = GameSession(timestep_ms=self.cfg.base_timestep_ms)
        self.food = self.generate_food()
        self.tick_count = 0
        self.last_time = self.clock()

        logger.debug(
            "New game: grid=%d boundary=%s timestep=%sms",
            self.cfg.grid_size, self.cfg.boundary, self.session.timestep_ms,
        )
        self._report_score()
        self._schedule()

    restart = start

    def end_game(self) -> None:
        if self.session is None or self.session.game_over:
            return
        self._cancel_pending()
        self._generation += 1
        self.session.game_over = True
        logger.info("Game over: score=%d length=%d ticks=%d",
                    self.session.score, len(self.snake), self.tick_count)
        self._emit(alpha=1.0)

    # ---------- Input ----------
    def change_direction(self, direction: Union[str, Vector]) -> None:
        """Steer the live snake; unknown names and input outside a game are dropped."""
        if isinstance(direction, str):
            direction = DIRECTIONS.get(direction.lower())
            if direction is None:
                logger.debug("Ignoring unknown direction name")
                return
        if not self.running:
            return
        self.snake.change_direction(direction)

    # ---------- Simulation ----------
    def generate_food(self) -> Cell:
        return spawn_food(self.snake.body, self.cfg.grid_size, self.rng)

    def tick(self) -> Optional[str]:
        """Advance the simulation by exactly one timestep."""
        if not self.running:
            return None
        snake, session = self.snake, self.session
        self.tick_count += 1

        snake.snapshot()
        snake.commit_direction()
        if snake.check_collision(self.cfg.grid_size):
            self.end_game()
            return DIED

        if not snake.move(self.food):
            return MOVED

        session.score += self.cfg.food_bonus
        session.timestep_ms = max(
            self.cfg.min_timestep_ms,
            session.timestep_ms - self.cfg.timestep_decrement_ms,
        )
        logger.debug("Ate food at %s: score=%d timestep=%sms",
                     self.food, session.score, session.timestep_ms)
        self._report_score()
        try:
            self.food = self.generate_food()
        except BoardFullError:
            logger.info("Board is full")
            self.end_game()
        return ATE

    def frame(self, now: float) -> None:
        """Consume the time elapsed since the last frame, then render."""
        if not self.running:
            return
        session = self.session
        elapsed = max(0.0, now - self.last_time)
        self.last_time = now
        session.leftover_ms += elapsed

        while session.leftover_ms >= session.timestep_ms:
            self.tick()
            if session.game_over:
                return
            session.leftover_ms -= session.timestep_ms

        self._emit(alpha=min(1.0, session.leftover_ms / session.timestep_ms))
        self._schedule()

    # ---------- Internals ----------
    def _schedule(self) -> None:
        self._cancel_pending()
        generation = self._generation

        def on_frame(now: float) -> None:
            # a callback from a cancelled or replaced loop must not advance state
            if generation != self._generation:
                return
            self._handle = None
            self.frame(now)

        self._handle = self.scheduler.request_frame(on_frame)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _report_score(self) -> None:
        if self.on_score is not None:
            self.on_score(self.session.score)

    def view(self, alpha: float = 1.0) -> FrameView:
        return FrameView(
            body=tuple(self.snake.body),
            previous_body=tuple(self.snake.previous_body),
            alpha=alpha,
            food=self.food,
            score=self.session.score,
            game_over=self.session.game_over,
            grid_size=self.cfg.grid_size,
            boundary=self.cfg.boundary,
        )

    def _emit(self, alpha: float) -> None:
        if self.render is not None:
            self.render(self.view(alpha))
