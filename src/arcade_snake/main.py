# main.py
import argparse
import logging

import pygame  # type: ignore

from .config import Config, BG, TEXT, BOUNDED, TOROIDAL, GRID_SIZE, BASE_TIMESTEP_MS, CELL_SIZE
from .controls import direction_for_key, is_quit_key, is_start_key
from .loop import GameLoop, ManualScheduler
from .render import draw_frame

logger = logging.getLogger(__name__)

CAPTION = "Snake"


class PygameScheduler(ManualScheduler):
    """Fires queued frame callbacks once per display frame, capped at ``fps``."""

    def __init__(self, fps: int = 60):
        super().__init__()
        self.fps = fps
        self.clock = pygame.time.Clock()

    def pump(self) -> int:
        self.clock.tick(self.fps)
        return self.run_frame(pygame.time.get_ticks())


def parse_args(argv=None) -> Config:
    parser = argparse.ArgumentParser(description="Grid snake with a fixed-timestep loop.")
    parser.add_argument("--grid", type=int, default=GRID_SIZE, help="cells per side")
    parser.add_argument(
        "--wrap",
        action="store_true",
        help="wrap around the edges instead of dying on the walls",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for food placement")
    parser.add_argument(
        "--timestep",
        type=float,
        default=BASE_TIMESTEP_MS,
        help="starting milliseconds per move (shrinks as you eat)",
    )
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--cell-size", type=int, default=CELL_SIZE)
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return Config(
            grid_size=args.grid,
            base_timestep_ms=args.timestep,
            boundary=TOROIDAL if args.wrap else BOUNDED,
            seed=args.seed,
            cell_size=args.cell_size,
            fps=args.fps,
        )
    except ValueError as exc:
        parser.error(str(exc))


def draw_title(screen: pygame.Surface, font: pygame.font.Font) -> None:
    screen.fill(BG)
    msg = font.render("Press Space to start", True, TEXT)
    screen.blit(msg, msg.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2)))
    pygame.display.flip()


def main(argv=None):
    cfg = parse_args(argv)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode(cfg.window_size)
    pygame.display.set_caption(CAPTION)
    scheduler = PygameScheduler(cfg.fps)

    def render(view):
        draw_frame(screen, view, font, cfg.cell_size)
        pygame.display.flip()

    def show_score(score: int) -> None:
        pygame.display.set_caption(f"{CAPTION} — score {score}")

    game = GameLoop(
        cfg,
        scheduler=scheduler,
        render=render,
        on_score=show_score,
        clock=pygame.time.get_ticks,
    )
    draw_title(screen, font)
    logger.info("Arrows/WASD to steer, Space to start, Esc to quit")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                name = pygame.key.name(event.key)
                direction = direction_for_key(name)
                if direction is not None:
                    game.change_direction(direction)
                elif is_start_key(name):
                    game.restart()
                elif is_quit_key(name):
                    running = False
        scheduler.pump()

    pygame.quit()


if __name__ == "__main__":
    main()
