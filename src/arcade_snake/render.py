# render.py
from typing import Sequence, Tuple

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import BG, HEAD, BODY, FOOD, TEXT, SHADE, HUD_HEIGHT, CELL_SIZE
from .loop import FrameView


def interpolate_body(
    body: Sequence[Tuple[int, int]],
    previous_body: Sequence[Tuple[int, int]],
    alpha: float,
) -> np.ndarray:
    """
    Blend each segment from its previous cell to its current one.

    Returns an (N, 2) float array of grid positions. Segments without a
    previous position (fresh growth) and segments that wrapped across the
    board are drawn at their current cell.
    """
    cur = np.asarray(body, dtype=np.float64).reshape(-1, 2)
    prev = cur.copy()
    n = min(len(previous_body), len(cur))
    if n:
        prev[:n] = np.asarray(previous_body[:n], dtype=np.float64).reshape(-1, 2)
    jumped = np.abs(cur - prev).max(axis=1) > 1
    prev[jumped] = cur[jumped]
    alpha = float(np.clip(alpha, 0.0, 1.0))
    return prev + (cur - prev) * alpha


# ---------- Drawing ----------
def board_rect(view: FrameView, cell_size: int = CELL_SIZE) -> pygame.Rect:
    side = view.grid_size * cell_size
    return pygame.Rect(0, HUD_HEIGHT, side, side)


def draw_cell(surface: pygame.Surface, origin: pygame.Rect, gx: float, gy: float,
              color, cell_size: int) -> None:
    rect = pygame.Rect(
        origin.x + round(gx * cell_size),
        origin.y + round(gy * cell_size),
        cell_size - 1,
        cell_size - 1,
    )
    pygame.draw.rect(surface, color, rect)


def draw_frame(surface: pygame.Surface, view: FrameView, font: pygame.font.Font,
               cell_size: int = CELL_SIZE) -> None:
    surface.fill(BG)
    board = board_rect(view, cell_size)
    pygame.draw.rect(surface, (28, 28, 34), board)

    # score
    txt = font.render(f"Score: {view.score}", True, TEXT)
    surface.blit(txt, (8, (HUD_HEIGHT - txt.get_height()) // 2))

    # keep a head that just left the grid from spilling onto the HUD
    surface.set_clip(board)
    draw_cell(surface, board, view.food[0], view.food[1], FOOD, cell_size)
    positions = interpolate_body(view.body, view.previous_body, view.alpha)
    # tail first so the head ends up on top
    for idx in range(len(positions) - 1, -1, -1):
        x, y = positions[idx]
        draw_cell(surface, board, x, y, HEAD if idx == 0 else BODY, cell_size)
    surface.set_clip(None)

    if view.game_over:
        draw_game_over(surface, font, view.score)


def draw_game_over(surface: pygame.Surface, font: pygame.font.Font, score: int) -> None:
    width, height = surface.get_size()
    # Dim with translucent overlay
    overlay = pygame.Surface((width, height), pygame.SRCALPHA)
    overlay.fill(SHADE)
    surface.blit(overlay, (0, 0))

    title = font.render("GAME OVER", True, (240, 240, 250))
    sco   = font.render(f"Score: {score}", True, TEXT)
    sub   = font.render("Press Space to restart", True, TEXT)

    surface.blit(title, title.get_rect(center=(width // 2, height // 2 - 16)))
    surface.blit(sco, sco.get_rect(center=(width // 2, height // 2 + 16)))
    surface.blit(sub, sub.get_rect(center=(width // 2, height // 2 + 44)))
