import numpy as np
import pygame
import pytest

from arcade_snake.config import BODY, CELL_SIZE, FOOD, HEAD, HUD_HEIGHT, TEXT, TOROIDAL, BOUNDED
from arcade_snake.loop import FrameView
from arcade_snake.render import draw_frame, interpolate_body


@pytest.fixture(scope="module")
def font():
    pygame.font.init()
    yield pygame.font.Font(None, 24)
    pygame.font.quit()


def make_view(alpha=1.0, game_over=False, boundary=BOUNDED):
    return FrameView(
        body=((11, 10), (10, 10), (9, 10)),
        previous_body=((10, 10), (9, 10), (8, 10)),
        alpha=alpha,
        food=(3, 4),
        score=20,
        game_over=game_over,
        grid_size=20,
        boundary=boundary,
    )


def pixel(surface, gx, gy, offset=(0.0, 0.0)):
    x = int((gx + offset[0]) * CELL_SIZE) + CELL_SIZE // 2
    y = HUD_HEIGHT + int((gy + offset[1]) * CELL_SIZE) + CELL_SIZE // 2
    return tuple(surface.get_at((x, y)))[:3]


def test_interpolation_halfway():
    pos = interpolate_body([(6, 5), (5, 5)], [(5, 5), (4, 5)], 0.5)
    np.testing.assert_allclose(pos, [[5.5, 5], [4.5, 5]])


def test_interpolation_endpoints():
    body, prev = [(6, 5), (5, 5)], [(5, 5), (4, 5)]
    np.testing.assert_allclose(interpolate_body(body, prev, 0.0), prev)
    np.testing.assert_allclose(interpolate_body(body, prev, 1.0), body)
    np.testing.assert_allclose(interpolate_body(body, prev, 3.0), body)


def test_new_segment_sits_on_its_cell():
    pos = interpolate_body([(6, 5), (5, 5), (4, 5), (3, 5)], [(5, 5), (4, 5), (3, 5)], 0.25)
    np.testing.assert_allclose(pos[-1], [3, 5])


def test_wrapped_segment_does_not_slide_across_the_board():
    pos = interpolate_body([(0, 5), (19, 5)], [(19, 5), (18, 5)], 0.5)
    np.testing.assert_allclose(pos, [[0, 5], [18.5, 5]])


def test_draw_frame_paints_snake_and_food(font):
    surface = pygame.Surface((20 * CELL_SIZE, 20 * CELL_SIZE + HUD_HEIGHT))
    draw_frame(surface, make_view(alpha=1.0), font)
    assert pixel(surface, 11, 10) == HEAD
    assert pixel(surface, 9, 10) == BODY
    assert pixel(surface, 3, 4) == FOOD


def test_draw_frame_blends_positions(font):
    surface = pygame.Surface((20 * CELL_SIZE, 20 * CELL_SIZE + HUD_HEIGHT))
    draw_frame(surface, make_view(alpha=0.5, boundary=TOROIDAL), font)
    assert pixel(surface, 10, 10, offset=(0.5, 0.0)) == HEAD


def test_game_over_overlay_dims_the_board(font):
    surface = pygame.Surface((20 * CELL_SIZE, 20 * CELL_SIZE + HUD_HEIGHT))
    draw_frame(surface, make_view(game_over=True), font)
    assert pixel(surface, 3, 4) != FOOD


class RecordingFont:
    """Wraps a real font and remembers every string it renders."""

    def __init__(self, font):
        self.font = font
        self.texts = []

    def render(self, text, antialias, color, *args):
        self.texts.append(text)
        return self.font.render(text, antialias, color, *args)


def test_game_over_overlay_shows_the_final_score(font):
    surface = pygame.Surface((20 * CELL_SIZE, 20 * CELL_SIZE + HUD_HEIGHT))
    recorder = RecordingFont(font)
    draw_frame(surface, make_view(game_over=True), recorder)
    assert "GAME OVER" in recorder.texts
    assert recorder.texts.count("Score: 20") == 2  # HUD and overlay

    text = font.render("Score: 20", True, TEXT)
    width, height = surface.get_size()
    rect = text.get_rect(center=(width // 2, height // 2 + 16))
    solid = [
        (x, y)
        for x in range(text.get_width())
        for y in range(text.get_height())
        if text.get_at((x, y)).a == 255
    ]
    assert solid
    for x, y in solid:
        assert tuple(surface.get_at((rect.x + x, rect.y + y)))[:3] == TEXT
