# controls.py
from typing import Optional

from .config import UP, DOWN, LEFT, RIGHT

# Key names as reported by pygame.key.name(); letters are matched case-insensitively.
KEY_DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}

START_KEYS = {"space", "return", "r"}
QUIT_KEYS = {"escape", "q"}


def direction_for_key(key_name: Optional[str]):
    """Return the (dx, dy) bound to a key, or None for keys the game doesn't use."""
    if not key_name:
        return None
    return KEY_DIRECTIONS.get(key_name.lower())


def is_start_key(key_name: Optional[str]) -> bool:
    return bool(key_name) and key_name.lower() in START_KEYS


def is_quit_key(key_name: Optional[str]) -> bool:
    return bool(key_name) and key_name.lower() in QUIT_KEYS
