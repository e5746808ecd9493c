"""Grid snake arcade game driven by a fixed-timestep loop."""

from .config import Config
from .game import Snake, GameSession, spawn_food
from .loop import GameLoop, ManualScheduler, FrameView

__all__ = ["Config", "Snake", "GameSession", "spawn_food", "GameLoop", "ManualScheduler", "FrameView"]
