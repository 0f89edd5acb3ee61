"""Torus Snake: wrap-around snake game engine."""

from torus_snake.clock import AsyncioClock, ManualClock
from torus_snake.config import GameConfig, ScorePolicy
from torus_snake.engine import GameEngine
from torus_snake.grid import Grid, wrap
from torus_snake.levels import DEFAULT_LEVELS, Level, LevelPolicy
from torus_snake.render import BoardRenderer
from torus_snake.snake import Direction, Segment
from torus_snake.state import GameState

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_LEVELS",
    "AsyncioClock",
    "BoardRenderer",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameState",
    "Grid",
    "Level",
    "LevelPolicy",
    "ManualClock",
    "ScorePolicy",
    "Segment",
    "wrap",
]
