"""Goal placement on free cells."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from torus_snake.snake import occupies

if TYPE_CHECKING:
    import numpy as np

    from torus_snake.grid import Grid, Position
    from torus_snake.snake import Snake

logger = logging.getLogger(__name__)


def place_goal(grid: Grid, snake: Snake, rng: np.random.Generator) -> Position:
    """Pick a uniformly random cell not covered by the snake.

    Uses rejection sampling. A free cell always exists while the snake is
    shorter than the grid, so the loop terminates.
    """
    attempts = 1
    pos = grid.random_position(rng)
    while occupies(snake, pos):
        attempts += 1
        pos = grid.random_position(rng)
    logger.debug("Goal placed at %s after %d draw(s).", pos, attempts)
    return pos
