"""Toroidal grid geometry for the snake game."""

from __future__ import annotations

import numpy as np

Position = tuple[int, int]


def wrap(value: int, dimension: int) -> int:
    """Fold a coordinate that stepped one cell off the grid back onto it.

    Movement never covers more than one cell per tick, so only the two
    single-step overflows need handling.
    """
    if value < 0:
        return dimension - 1
    if value > dimension - 1:
        return 0
    return value


class Grid:
    """Fixed rectangular grid whose edges wrap around.

    Coordinates use (row, col) ordering consistent with NumPy indexing.
    """

    def __init__(self, rows: int = 16, cols: int = 16) -> None:
        if rows < 4 or cols < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.rows = rows
        self.cols = cols

    @property
    def cell_count(self) -> int:
        return self.rows * self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def wrap_position(self, row: int, col: int) -> Position:
        """Wrap both axes of a position one step back onto the grid."""
        return wrap(row, self.rows), wrap(col, self.cols)

    def random_position(self, rng: np.random.Generator) -> Position:
        """Draw a uniformly random cell."""
        return int(rng.integers(self.rows)), int(rng.integers(self.cols))

    def to_dict(self) -> dict:
        return {"rows": self.rows, "cols": self.cols}
