"""Render sinks: projections of engine output onto a board."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from torus_snake.grid import Grid, Position


class RenderSink(Protocol):
    """Drawing target the engine reports to after each transition."""

    def paint_occupied(self, positions: Sequence[Position]) -> None: ...

    def clear_all_non_goal(self) -> None: ...

    def mark_goal(self, position: Position) -> None: ...

    def unmark_goal(self, position: Position) -> None: ...

    def set_score_display(self, score: int) -> None: ...


class CellType(enum.IntEnum):
    """Integer codes stored in the board array."""

    EMPTY = 0
    SNAKE = 1
    GOAL = 2


_GLYPHS: dict[int, str] = {
    CellType.EMPTY: ".",
    CellType.SNAKE: "#",
    CellType.GOAL: "*",
}


class BoardRenderer:
    """NumPy-backed board mirroring what the engine last drew.

    The board is write-only from the engine's point of view; it never
    feeds back into game logic.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.cells = np.zeros((grid.rows, grid.cols), dtype=np.int8)
        self.score = 0

    def paint_occupied(self, positions: Sequence[Position]) -> None:
        for r, c in positions:
            self.cells[r, c] = CellType.SNAKE

    def clear_all_non_goal(self) -> None:
        self.cells[self.cells != CellType.GOAL] = CellType.EMPTY

    def mark_goal(self, position: Position) -> None:
        r, c = position
        self.cells[r, c] = CellType.GOAL

    def unmark_goal(self, position: Position) -> None:
        r, c = position
        if self.cells[r, c] == CellType.GOAL:
            self.cells[r, c] = CellType.EMPTY

    def set_score_display(self, score: int) -> None:
        self.score = score

    def get(self, row: int, col: int) -> CellType:
        return CellType(self.cells[row, col])

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self.cells == cell_type))

    def to_text(self) -> str:
        """Render the board as text, one line per row, with a score line."""
        lines = ["".join(_GLYPHS[int(v)] for v in row) for row in self.cells]
        lines.append(f"Score: {self.score}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "cells": self.cells.tolist(),
            "score": self.score,
        }


class RecordingRenderer:
    """Render sink that records every call as ``(method, argument)``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def paint_occupied(self, positions: Sequence[Position]) -> None:
        self.calls.append(("paint_occupied", list(positions)))

    def clear_all_non_goal(self) -> None:
        self.calls.append(("clear_all_non_goal", None))

    def mark_goal(self, position: Position) -> None:
        self.calls.append(("mark_goal", position))

    def unmark_goal(self, position: Position) -> None:
        self.calls.append(("unmark_goal", position))

    def set_score_display(self, score: int) -> None:
        self.calls.append(("set_score_display", score))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def last(self, name: str) -> object:
        """Argument of the most recent call to *name*."""
        for call_name, arg in reversed(self.calls):
            if call_name == name:
                return arg
        raise KeyError(name)
