"""Snake segments, the per-tick movement step, and direction propagation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from torus_snake.grid import Grid, Position


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_reverse_of(self, other: Direction) -> bool:
        return _OPPOSITES[other] is self


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Segment:
    """One cell of the body and the direction it last moved in."""

    position: Position
    direction: Direction

    def to_dict(self) -> dict:
        return {"position": list(self.position), "direction": self.direction.name}


Snake = tuple[Segment, ...]


def spawn_snake(
    start_row: int,
    start_col: int,
    direction: Direction = Direction.UP,
    length: int = 4,
) -> Snake:
    """Build a straight snake whose body trails behind the head.

    Every segment starts out moving in *direction*.
    """
    if length < 1:
        raise ValueError("Snake length must be at least 1.")
    dr, dc = direction.value
    return tuple(
        Segment((start_row - dr * i, start_col - dc * i), direction)
        for i in range(length)
    )


def _step(position: Position, delta: tuple[int, int], grid: Grid) -> Position:
    r, c = position
    dr, dc = delta
    return grid.wrap_position(r + dr, c + dc)


def move(snake: Snake, grid: Grid) -> Snake:
    """Move every segment one cell along its own stored direction.

    Directions are carried over unchanged; reassigning them down the
    chain is left to :func:`propagate_directions`.
    """
    return tuple(
        Segment(_step(seg.position, seg.direction.value, grid), seg.direction)
        for seg in snake
    )


def extend_tail(snake: Snake, grid: Grid) -> Snake:
    """Append a segment one cell behind the tail, opposite its direction."""
    tail = snake[-1]
    behind = _step(tail.position, tail.direction.opposite.value, grid)
    return (*snake, Segment(behind, tail.direction))


def propagate_directions(snake: Snake) -> Snake:
    """Shift directions one segment toward the tail.

    Each non-head segment takes the direction its predecessor held
    before this pass; the head keeps its own.
    """
    if len(snake) < 2:
        return snake
    shifted = [snake[0]]
    for prev, seg in zip(snake, snake[1:]):
        shifted.append(replace(seg, direction=prev.direction))
    return tuple(shifted)


def turn_head(snake: Snake, direction: Direction) -> Snake:
    """Point the head in *direction*, ignoring 180° reversals."""
    head = snake[0]
    if direction.is_reverse_of(head.direction) or direction is head.direction:
        return snake
    return (replace(head, direction=direction), *snake[1:])


def positions(snake: Snake) -> list[Position]:
    return [seg.position for seg in snake]


def occupies(snake: Snake, position: Position) -> bool:
    """Check whether any segment sits on *position*."""
    return any(seg.position == position for seg in snake)
