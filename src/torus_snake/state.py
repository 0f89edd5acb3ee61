"""Immutable game-state record and the input transition."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from torus_snake.snake import Direction, Snake, positions, turn_head

if TYPE_CHECKING:
    from torus_snake.config import GameConfig
    from torus_snake.grid import Position


@dataclass(frozen=True)
class GameState:
    """Everything that changes while a game is played.

    Transitions never mutate a state; they return a new one.
    """

    snake: Snake
    goal: Position | None = None
    score: int = 0
    interval_ms: int = 1000
    tick: int = 0

    @property
    def head(self) -> Position:
        return self.snake[0].position

    @property
    def direction(self) -> Direction:
        return self.snake[0].direction

    def to_dict(self) -> dict:
        """Return a JSON-serializable snapshot."""
        return {
            "tick": self.tick,
            "score": self.score,
            "interval_ms": self.interval_ms,
            "goal": list(self.goal) if self.goal is not None else None,
            "snake": [seg.to_dict() for seg in self.snake],
        }


def initial_state(config: GameConfig) -> GameState:
    """Fresh state: spawned snake, no goal, zero score."""
    return GameState(snake=config.spawn(), interval_ms=config.initial_interval_ms)


def turn(state: GameState, direction: Direction) -> GameState:
    """Apply a direction request to the head; reversals are ignored."""
    snake = turn_head(state.snake, direction)
    if snake is state.snake:
        return state
    return replace(state, snake=snake)


def occupied(state: GameState) -> list[Position]:
    return positions(state.snake)
