"""Per-tick resolution: movement, goal consumption, self-intersection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from torus_snake.config import GameConfig, ScorePolicy
from torus_snake.goal import place_goal
from torus_snake.snake import Snake, extend_tail, move, propagate_directions

if TYPE_CHECKING:
    import numpy as np

    from torus_snake.grid import Grid, Position
    from torus_snake.state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickOutcome:
    """Result of resolving one tick."""

    state: GameState
    ate_goal: bool = False
    previous_goal: Position | None = None
    truncated: int = 0


def find_intersection(snake: Snake) -> int | None:
    """Return the body index the head collides with, or ``None``.

    Only ``body[1:]`` is searched and the earliest match wins. A match on
    the segment right behind the head is not a collision, so the smallest
    index ever returned is 2.
    """
    head = snake[0].position
    body = [seg.position for seg in snake[1:]]
    try:
        idx = body.index(head)
    except ValueError:
        return None
    if idx > 0:
        return idx + 1
    return None


def truncate(snake: Snake, index: int) -> Snake:
    """Keep the head and everything up to and including ``snake[index]``.

    The colliding segment is kept, so right after a bite the head shares
    its cell with the new tail and a snake of length 3 covers two cells.
    Dropping that segment as well would break the ``[h, a, b, c, d]`` to
    ``[h', a', b']`` bite rule, so the overlap is accepted. While head and
    tail stay together, later ticks find the tail again and drop nothing.
    """
    return snake[: index + 1]


def resolve_tick(
    state: GameState,
    grid: Grid,
    config: GameConfig,
    rng: np.random.Generator,
) -> TickOutcome:
    """Advance *state* by one tick.

    Goal consumption and truncation never both happen in the same tick:
    the intersection check only runs when no goal was eaten.
    """
    snake = move(state.snake, grid)
    score = state.score
    goal = state.goal
    ate_goal = False
    truncated = 0

    if goal is not None and snake[0].position == goal:
        ate_goal = True
        score += config.goal_reward
        snake = extend_tail(snake, grid)
        goal = place_goal(grid, snake, rng)
    else:
        index = find_intersection(snake)
        if index is not None:
            truncated = len(snake) - (index + 1)
            snake = truncate(snake, index)
            if config.score_policy is ScorePolicy.LENGTH:
                score = len(snake) - config.snake_length
            logger.info(
                "Snake bit itself at tick %d; dropped %d segment(s), score %d.",
                state.tick + 1, truncated, score,
            )

    new_state = replace(
        state,
        snake=propagate_directions(snake),
        goal=goal,
        score=score,
        tick=state.tick + 1,
    )
    return TickOutcome(
        state=new_state,
        ate_goal=ate_goal,
        previous_goal=state.goal if ate_goal else None,
        truncated=truncated,
    )
