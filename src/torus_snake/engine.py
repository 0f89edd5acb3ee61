"""Tick-driven game engine composing the state transitions with a clock and renderer."""

from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np

from torus_snake.clock import Clock, ManualClock
from torus_snake.collision import TickOutcome, resolve_tick
from torus_snake.config import GameConfig
from torus_snake.goal import place_goal
from torus_snake.grid import Position
from torus_snake.levels import DifficultyController
from torus_snake.render import RenderSink
from torus_snake.snake import Direction
from torus_snake.state import GameState, initial_state, occupied, turn

logger = logging.getLogger(__name__)


class GameEngine:
    """Single-snake game on a wrap-around grid.

    The engine owns the current :class:`GameState` and replaces it on
    every transition. Time comes from a :class:`Clock`; drawing goes to an
    optional :class:`RenderSink`. Controls are :meth:`start`, :meth:`stop`
    and :meth:`reset`; input arrives through :meth:`set_direction`.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        clock: Clock | None = None,
        renderer: RenderSink | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = self.config.grid()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.clock = clock if clock is not None else ManualClock()
        self.renderer = renderer
        self.difficulty = DifficultyController(
            self.config.levels, self.config.level_policy,
        )
        self.state: GameState = initial_state(self.config)
        self.running = False
        self._draw()

    # --- controls ---

    def start(self, retime: bool = False) -> None:
        """Place a goal and start ticking.

        A plain start always places a fresh goal, even while running; the
        clock itself is only started once. A *retime* restart (after a
        level change) keeps the existing goal.
        """
        if not retime or self.state.goal is None:
            self._set_goal(place_goal(self.grid, self.state.snake, self.rng))
        if self.running:
            return
        self.running = True
        self.clock.start_ticking(
            self.state.interval_ms, self.tick, self._clock_failed,
        )
        logger.info("Game started at %d ms per tick.", self.state.interval_ms)

    def stop(self) -> None:
        """Stop ticking. Does nothing if already stopped."""
        if not self.running:
            return
        self.running = False
        self.clock.stop_ticking()
        logger.info("Game stopped at tick %d.", self.state.tick)

    def reset(self) -> None:
        """Stop and reinitialise snake, score and speed."""
        self.stop()
        self._set_goal(None)
        self.state = initial_state(self.config)
        self._draw()
        logger.info("Game reset.")

    # --- input ---

    def set_direction(self, direction: Direction) -> None:
        """Turn the head now; a request to reverse is ignored."""
        self.state = turn(self.state, direction)

    # --- clock callback ---

    def tick(self) -> TickOutcome:
        """Advance the game by one tick and redraw."""
        outcome = resolve_tick(self.state, self.grid, self.config, self.rng)
        state = outcome.state

        if outcome.ate_goal:
            self._move_goal_marker(outcome.previous_goal, state.goal)

        interval = self.difficulty.interval_for(state.score, state.interval_ms)
        retime = interval != state.interval_ms
        if retime:
            state = replace(state, interval_ms=interval)
            outcome = replace(outcome, state=state)

        self.state = state
        self._draw()

        # Full clock restart rather than a smooth reschedule.
        if retime and self.running:
            self.stop()
            self.start(retime=True)
        return outcome

    # --- queries ---

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        level = self.difficulty.level_for(self.state.score)
        return {
            **self.state.to_dict(),
            "running": self.running,
            "level": level.name if level is not None else None,
            "grid": self.grid.to_dict(),
        }

    # --- helpers ---

    def _clock_failed(self, exc: BaseException) -> None:
        self.running = False
        logger.error(
            "Clock stopped by an error at tick %d: %s", self.state.tick, exc,
        )

    def _set_goal(self, goal: Position | None) -> None:
        self._move_goal_marker(self.state.goal, goal)
        self.state = replace(self.state, goal=goal)

    def _move_goal_marker(
        self, old: Position | None, new: Position | None,
    ) -> None:
        if self.renderer is None:
            return
        if old is not None:
            self.renderer.unmark_goal(old)
        if new is not None:
            self.renderer.mark_goal(new)

    def _draw(self) -> None:
        if self.renderer is None:
            return
        self.renderer.clear_all_non_goal()
        self.renderer.paint_occupied(occupied(self.state))
        self.renderer.set_score_display(self.state.score)
