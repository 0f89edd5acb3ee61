"""Game configuration with JSON persistence."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from torus_snake.grid import Grid
from torus_snake.levels import DEFAULT_LEVELS, Level, LevelPolicy
from torus_snake.snake import Direction, spawn_snake

logger = logging.getLogger(__name__)


class ScorePolicy(enum.Enum):
    """How the score reacts when the snake bites off its own loop.

    Eating a goal always adds the reward. ``LENGTH`` then recomputes the
    score from the remaining length on truncation; ``INCREMENT`` leaves
    it untouched.
    """

    LENGTH = "length"
    INCREMENT = "increment"


@dataclass(frozen=True)
class GameConfig:
    """Full game configuration.

    Supports JSON serialization for reproducibility.
    """

    # Grid
    rows: int = 16
    cols: int = 16

    # Snake
    snake_length: int = 4
    start_direction: Direction = Direction.UP

    # Scoring
    goal_reward: int = 10
    score_policy: ScorePolicy = ScorePolicy.LENGTH

    # Speed
    initial_interval_ms: int = 1000
    level_policy: LevelPolicy = LevelPolicy.RANGE
    levels: tuple[Level, ...] = field(default=DEFAULT_LEVELS)

    # Goal placement RNG
    seed: int | None = None

    def __post_init__(self) -> None:
        grid = Grid(self.rows, self.cols)
        if self.snake_length < 1:
            raise ValueError("snake_length must be at least 1.")
        if self.goal_reward < 0:
            raise ValueError("goal_reward must be non-negative.")
        if self.initial_interval_ms <= 0:
            raise ValueError("initial_interval_ms must be positive.")
        if not self.levels:
            raise ValueError("levels must contain at least one level.")

        for seg in self.spawn():
            if not grid.in_bounds(*seg.position):
                raise ValueError(
                    "snake_length does not fit the configured grid; "
                    "increase grid size or reduce length."
                )

    def grid(self) -> Grid:
        return Grid(self.rows, self.cols)

    def spawn(self):
        """Initial snake centred on the grid."""
        return spawn_snake(
            self.rows // 2,
            self.cols // 2,
            self.start_direction,
            self.snake_length,
        )

    def with_overrides(self, **overrides) -> GameConfig:
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        """Serialize to a plain JSON-compatible dict."""
        return {
            "rows": self.rows,
            "cols": self.cols,
            "snake_length": self.snake_length,
            "start_direction": self.start_direction.name,
            "goal_reward": self.goal_reward,
            "score_policy": self.score_policy.value,
            "initial_interval_ms": self.initial_interval_ms,
            "level_policy": self.level_policy.value,
            "levels": [level.to_dict() for level in self.levels],
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        d = dict(raw)
        if "start_direction" in d:
            d["start_direction"] = Direction[d["start_direction"]]
        if "score_policy" in d:
            d["score_policy"] = ScorePolicy(d["score_policy"])
        if "level_policy" in d:
            d["level_policy"] = LevelPolicy(d["level_policy"])
        if "levels" in d:
            d["levels"] = tuple(Level(**lv) for lv in d["levels"])
        return cls(**d)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
