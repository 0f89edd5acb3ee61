"""Difficulty levels mapping the score to a tick interval."""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)


class LevelPolicy(enum.Enum):
    """How a score is matched against the level table."""

    RANGE = "range"
    FLOOR = "floor"


@dataclass(frozen=True)
class Level:
    """A difficulty tier: a score window and the tick interval it runs at.

    ``max_score`` of ``None`` leaves the window open at the top. The
    ``floor`` policy only looks at ``min_score``.
    """

    name: str
    interval_ms: int
    min_score: int
    max_score: int | None = None

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ValueError("Level interval_ms must be positive.")
        if self.max_score is not None and self.max_score < self.min_score:
            raise ValueError(
                f"Level {self.name!r} has max_score below min_score."
            )

    def contains(self, score: int) -> bool:
        if score < self.min_score:
            return False
        return self.max_score is None or score <= self.max_score

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_LEVELS: tuple[Level, ...] = (
    Level("easy", 1000, 0, 40),
    Level("medium", 800, 50, 90),
    Level("hard", 600, 100, 140),
    Level("impossible", 400, 140, 1000),
)


def select_level(
    score: int,
    levels: Sequence[Level],
    policy: LevelPolicy = LevelPolicy.RANGE,
) -> Level | None:
    """Return the level matching *score*, or ``None`` if none does.

    ``RANGE`` takes the first level in table order whose window holds the
    score. ``FLOOR`` takes the level with the highest ``min_score`` not
    above the score; on ties the later entry wins.
    """
    if policy is LevelPolicy.RANGE:
        for level in levels:
            if level.contains(score):
                return level
        return None

    best: Level | None = None
    for level in levels:
        if level.min_score <= score and (
            best is None or level.min_score >= best.min_score
        ):
            best = level
    return best


class DifficultyController:
    """Resolves the tick interval for a score against a level table."""

    def __init__(
        self,
        levels: Sequence[Level] = DEFAULT_LEVELS,
        policy: LevelPolicy = LevelPolicy.RANGE,
    ) -> None:
        if not levels:
            raise ValueError("At least one level is required.")
        self.levels = tuple(levels)
        self.policy = policy

    def level_for(self, score: int) -> Level | None:
        return select_level(score, self.levels, self.policy)

    def interval_for(self, score: int, current_ms: int) -> int:
        """Interval to tick at; unmatched scores keep *current_ms*."""
        level = self.level_for(score)
        if level is None:
            return current_ms
        if level.interval_ms != current_ms:
            logger.info(
                "Score %d reached level %r (%d ms per tick).",
                score, level.name, level.interval_ms,
            )
        return level.interval_ms
