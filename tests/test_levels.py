"""Tests for level selection and the difficulty controller."""

import pytest

from torus_snake.levels import (
    DEFAULT_LEVELS,
    DifficultyController,
    Level,
    LevelPolicy,
    select_level,
)


def _name(score, policy):
    level = select_level(score, DEFAULT_LEVELS, policy)
    return level.name if level is not None else None


class TestLevel:
    def test_contains(self):
        level = Level("mid", 500, 10, 20)
        assert level.contains(10)
        assert level.contains(20)
        assert not level.contains(9)
        assert not level.contains(21)

    def test_open_ended(self):
        assert Level("top", 300, 100).contains(10_000)

    def test_invalid_interval(self):
        with pytest.raises(ValueError, match="positive"):
            Level("bad", 0, 0)

    def test_inverted_window(self):
        with pytest.raises(ValueError, match="below min_score"):
            Level("bad", 100, 50, 10)


class TestRangePolicy:
    def test_window_matches(self):
        assert _name(0, LevelPolicy.RANGE) == "easy"
        assert _name(40, LevelPolicy.RANGE) == "easy"
        assert _name(50, LevelPolicy.RANGE) == "medium"
        assert _name(120, LevelPolicy.RANGE) == "hard"
        assert _name(500, LevelPolicy.RANGE) == "impossible"

    def test_first_match_wins_on_overlap(self):
        assert _name(140, LevelPolicy.RANGE) == "hard"

    def test_gaps_match_nothing(self):
        assert _name(45, LevelPolicy.RANGE) is None
        assert _name(-1, LevelPolicy.RANGE) is None
        assert _name(1001, LevelPolicy.RANGE) is None


class TestFloorPolicy:
    def test_highest_floor(self):
        assert _name(0, LevelPolicy.FLOOR) == "easy"
        assert _name(45, LevelPolicy.FLOOR) == "easy"
        assert _name(99, LevelPolicy.FLOOR) == "medium"
        assert _name(140, LevelPolicy.FLOOR) == "impossible"
        assert _name(5000, LevelPolicy.FLOOR) == "impossible"

    def test_below_every_floor(self):
        assert _name(-1, LevelPolicy.FLOOR) is None

    def test_table_order_irrelevant(self):
        shuffled = tuple(reversed(DEFAULT_LEVELS))
        level = select_level(60, shuffled, LevelPolicy.FLOOR)
        assert level.name == "medium"


class TestDeterminism:
    @pytest.mark.parametrize("policy", list(LevelPolicy))
    def test_repeated_evaluation_is_stable(self, policy):
        for score in (-5, 0, 45, 50, 140, 999, 2000):
            first = select_level(score, DEFAULT_LEVELS, policy)
            for _ in range(10):
                assert select_level(score, DEFAULT_LEVELS, policy) == first


class TestDifficultyController:
    def test_requires_levels(self):
        with pytest.raises(ValueError, match="At least one level"):
            DifficultyController(levels=())

    def test_interval_for_matching_level(self):
        ctrl = DifficultyController()
        assert ctrl.interval_for(0, 1000) == 1000
        assert ctrl.interval_for(60, 1000) == 800
        assert ctrl.interval_for(150, 800) == 400

    def test_unmatched_keeps_current(self):
        ctrl = DifficultyController()
        assert ctrl.interval_for(45, 800) == 800
        assert ctrl.interval_for(-3, 600) == 600

    def test_floor_policy(self):
        ctrl = DifficultyController(policy=LevelPolicy.FLOOR)
        assert ctrl.interval_for(45, 1000) == 1000
        assert ctrl.interval_for(140, 1000) == 400
