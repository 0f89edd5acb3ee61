"""Tests for the headless CLI."""

import json

from torus_snake.cli import _build_parser, main
from torus_snake.config import GameConfig, ScorePolicy


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.config is None
        assert args.ticks == 100
        assert args.rows is None
        assert args.turn_prob == 0.2
        assert args.show_every == 0

    def test_simulate_with_flags(self):
        args = _build_parser().parse_args([
            "simulate",
            "--ticks", "50",
            "--rows", "12",
            "--cols", "10",
            "--seed", "7",
            "--score-policy", "increment",
            "--level-policy", "floor",
        ])
        assert args.ticks == 50
        assert args.rows == 12
        assert args.cols == 10
        assert args.seed == 7
        assert args.score_policy == "increment"
        assert args.level_policy == "floor"

    def test_config_args(self):
        args = _build_parser().parse_args(["config", "out.json"])
        assert args.command == "config"
        assert args.output == "out.json"


class TestCLISimulate:
    def test_short_run(self, capsys):
        result = main(["simulate", "--ticks", "20", "--seed", "3"])
        assert result == 0
        out = capsys.readouterr().out
        assert "Score:" in out
        assert "Ticks: 20" in out

    def test_show_every(self, capsys):
        result = main(["simulate", "--ticks", "4", "--seed", "1", "--show-every", "2"])
        assert result == 0
        out = capsys.readouterr().out
        assert "Tick 2" in out
        assert "Tick 4" in out

    def test_from_config_file(self, tmp_path, capsys):
        path = tmp_path / "cfg.json"
        GameConfig(rows=10, cols=10, score_policy=ScorePolicy.INCREMENT).save(path)
        result = main(["simulate", "--config", str(path), "--ticks", "5", "--seed", "0"])
        assert result == 0
        board = capsys.readouterr().out.splitlines()
        assert len(board[0]) == 10

    def test_invalid_grid_returns_2(self):
        assert main(["simulate", "--rows", "2"]) == 2


class TestCLIConfig:
    def test_writes_loadable_config(self, tmp_path):
        path = tmp_path / "default.json"
        assert main(["config", str(path)]) == 0
        assert json.loads(path.read_text())["rows"] == 16
        assert GameConfig.load(path).rows == 16
