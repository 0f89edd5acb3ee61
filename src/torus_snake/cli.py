"""Command-line tools: headless simulation and config export."""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="torus-snake",
        description="Torus Snake headless runner and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a headless game with random turns.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override it).",
    )
    sim_p.add_argument("--ticks", type=int, default=100)
    sim_p.add_argument("--rows", type=int, default=None)
    sim_p.add_argument("--cols", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--turn-prob", type=float, default=0.2,
        help="Chance per tick of requesting a random direction.",
    )
    sim_p.add_argument(
        "--score-policy", type=str, default=None,
        choices=["length", "increment"],
    )
    sim_p.add_argument(
        "--level-policy", type=str, default=None,
        choices=["range", "floor"],
    )
    sim_p.add_argument(
        "--show-every", type=int, default=0,
        help="Print the board every N ticks (0 = only at the end).",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write the default config as JSON.")
    cfg_p.add_argument("output", help="Path for the config file.")

    return parser


def _load_config(args: argparse.Namespace):
    from torus_snake.config import GameConfig, ScorePolicy
    from torus_snake.levels import LevelPolicy

    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    for name in ("rows", "cols", "seed"):
        val = getattr(args, name, None)
        if val is not None:
            overrides[name] = val
    if args.score_policy is not None:
        overrides["score_policy"] = ScorePolicy(args.score_policy)
    if args.level_policy is not None:
        overrides["level_policy"] = LevelPolicy(args.level_policy)
    return config.with_overrides(**overrides) if overrides else config


def _run_simulate(args: argparse.Namespace) -> int:
    from torus_snake.clock import ManualClock
    from torus_snake.engine import GameEngine
    from torus_snake.render import BoardRenderer
    from torus_snake.snake import Direction

    try:
        config = _load_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    clock = ManualClock()
    renderer = BoardRenderer(config.grid())
    engine = GameEngine(config, clock=clock, renderer=renderer)
    # Separate stream so turn choices do not disturb goal placement.
    input_rng = np.random.default_rng(
        None if config.seed is None else config.seed + 1,
    )
    directions = list(Direction)

    engine.start()
    for i in range(args.ticks):
        if input_rng.random() < args.turn_prob:
            engine.set_direction(directions[int(input_rng.integers(4))])
        clock.advance(1)
        if args.show_every and (i + 1) % args.show_every == 0:
            print(f"Tick {engine.state.tick}")  # noqa: T201
            print(renderer.to_text())  # noqa: T201
    engine.stop()

    state = engine.get_state()
    print(renderer.to_text())  # noqa: T201
    print(  # noqa: T201
        f"Ticks: {state['tick']}  Length: {len(state['snake'])}  "
        f"Level: {state['level']}  Interval: {state['interval_ms']} ms  "
        f"Clock restarts: {len(clock.starts) - 1}"
    )
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from torus_snake.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``torus-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
