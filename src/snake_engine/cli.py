"""Command-line tools for the snake engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-engine",
        description="Headless snake simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure simulation throughput.",
    )
    bench_p.add_argument("--num-games", type=int, default=100)
    bench_p.add_argument("--grid-width", type=int, default=20)
    bench_p.add_argument("--grid-height", type=int, default=20)
    bench_p.add_argument("--max-ticks", type=int, default=500)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play one run with random steering.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=int, default=1_000)
    sim_p.add_argument("--steer-prob", type=float, default=0.3)

    return parser


def _run_benchmark(args: argparse.Namespace) -> int:
    from snake_engine.benchmark import benchmark_throughput

    result = benchmark_throughput(
        num_games=args.num_games,
        grid_width=args.grid_width,
        grid_height=args.grid_height,
        max_ticks=args.max_ticks,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from dataclasses import replace

    import numpy as np

    from snake_engine.benchmark import play_random_run
    from snake_engine.config import GameConfig
    from snake_engine.engine import GameEngine

    config = GameConfig.load(args.config) if args.config else GameConfig()
    if args.seed is not None:
        config = replace(config, seed=args.seed)

    engine = GameEngine.from_config(config)
    outcome, ticks = play_random_run(
        engine,
        np.random.default_rng(config.seed),
        max_ticks=args.max_ticks,
        steer_prob=args.steer_prob,
    )
    report = {
        "ticks": ticks,
        "outcome": outcome.to_dict() if outcome is not None else None,
        "scores": engine.scores.to_list(),
        "snapshot": engine.snapshot().to_dict(),
    }
    print(json.dumps(report, indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-engine`` CLI."""
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
        "benchmark": _run_benchmark,
        "simulate": _run_simulate,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
