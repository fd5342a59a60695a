"""Headless throughput measurement and scripted runs."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snake_engine.engine import GameEngine, TickOutcome
from snake_engine.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS: list[Direction] = list(Direction)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_ticks: int
    best_score: int
    wall_time_seconds: float
    games_per_second: float
    ticks_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_ticks} ticks in "
            f"{self.wall_time_seconds:.2f}s (best score {self.best_score}) | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def play_random_run(
    engine: GameEngine,
    rng: np.random.Generator,
    *,
    max_ticks: int = 1_000,
    steer_prob: float = 0.3,
) -> tuple[TickOutcome | None, int]:
    """Tick *engine* with random steering until it loses or *max_ticks*.

    Returns the final outcome (``None`` if no tick ran) and the number
    of ticks performed.
    """
    outcome: TickOutcome | None = None
    ticks = 0
    while ticks < max_ticks:
        if rng.random() < steer_prob:
            engine.steer(_DIRECTIONS[int(rng.integers(len(_DIRECTIONS)))])
        outcome = engine.tick()
        ticks += 1
        if outcome.lost:
            break
    return outcome, ticks


def benchmark_throughput(
    *,
    num_games: int = 100,
    grid_width: int = 20,
    grid_height: int = 20,
    max_ticks: int = 500,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw tick throughput.

    Plays *num_games* runs on one engine using random steering and
    reports games/second and ticks/second.
    """
    rng = np.random.default_rng(seed)
    engine = GameEngine(
        width=grid_width,
        height=grid_height,
        rng=np.random.default_rng(int(rng.integers(2**31))),
    )

    total_ticks = 0
    start = time.perf_counter()
    for _ in range(num_games):
        outcome, ticks = play_random_run(engine, rng, max_ticks=max_ticks)
        total_ticks += ticks
        if outcome is not None and not outcome.lost:
            engine.reset()

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_ticks=total_ticks,
        best_score=engine.scores.best or 0,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        ticks_per_second=total_ticks / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
