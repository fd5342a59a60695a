"""Tick-based simulation engine composing grid, snake, steering and apples."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from snake_engine.apple import AppleBoard, AppleSpawner
from snake_engine.collision import CollisionKind, check
from snake_engine.config import GameConfig
from snake_engine.difficulty import SpeedCurve, hyperbolic_interval
from snake_engine.grid import DEFAULT_HEIGHT, DEFAULT_WIDTH, Cell, Grid
from snake_engine.scores import ScoreHistory
from snake_engine.snake import START_LENGTH, Direction, SnakeBody
from snake_engine.steering import SteeringBuffer

logger = logging.getLogger(__name__)

DEFAULT_START_HEAD: Cell = (START_LENGTH + 1, 3)


class Outcome(enum.Enum):
    CONTINUED = "continued"
    LOST = "lost"


@dataclass(frozen=True)
class TickOutcome:
    """What a single tick did to the run."""

    kind: Outcome
    score: int
    collision: CollisionKind = CollisionKind.NONE

    @property
    def lost(self) -> bool:
        return self.kind is Outcome.LOST

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "score": self.score,
            "collision": self.collision.value,
        }


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the engine for renderers.

    ``tick``, ``update_interval`` and ``last_tail`` are presentation hints
    for interpolation; the simulation never reads them back.
    """

    width: int
    height: int
    snake: tuple[Cell, ...]
    apples: tuple[Cell, ...]
    direction: Direction
    score: int
    paused: bool
    last_score: int | None
    tick: int
    update_interval: float
    last_tail: Cell

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict."""
        return {
            "grid": {"width": self.width, "height": self.height},
            "snake": [list(c) for c in self.snake],
            "apples": [list(c) for c in self.apples],
            "direction": self.direction.name.lower(),
            "score": self.score,
            "paused": self.paused,
            "last_score": self.last_score,
            "tick": self.tick,
            "update_interval_ms": round(self.update_interval * 1000.0, 3),
            "last_tail": list(self.last_tail),
        }


class GameEngine:
    """Single-player snake simulation advanced one tick at a time.

    The engine owns the board, body, apples and steering buffer for the
    current run. The host owns the engine, calls :meth:`maybe_tick` once
    per frame and feeds it :meth:`steer` commands. A run that collides is
    recorded in :attr:`scores` and replaced by a fresh, paused run.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        *,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        speed_curve: SpeedCurve = hyperbolic_interval,
        spawner: AppleSpawner | None = None,
        scores: ScoreHistory | None = None,
        start_head: Cell = DEFAULT_START_HEAD,
    ) -> None:
        self.grid = Grid(width=width, height=height)
        start = SnakeBody.horizontal(start_head)
        if not all(self.grid.contains(c) for c in start):
            raise ValueError(
                f"Starting snake {list(start)} does not fit {self.grid!r}.",
            )

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.speed_curve = speed_curve
        self.spawner = spawner if spawner is not None else AppleSpawner()
        self.scores = scores if scores is not None else ScoreHistory()
        self.start_head = start_head

        self.snake = start
        self.apples = AppleBoard(self.grid)
        self.steering = SteeringBuffer()
        self.paused = True
        self.tick_count = 0
        self.update_interval = speed_curve(0)
        self.last_score: int | None = None
        self.last_tail: Cell = self._initial_tail_hint()

    @classmethod
    def from_config(
        cls, config: GameConfig, scores: ScoreHistory | None = None,
    ) -> GameEngine:
        """Build an engine from a :class:`GameConfig`."""
        if scores is None:
            scores = ScoreHistory(limit=config.max_scores)
        return cls(
            width=config.board_width,
            height=config.board_height,
            seed=config.seed,
            speed_curve=config.speed_curve_fn(),
            spawner=AppleSpawner(
                max_apples=config.max_apples,
                spawn_period=config.apple_spawn_period,
            ),
            scores=scores,
        )

    # ------------------------------------------------------------------
    # Host commands
    # ------------------------------------------------------------------

    def steer(self, direction: Direction) -> bool:
        """Queue a turn. Returns True if the steering buffer accepted it."""
        return self.steering.steer(direction)

    def toggle_pause(self) -> bool:
        """Flip the paused flag and return the new value."""
        self.paused = not self.paused
        return self.paused

    @property
    def score(self) -> int:
        return len(self.snake) - START_LENGTH

    @property
    def direction(self) -> Direction:
        return self.steering.direction

    def maybe_tick(self, elapsed: float) -> TickOutcome | None:
        """Tick once if *elapsed* seconds cover the update interval.

        Never ticks while paused and never more than once per call.
        Returns ``None`` when no tick happened. A negative *elapsed*
        (clock rollback) counts as zero.
        """
        if self.paused:
            return None
        if max(elapsed, 0.0) < self.update_interval:
            return None
        return self.tick()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> TickOutcome:
        """Advance the simulation by exactly one step."""
        score = self.score
        direction = self.steering.advance()
        new_head = self.snake.next_head(direction)

        # Wall check happens before any state is touched.
        if not self.grid.contains(new_head):
            return self._lose(score, CollisionKind.WALL)

        self.last_tail = self.snake.tail

        if not self.apples.remove(new_head):
            self.snake.pop_tail()

        # The tail has already moved, so following it is legal.
        collision = check(new_head, self.snake, self.grid)
        if collision is not CollisionKind.NONE:
            return self._lose(score, collision)

        self.snake.push_head(new_head)

        self.spawner.maybe_spawn(
            self.apples, self.snake, self.grid, self.update_interval, self.rng,
        )

        self.tick_count += 1
        self.update_interval = self.speed_curve(self.score)
        return TickOutcome(Outcome.CONTINUED, self.score)

    def reset(self) -> None:
        """Start a fresh, paused run. The score history is kept."""
        self.snake = SnakeBody.horizontal(self.start_head)
        self.apples.clear()
        self.steering.reset()
        self.paused = True
        self.tick_count = 0
        self.update_interval = self.speed_curve(0)
        self.last_tail = self._initial_tail_hint()

    def _lose(self, score: int, collision: CollisionKind) -> TickOutcome:
        # *score* is taken before the tail pop, so a self collision reports
        # the full length reached rather than one less.
        recorded = self.scores.record(score)
        logger.info(
            "Run lost at tick %d with score %d (%s collision, recorded=%s).",
            self.tick_count, score, collision.value, recorded,
        )
        self.reset()
        self.last_score = score
        return TickOutcome(Outcome.LOST, score, collision)

    def _initial_tail_hint(self) -> Cell:
        x, y = self.start_head
        return x - START_LENGTH, y

    def snapshot(self) -> Snapshot:
        """Return an immutable view of the current run."""
        return Snapshot(
            width=self.grid.width,
            height=self.grid.height,
            snake=tuple(self.snake),
            apples=tuple(self.apples.positions()),
            direction=self.direction,
            score=self.score,
            paused=self.paused,
            last_score=self.last_score,
            tick=self.tick_count,
            update_interval=self.update_interval,
            last_tail=self.last_tail,
        )
