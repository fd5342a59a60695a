"""Tests for the GameEngine module."""

import json

import numpy as np
import pytest

from snake_engine.collision import CollisionKind
from snake_engine.config import GameConfig
from snake_engine.difficulty import constant_interval, hyperbolic_interval
from snake_engine.engine import GameEngine, Outcome
from snake_engine.scores import ScoreHistory
from snake_engine.snake import Direction, SnakeBody
from snake_engine.steering import SteeringBuffer


def _engine(head=(5, 5), **kwargs) -> GameEngine:
    kwargs.setdefault("seed", 0)
    return GameEngine(width=10, height=10, start_head=head, **kwargs)


class TestEngineInit:
    def test_default_init(self):
        engine = GameEngine(seed=0)
        assert engine.grid.width == 64
        assert engine.grid.height == 20
        assert list(engine.snake) == [(4, 3), (3, 3), (2, 3)]
        assert engine.last_tail == (1, 3)
        assert engine.score == 0
        assert engine.tick_count == 0
        assert engine.paused
        assert engine.last_score is None
        assert engine.direction == Direction.RIGHT
        assert len(engine.apples) == 0
        assert engine.update_interval == pytest.approx(0.2)

    def test_start_must_fit(self):
        with pytest.raises(ValueError, match="does not fit"):
            GameEngine(width=10, height=10, start_head=(1, 5))

    def test_from_config(self):
        config = GameConfig(
            board_width=12, board_height=8, max_apples=2,
            speed_curve="constant", base_interval_ms=150, max_scores=3,
        )
        engine = GameEngine.from_config(config)
        assert engine.grid.width == 12
        assert engine.spawner.max_apples == 2
        assert engine.update_interval == pytest.approx(0.15)
        assert engine.scores.limit == 3


class TestTickScenarios:
    def test_plain_move(self):
        engine = _engine()
        outcome = engine.tick()
        assert outcome.kind is Outcome.CONTINUED
        assert list(engine.snake) == [(6, 5), (5, 5), (4, 5)]
        assert engine.score == 0
        assert engine.last_tail == (3, 5)
        assert engine.tick_count == 1

    def test_eating_grows(self):
        engine = _engine()
        engine.apples.add((6, 5))
        outcome = engine.tick()
        assert outcome.kind is Outcome.CONTINUED
        assert outcome.score == 1
        assert list(engine.snake) == [(6, 5), (5, 5), (4, 5), (3, 5)]
        assert engine.score == 1
        assert (6, 5) not in engine.apples

    def test_spawns_apple_when_none(self):
        engine = _engine()
        engine.tick()
        assert len(engine.apples) == 1
        assert not set(engine.apples.positions()) & set(engine.snake)

    def test_direction_change(self):
        engine = _engine()
        engine.steer(Direction.UP)
        engine.tick()
        assert engine.snake.head == (5, 4)
        assert engine.direction == Direction.UP

    def test_queued_turns_apply_on_consecutive_ticks(self):
        engine = _engine()
        engine.steer(Direction.UP)
        engine.steer(Direction.LEFT)
        engine.tick()
        engine.tick()
        assert list(engine.snake)[:2] == [(4, 4), (5, 4)]

    def test_up_then_down_only_queues_up(self):
        engine = _engine()
        assert engine.steer(Direction.UP)
        assert not engine.steer(Direction.DOWN)
        assert engine.steering.pending == [Direction.UP]

    def test_interval_tracks_score(self):
        engine = _engine()
        engine.apples.add((6, 5))
        engine.tick()
        assert engine.update_interval == pytest.approx(hyperbolic_interval(1))


class TestWallCollision:
    def test_loses_at_right_wall(self):
        engine = _engine(head=(9, 5))
        engine.paused = False
        outcome = engine.tick()
        assert outcome.lost
        assert outcome.collision == CollisionKind.WALL
        assert outcome.score == 0
        assert engine.scores.to_list() == []
        assert engine.last_score == 0

    def test_run_resets_paused(self):
        engine = _engine(head=(9, 5))
        engine.paused = False
        engine.tick()
        assert engine.paused
        assert list(engine.snake) == [(9, 5), (8, 5), (7, 5)]
        assert engine.tick_count == 0
        assert len(engine.apples) == 0
        assert engine.direction == Direction.RIGHT

    def test_positive_score_recorded(self):
        engine = _engine(head=(7, 5))
        engine.apples.add((8, 5))
        engine.tick()
        engine.apples.clear()
        engine.tick()
        outcome = engine.tick()
        assert outcome.lost
        assert outcome.score == 1
        assert engine.scores.to_list() == [1]
        assert engine.last_score == 1
        assert engine.score == 0


class TestSelfCollision:
    def test_following_the_tail_is_legal(self):
        engine = _engine()
        engine.snake = SnakeBody([(5, 5), (5, 6), (4, 6), (4, 5)])
        engine.steering = SteeringBuffer(Direction.UP)
        engine.steer(Direction.LEFT)
        outcome = engine.tick()
        assert outcome.kind is Outcome.CONTINUED
        assert list(engine.snake) == [(4, 5), (5, 5), (5, 6), (4, 6)]

    def test_tail_that_stays_after_eating_blocks(self):
        engine = _engine()
        engine.snake = SnakeBody([(5, 5), (5, 6), (4, 6), (4, 5)])
        engine.steering = SteeringBuffer(Direction.UP)
        engine.steer(Direction.LEFT)
        engine.apples.add((4, 5))
        outcome = engine.tick()
        assert outcome.lost
        assert outcome.collision == CollisionKind.SELF
        assert outcome.score == 1

    def test_hitting_body_loses(self):
        engine = _engine()
        engine.snake = SnakeBody([(5, 5), (5, 6), (4, 6), (4, 5), (4, 4)])
        engine.steering = SteeringBuffer(Direction.UP)
        engine.steer(Direction.LEFT)
        outcome = engine.tick()
        assert outcome.lost
        assert outcome.collision == CollisionKind.SELF
        assert outcome.score == 2
        assert engine.scores.to_list() == [2]

    def test_history_shared_with_host(self):
        scores = ScoreHistory([5])
        engine = _engine(scores=scores)
        engine.snake = SnakeBody([(5, 5), (5, 6), (4, 6), (4, 5), (4, 4)])
        engine.steering = SteeringBuffer(Direction.UP)
        engine.steer(Direction.LEFT)
        engine.tick()
        assert scores.to_list() == [5, 2]


class TestMaybeTick:
    def test_paused_never_ticks(self):
        engine = _engine()
        assert engine.maybe_tick(10.0) is None
        assert engine.tick_count == 0

    def test_waits_for_interval(self):
        engine = _engine()
        engine.toggle_pause()
        assert engine.maybe_tick(0.1) is None
        assert engine.maybe_tick(0.2) is not None
        assert engine.tick_count == 1

    def test_at_most_one_tick_per_call(self):
        engine = _engine()
        engine.paused = False
        engine.maybe_tick(5.0)
        assert engine.tick_count == 1

    def test_negative_elapsed_is_zero(self):
        engine = _engine(speed_curve=constant_interval(0.1))
        engine.paused = False
        assert engine.maybe_tick(-3.0) is None
        assert engine.tick_count == 0

    def test_toggle_pause(self):
        engine = _engine()
        assert engine.toggle_pause() is False
        assert engine.toggle_pause() is True


class TestInvariants:
    @pytest.mark.parametrize("seed", [1, 7, 21])
    def test_random_play(self, seed):
        engine = GameEngine(width=12, height=10, seed=seed)
        rng = np.random.default_rng(seed)
        directions = list(Direction)
        for _ in range(400):
            if rng.random() < 0.4:
                engine.steer(directions[int(rng.integers(4))])
            before = len(engine.snake)
            previous = engine.direction
            outcome = engine.tick()
            if outcome.lost:
                history = engine.scores.to_list()
                assert len(history) <= 10
                assert history == sorted(history, reverse=True)
                if outcome.score > 0:
                    assert history[0] >= outcome.score
                continue
            assert engine.direction != previous.opposite()
            assert len(engine.snake) - before in (0, 1)
            assert engine.score == len(engine.snake) - 3
            assert len(engine.apples) <= 10
            assert not set(engine.apples.positions()) & set(engine.snake)
            assert len(set(engine.snake)) == len(engine.snake)


class TestSnapshot:
    def test_contents(self):
        engine = _engine()
        engine.tick()
        snap = engine.snapshot()
        assert snap.width == 10
        assert snap.snake == ((6, 5), (5, 5), (4, 5))
        assert snap.apples == tuple(engine.apples.positions())
        assert snap.score == 0
        assert snap.tick == 1
        assert snap.paused
        assert snap.last_tail == (3, 5)

    def test_is_json_serializable(self):
        engine = _engine()
        engine.tick()
        data = engine.snapshot().to_dict()
        serialized = json.dumps(data)
        assert isinstance(serialized, str)
        assert data["direction"] == "right"
        assert data["update_interval_ms"] == pytest.approx(200.0)

    def test_snapshot_is_detached(self):
        engine = _engine()
        snap = engine.snapshot()
        engine.tick()
        assert snap.snake == ((5, 5), (4, 5), (3, 5))


class TestEngineDeterminism:
    def test_same_seed_same_outcome(self):
        actions = [
            Direction.UP, Direction.RIGHT, Direction.DOWN,
            Direction.DOWN, Direction.LEFT,
        ]
        assert self._run(123, actions) == self._run(123, actions)

    def test_different_seeds_differ(self):
        actions = [Direction.RIGHT] * 3
        assert self._run(1, actions)["apples"] != self._run(2, actions)["apples"]

    @staticmethod
    def _run(seed: int, actions: list[Direction]) -> dict:
        engine = GameEngine(width=20, height=20, seed=seed, start_head=(5, 10))
        for action in actions:
            engine.steer(action)
            engine.tick()
        return engine.snapshot().to_dict()
