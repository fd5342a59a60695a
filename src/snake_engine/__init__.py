"""Deterministic tick-based snake simulation engine."""

from snake_engine.apple import AppleBoard, AppleSpawner
from snake_engine.collision import CollisionKind
from snake_engine.config import GameConfig
from snake_engine.difficulty import constant_interval, hyperbolic_interval
from snake_engine.engine import GameEngine, Outcome, Snapshot, TickOutcome
from snake_engine.grid import Grid
from snake_engine.scores import ScoreHistory
from snake_engine.snake import Direction, SnakeBody
from snake_engine.steering import SteeringBuffer

__all__ = [
    "AppleBoard",
    "AppleSpawner",
    "CollisionKind",
    "Direction",
    "GameConfig",
    "GameEngine",
    "Grid",
    "Outcome",
    "ScoreHistory",
    "SnakeBody",
    "Snapshot",
    "SteeringBuffer",
    "TickOutcome",
    "constant_interval",
    "hyperbolic_interval",
]
