"""Game and host configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from snake_engine.apple import MAX_APPLES, SPAWN_PERIOD
from snake_engine.difficulty import SPEED_CURVES, SpeedCurve
from snake_engine.grid import DEFAULT_HEIGHT, DEFAULT_WIDTH
from snake_engine.scores import MAX_SCORES
from snake_engine.snake import START_LENGTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board, pacing and host settings for a game session.

    Supports JSON serialization so a host can keep its settings on disk.
    """

    # Board
    board_width: int = DEFAULT_WIDTH
    board_height: int = DEFAULT_HEIGHT

    # Apples
    max_apples: int = MAX_APPLES
    apple_spawn_period: float = SPAWN_PERIOD

    # Pacing
    speed_curve: str = "hyperbolic"
    base_interval_ms: int = 200
    frame_rate: int = 60

    # History
    max_scores: int = MAX_SCORES
    scores_path: str | None = None

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_width < START_LENGTH + 2 or self.board_height < 4:
            raise ValueError(
                f"Board must be at least {START_LENGTH + 2}x4 to fit the "
                "starting snake.",
            )
        if self.max_apples < 1:
            raise ValueError("max_apples must be at least 1.")
        if self.apple_spawn_period <= 0:
            raise ValueError("apple_spawn_period must be positive.")
        if self.speed_curve not in SPEED_CURVES:
            raise ValueError(
                f"Unknown speed_curve {self.speed_curve!r}; "
                f"expected one of {sorted(SPEED_CURVES)}.",
            )
        if self.base_interval_ms < 1:
            raise ValueError("base_interval_ms must be at least 1.")
        if not 1 <= self.frame_rate <= 1000:
            raise ValueError("frame_rate must be between 1 and 1000.")
        if self.max_scores < 1:
            raise ValueError("max_scores must be at least 1.")

    @property
    def frame_interval(self) -> float:
        """Seconds between host frames."""
        return 1.0 / self.frame_rate

    def speed_curve_fn(self) -> SpeedCurve:
        """Build the score-to-interval function this config selects."""
        return SPEED_CURVES[self.speed_curve](self.base_interval_ms / 1000.0)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must hold a JSON object.")
        unknown = set(raw) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(
                f"Unknown config keys in {path}: {sorted(unknown)}.",
            )
        return cls(**raw)
