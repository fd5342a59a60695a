"""JSON persistence for the high-score list."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from snake_engine.scores import MAX_SCORES, ScoreHistory
from snake_engine.server.models import HighScoreFile

logger = logging.getLogger(__name__)


class HighScoreStore:
    """Loads and saves a :class:`ScoreHistory` at a fixed path."""

    def __init__(self, path: str | Path, limit: int = MAX_SCORES) -> None:
        self.path = Path(path)
        self.limit = limit

    def load(self) -> ScoreHistory:
        """Read the history. Missing or unreadable files give an empty one."""
        if not self.path.exists():
            return ScoreHistory(limit=self.limit)
        try:
            data = HighScoreFile.model_validate_json(self.path.read_text())
        except (OSError, UnicodeDecodeError, ValidationError) as exc:
            logger.warning(
                "Ignoring unreadable high-score file %s: %s", self.path, exc,
            )
            return ScoreHistory(limit=self.limit)
        return ScoreHistory(data.scores, limit=self.limit)

    def save(self, history: ScoreHistory) -> None:
        """Write *history* to disk, creating parent directories."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = HighScoreFile(scores=history.to_list())
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(payload.model_dump_json(indent=2))
        tmp.replace(self.path)
        logger.info("Saved %d high scores to %s", len(history), self.path)
