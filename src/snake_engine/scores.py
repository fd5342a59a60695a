"""Top-N high-score history."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

MAX_SCORES = 10


class ScoreHistory:
    """Past run scores, highest first, truncated to *limit* entries.

    Only positive scores are recorded. Loading and saving belong to the
    host; this class only appends and truncates.
    """

    def __init__(
        self, scores: Iterable[int] = (), limit: int = MAX_SCORES,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1.")
        self.limit = limit
        self._scores: list[int] = []
        for s in scores:
            if s < 0:
                raise ValueError("Scores must be non-negative.")
            if s > 0:
                self._scores.append(s)
        self._normalize()

    def _normalize(self) -> None:
        self._scores.sort(reverse=True)
        del self._scores[self.limit:]

    def record(self, score: int) -> bool:
        """Add *score* to the history. Returns True if it was kept."""
        if score <= 0:
            return False
        kept = len(self._scores) < self.limit or score > self._scores[-1]
        self._scores.append(score)
        self._normalize()
        return kept

    @property
    def best(self) -> int | None:
        return self._scores[0] if self._scores else None

    def __iter__(self) -> Iterator[int]:
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __getitem__(self, index: int) -> int:
        return self._scores[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ScoreHistory):
            return self._scores == other._scores
        if isinstance(other, list):
            return self._scores == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ScoreHistory({self._scores!r})"

    def to_list(self) -> list[int]:
        return list(self._scores)
