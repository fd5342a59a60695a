"""Tests for the score history."""

import pytest

from snake_engine.scores import ScoreHistory


class TestScoreHistory:
    def test_starts_empty(self):
        history = ScoreHistory()
        assert len(history) == 0
        assert history.best is None

    def test_record_keeps_descending(self):
        history = ScoreHistory()
        for s in (3, 9, 1, 9, 4):
            history.record(s)
        assert history.to_list() == [9, 9, 4, 3, 1]
        assert history.best == 9

    def test_zero_not_recorded(self):
        history = ScoreHistory()
        assert not history.record(0)
        assert len(history) == 0

    def test_truncates_to_ten(self):
        history = ScoreHistory()
        for s in range(1, 16):
            history.record(s)
        assert history.to_list() == list(range(15, 5, -1))

    def test_record_reports_whether_kept(self):
        history = ScoreHistory(range(11, 21))
        assert not history.record(5)
        assert not history.record(11)
        assert history.record(12)
        assert history[-1] == 12

    def test_initial_scores_normalized(self):
        history = ScoreHistory([1, 0, 5, 3], limit=2)
        assert history.to_list() == [5, 3]

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            ScoreHistory([-1])

    def test_equality_with_list(self):
        assert ScoreHistory([2, 1]) == [2, 1]
