"""Speed curves mapping score to the tick interval in seconds."""

from __future__ import annotations

from collections.abc import Callable

SpeedCurve = Callable[[int], float]

BASE_INTERVAL = 0.2  # seconds at score 0
HALF_SPEED_SCORE = 20


def hyperbolic_interval(score: int) -> float:
    """Default curve: 200 ms at score 0, halving by score 20.

    Decays smoothly towards zero without ever reaching it.
    """
    return BASE_INTERVAL * (HALF_SPEED_SCORE / (score + HALF_SPEED_SCORE))


def scaled_hyperbolic(base_interval: float) -> SpeedCurve:
    """Hyperbolic curve starting at *base_interval* seconds."""
    if base_interval <= 0:
        raise ValueError("base_interval must be positive.")

    def curve(score: int) -> float:
        return base_interval * (HALF_SPEED_SCORE / (score + HALF_SPEED_SCORE))

    return curve


def constant_interval(seconds: float = BASE_INTERVAL) -> SpeedCurve:
    """Fixed-speed curve that ignores the score."""
    if seconds <= 0:
        raise ValueError("Interval must be positive.")

    def curve(score: int) -> float:  # noqa: ARG001
        return seconds

    return curve


SPEED_CURVES: dict[str, Callable[[float], SpeedCurve]] = {
    "hyperbolic": scaled_hyperbolic,
    "constant": constant_interval,
}
