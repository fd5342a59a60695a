"""Apple occupancy table and randomized spawning policy."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from snake_engine.grid import Cell, Grid

logger = logging.getLogger(__name__)

MAX_APPLES = 10
SPAWN_PERIOD = 3.0  # seconds


class AppleBoard:
    """Boolean NumPy table marking which cells hold an apple.

    Indexed ``[y, x]`` so rows line up with board rows.
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.cells = np.zeros(grid.shape, dtype=bool)

    def __contains__(self, cell: object) -> bool:
        if not isinstance(cell, tuple) or not self.grid.contains(cell):
            return False
        x, y = cell
        return bool(self.cells[y, x])

    def __len__(self) -> int:
        return int(np.count_nonzero(self.cells))

    def add(self, cell: Cell) -> None:
        x, y = cell
        self.cells[y, x] = True

    def remove(self, cell: Cell) -> bool:
        """Clear the apple at *cell*. Returns True if one was there."""
        if cell not in self:
            return False
        x, y = cell
        self.cells[y, x] = False
        return True

    def clear(self) -> None:
        self.cells[:] = False

    def positions(self) -> list[Cell]:
        """Return apple cells in row-major order."""
        ys, xs = np.nonzero(self.cells)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def free_cells(self, occupied: Iterable[Cell]) -> list[Cell]:
        """Cells holding neither an apple nor any of *occupied*."""
        mask = ~self.cells
        for x, y in occupied:
            mask[y, x] = False
        ys, xs = np.nonzero(mask)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_list(self) -> list[list[int]]:
        return [list(p) for p in self.positions()]


def spawn_probability(
    update_interval: float, spawn_period: float = SPAWN_PERIOD,
) -> float:
    """Per-tick chance of spawning while some apples are already live.

    Slower ticks get a proportionally higher chance, so the real-time
    spawn rate stays roughly constant across speeds. Clamped to [0, 1].
    """
    return min(max(update_interval / spawn_period, 0.0), 1.0)


class AppleSpawner:
    """Decides once per tick whether a new apple appears, and where.

    The board always gets an apple when it has none. Below *max_apples*
    a new one appears with :func:`spawn_probability`; at the cap none do.
    """

    def __init__(
        self, max_apples: int = MAX_APPLES, spawn_period: float = SPAWN_PERIOD,
    ) -> None:
        if max_apples < 1:
            raise ValueError("max_apples must be at least 1.")
        if spawn_period <= 0:
            raise ValueError("spawn_period must be positive.")
        self.max_apples = max_apples
        self.spawn_period = spawn_period

    def should_attempt(
        self, apple_count: int, update_interval: float, rng: np.random.Generator,
    ) -> bool:
        if apple_count == 0:
            return True
        if apple_count < self.max_apples:
            p = spawn_probability(update_interval, self.spawn_period)
            return bool(rng.random() < p)
        return False

    def maybe_spawn(
        self,
        apples: AppleBoard,
        body: Iterable[Cell],
        grid: Grid,
        update_interval: float,
        rng: np.random.Generator,
    ) -> Cell | None:
        """Run one spawn decision. Returns the new apple cell, if any."""
        if not self.should_attempt(len(apples), update_interval, rng):
            return None

        options = apples.free_cells(body)
        if not options:
            logger.debug("No free cells on %r; skipping apple spawn.", grid)
            return None

        apple = options[int(rng.integers(len(options)))]
        apples.add(apple)
        logger.debug("Spawned apple at %s.", apple)
        return apple
