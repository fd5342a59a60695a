"""Snake body representation and movement primitives."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable, Iterator

from snake_engine.grid import Cell

START_LENGTH = 3


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, so UP decrements it.
    """

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    def opposite(self) -> Direction:
        """Return the direction that would cause a 180° reversal."""
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction {name!r}.") from None


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def step(cell: Cell, direction: Direction) -> Cell:
    """Return the neighbour of *cell* one unit along *direction*."""
    dx, dy = direction.value
    x, y = cell
    return x + dx, y + dy


class SnakeBody:
    """Ordered deque of (x, y) segments.

    The head is ``cells[0]``; the tail is ``cells[-1]``.
    """

    def __init__(self, cells: Iterable[Cell]) -> None:
        self.cells: deque[Cell] = deque(cells)
        if not self.cells:
            raise ValueError("Snake length must be at least 1.")
        if len(set(self.cells)) != len(self.cells):
            raise ValueError("Snake segments must not overlap.")

    @classmethod
    def horizontal(cls, head: Cell, length: int = START_LENGTH) -> SnakeBody:
        """Build a body lying to the left of *head*, facing right."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        x, y = head
        return cls((x - i, y) for i in range(length))

    @property
    def head(self) -> Cell:
        return self.cells[0]

    @property
    def tail(self) -> Cell:
        return self.cells[-1]

    def next_head(self, direction: Direction) -> Cell:
        """Compute the candidate head position without moving."""
        return step(self.head, direction)

    def push_head(self, cell: Cell) -> None:
        self.cells.appendleft(cell)

    def pop_tail(self) -> Cell:
        """Remove and return the tail segment."""
        return self.cells.pop()

    def __contains__(self, cell: object) -> bool:
        return cell in self.cells

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"SnakeBody({list(self.cells)!r})"

    def to_list(self) -> list[list[int]]:
        """Serialize segments head-first as JSON-friendly pairs."""
        return [list(seg) for seg in self.cells]
