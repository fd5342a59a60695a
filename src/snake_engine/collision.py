"""Wall and self-intersection checks."""

from __future__ import annotations

import enum
from collections.abc import Container

from snake_engine.grid import Cell, Grid


class CollisionKind(enum.Enum):
    """Result of testing a candidate head position."""

    NONE = "none"
    WALL = "wall"
    SELF = "self"


def check(new_head: Cell, body: Container[Cell], grid: Grid) -> CollisionKind:
    """Classify a move of the head onto *new_head*.

    *body* must already reflect this tick's tail pop: moving onto the
    cell the tail is vacating is legal.
    """
    if not grid.contains(new_head):
        return CollisionKind.WALL
    if new_head in body:
        return CollisionKind.SELF
    return CollisionKind.NONE
