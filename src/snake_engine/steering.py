"""Two-slot buffer of pending direction changes."""

from __future__ import annotations

import logging

from snake_engine.snake import Direction

logger = logging.getLogger(__name__)


class SteeringBuffer:
    """Holds the committed direction and up to two queued turns.

    The first queued turn is applied on the next tick, the second on the
    tick after. A queued turn is never the reverse of the direction it
    will follow, so a double key press inside one tick window cannot
    steer the head into the neck.
    """

    def __init__(self, direction: Direction = Direction.RIGHT) -> None:
        self.direction = direction
        self._first: Direction | None = None
        self._second: Direction | None = None

    @property
    def pending(self) -> list[Direction]:
        """Queued directions in application order."""
        return [d for d in (self._first, self._second) if d is not None]

    def steer(self, requested: Direction) -> bool:
        """Queue *requested* if allowed. Returns True if it was queued."""
        if self._first is None:
            if requested in (self.direction, self.direction.opposite()):
                return False
            self._first = requested
            return True

        if self._second is None and requested != self._first.opposite():
            self._second = requested
            return True

        logger.debug("Dropped steering input %s.", requested.name)
        return False

    def advance(self) -> Direction:
        """Commit the next queued turn, if any, and return the direction."""
        if self._first is not None:
            self.direction = self._first
            self._first, self._second = self._second, None
        return self.direction

    def reset(self, direction: Direction = Direction.RIGHT) -> None:
        self.direction = direction
        self._first = None
        self._second = None
