"""Fixed-size rectangular board for the snake game."""

from __future__ import annotations

from collections.abc import Iterator

# Board coordinates are (x, y) pairs with x as the column.
Cell = tuple[int, int]

DEFAULT_WIDTH = 64
DEFAULT_HEIGHT = 20


class Grid:
    """Immutable board dimensions with bounds checking.

    Coordinates use (x, y) ordering; the matching NumPy table index is
    ``[y, x]``.
    """

    __slots__ = ("_width", "_height")

    def __init__(
        self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError("Grid dimensions must be positive.")
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        """NumPy shape ``(height, width)`` for per-cell tables."""
        return self._height, self._width

    def contains(self, cell: Cell) -> bool:
        """Check whether a coordinate lies within the board."""
        x, y = cell
        return 0 <= x < self._width and 0 <= y < self._height

    def cells(self) -> Iterator[Cell]:
        """Yield every board cell in row-major order."""
        for y in range(self._height):
            for x in range(self._width):
                yield x, y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape

    def __hash__(self) -> int:
        return hash(self.shape)

    def __repr__(self) -> str:
        return f"Grid(width={self._width}, height={self._height})"

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self._width, "height": self._height}
