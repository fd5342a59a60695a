"""Tests for the Grid module."""

import pytest

from snake_engine.grid import Grid


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.width == 64
        assert grid.height == 20

    def test_custom_dimensions(self):
        grid = Grid(width=10, height=8)
        assert grid.width == 10
        assert grid.height == 8
        assert grid.shape == (8, 10)

    def test_positive_dimensions_enforced(self):
        with pytest.raises(ValueError, match="positive"):
            Grid(width=0, height=4)
        with pytest.raises(ValueError, match="positive"):
            Grid(width=4, height=-1)

    def test_dimensions_are_read_only(self):
        grid = Grid(width=5, height=5)
        with pytest.raises(AttributeError):
            grid.width = 10  # type: ignore[misc]


class TestGridContains:
    def test_corners_inside(self):
        grid = Grid(width=10, height=5)
        assert grid.contains((0, 0))
        assert grid.contains((9, 0))
        assert grid.contains((0, 4))
        assert grid.contains((9, 4))

    def test_outside(self):
        grid = Grid(width=10, height=5)
        assert not grid.contains((-1, 0))
        assert not grid.contains((0, -1))
        assert not grid.contains((10, 0))
        assert not grid.contains((0, 5))

    def test_x_is_column(self):
        grid = Grid(width=10, height=5)
        assert grid.contains((7, 2))
        assert not grid.contains((2, 7))

    def test_cells_row_major(self):
        grid = Grid(width=3, height=2)
        assert list(grid.cells()) == [
            (0, 0), (1, 0), (2, 0), (0, 1), (1, 1), (2, 1),
        ]


class TestGridSerialization:
    def test_to_dict(self):
        assert Grid(width=7, height=6).to_dict() == {"width": 7, "height": 6}

    def test_equality(self):
        assert Grid(5, 6) == Grid(5, 6)
        assert Grid(5, 6) != Grid(6, 5)
