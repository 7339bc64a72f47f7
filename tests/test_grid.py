import numpy as np
import pytest

from iterblur import PixelGrid


def test_shape_and_accessors():
    grid = PixelGrid([[0.0, 0.1, 0.2], [0.3, 0.4, 0.5]])
    assert grid.width == 3
    assert grid.height == 2
    assert grid.shape == (2, 3)
    assert grid.at(1, 2) == 0.5
    grid.set(0, 0, 0.9)
    assert grid.at(0, 0) == 0.9


def test_from_flat_is_row_major():
    grid = PixelGrid.from_flat(range(6), 3, 2)
    assert grid.at(0, 2) == 2.0
    assert grid.at(1, 0) == 3.0


def test_from_flat_wrong_count():
    with pytest.raises(ValueError):
        PixelGrid.from_flat(range(5), 3, 2)


@pytest.mark.parametrize("values", [[], [[]], [1.0, 2.0], [[[1.0]]]])
def test_rejects_empty_or_non_2d(values):
    with pytest.raises(ValueError):
        PixelGrid(values)


def test_constructor_copies_input():
    source = np.zeros((2, 2))
    grid = PixelGrid(source)
    source[0, 0] = 1.0
    assert grid.at(0, 0) == 0.0


def test_values_view_is_read_only():
    grid = PixelGrid.zeros(2, 2)
    with pytest.raises(ValueError):
        grid.values[0, 0] = 1.0


def test_copy_and_equality():
    grid = PixelGrid([[0.25, 0.5]])
    clone = grid.copy()
    assert clone == grid
    clone.set(0, 0, 1.0)
    assert clone != grid
    assert PixelGrid([[0.25, 0.5]]) != PixelGrid([[0.25], [0.5]])


def test_stats():
    grid = PixelGrid([[0.0, 1.0], [0.5, 0.5]])
    assert grid.min() == 0.0
    assert grid.max() == 1.0
    assert grid.mean() == 0.5
