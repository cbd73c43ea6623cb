"""Test module for coaster.common

The tests are run using pytest.
"""

import numpy as np
import pytest

from coaster.common import Point, as_point_array


def test_point_is_immutable_value():
    """Points compare by coordinates and cannot be changed."""
    point = Point(1.0, 2.0)
    assert point == Point(1.0, 2.0)
    assert point == (1.0, 2.0)
    with pytest.raises(AttributeError):
        point.x = 5.0  # type: ignore[misc]


def test_as_point_array_from_points():
    """Points and tuples are read into an (n, 2) array."""
    array = as_point_array([Point(0.0, 1.0), (2.0, 3.0)])
    assert array.shape == (2, 2)
    assert array.dtype == np.float64
    assert np.array_equal(array, [[0.0, 1.0], [2.0, 3.0]])


def test_as_point_array_copies():
    """The input array is not shared."""
    source = np.array([[0.0, 1.0], [2.0, 3.0]])
    array = as_point_array(source)
    array[0, 0] = 9.0
    assert source[0, 0] == 0.0


def test_as_point_array_empty():
    """No points give an empty (0, 2) array."""
    assert as_point_array([]).shape == (0, 2)


@pytest.mark.parametrize("points", [[1.0, 2.0], [(1.0, 2.0, 3.0)], np.zeros((2, 2, 2))])
def test_as_point_array_rejects_other_shapes(points):
    """Anything but (x, y) pairs is rejected."""
    with pytest.raises(ValueError):
        as_point_array(points)
