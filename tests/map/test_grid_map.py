# tests/map/test_grid_map.py
import numpy as np
import pytest

from geopath.errors import DegenerateGeometry, InvalidInput
from geopath.map.grid_map import BLOCKED, FREE, PATH, GeoGridMap, format_matrix
from geopath.types import Coordinate


@pytest.fixture
def small_map():
    return GeoGridMap.from_matrix([
        [0, 0, 1],
        [0, 1, 0],
    ])


def test_from_matrix_shape_and_lookup(small_map):
    assert small_map.width == 3
    assert small_map.height == 2
    assert small_map.bbox is None
    assert small_map.is_obstacle(2, 0)
    assert not small_map.is_obstacle(0, 1)
    # 越界视为障碍
    assert small_map.is_obstacle(3, 0)
    assert small_map.is_obstacle(-1, 0)
    assert small_map.grid_to_world(2, 1) == Coordinate(2.0, 1.0)


def test_grid_to_world_out_of_bounds(small_map):
    with pytest.raises(InvalidInput):
        small_map.grid_to_world(3, 0)


def test_arrays_are_read_only(small_map):
    with pytest.raises(ValueError):
        small_map.data[0, 0] = BLOCKED
    with pytest.raises(ValueError):
        small_map.coordinates[0, 0, 0] = 99.0


def test_render_path_marks_copy_only(small_map):
    canvas = small_map.render_path([(0, 0), (0, 1)])
    assert canvas[0, 0] == PATH
    assert canvas[1, 0] == PATH
    assert small_map.data[0, 0] == FREE
    assert format_matrix(canvas) == "2 0 1\n2 1 0"


def test_free_mask(small_map):
    np.testing.assert_array_equal(small_map.free_mask, [[True, True, False], [True, False, True]])


def test_rejects_bad_grids():
    with pytest.raises(InvalidInput):
        GeoGridMap.from_matrix([[0, 3], [0, 0]])
    with pytest.raises(InvalidInput):
        GeoGridMap(np.zeros((2, 2)), np.zeros((2, 3, 2)))
    with pytest.raises(DegenerateGeometry):
        GeoGridMap(np.zeros((0, 2)), np.zeros((0, 2, 2)))
