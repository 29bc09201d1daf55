# tests/test_router.py
import math
import os

import pytest

from geopath import (Coordinate, InvalidInput, PointMarker, Polygon, PolygonCollection,
                     ResourceExhausted, RouterConfig, ShortestPathRouter, SinglePolygon,
                     UnreachableGoal, shortest_path)
from geopath.geo.booleans import point_in_polygon
from geopath.planning.heuristics import OctileHeuristic
from geopath.planning.planners import SearchState
from geopath.visualization.observers import DebugObserver, ExperimentObserver


def square(west, south, east, north):
    return Polygon(outer=[(west, south), (east, south), (east, north), (west, north)])


def octile_cells(a, b):
    dx, dy = abs(a[0] - b[0]), abs(a[1] - b[1])
    return math.sqrt(2) * min(dx, dy) + abs(dx - dy)


def test_route_around_polygon():
    wall = square(2, -1, 4, 1)
    start, end = Coordinate(0, 0), Coordinate(6, 0)
    path = shortest_path(start, end, SinglePolygon(wall))

    # 端点与请求完全一致
    assert path.coordinates[0] == start
    assert path.coordinates[-1] == end
    # 中间点都是空闲格子的中心，不会落在障碍物内
    interior = path.coordinates[1:-1]
    assert interior
    assert not any(point_in_polygon(p, wall) for p in interior)
    # 必须从上方或下方绕过
    assert any(abs(p.lat) > 1 for p in interior)
    assert path.cost > octile_cells(path.cells[0], path.cells[-1])


def test_empty_obstacles_follow_octile_distance():
    router = ShortestPathRouter(heuristic=OctileHeuristic())
    path = router.route((0, 0), (10, 5), PolygonCollection())
    assert path.cost == pytest.approx(octile_cells(path.cells[0], path.cells[-1]))


def test_default_heuristic_stays_within_bounds():
    path = shortest_path((0, 0), (10, 5), PolygonCollection())
    first, last = path.cells[0], path.cells[-1]
    l_walk = abs(first[0] - last[0]) + abs(first[1] - last[1])
    assert octile_cells(first, last) - 1e-9 <= path.cost <= l_walk + 1e-9


def test_goal_outside_enclosure_is_unreachable():
    ring = Polygon(outer=square(-2, -2, 2, 2).outer, holes=(square(-1, -1, 1, 1).outer,))
    with pytest.raises(UnreachableGoal) as excinfo:
        shortest_path((0, 0), (5, 5), SinglePolygon(ring))
    assert excinfo.value.result.status is SearchState.EXHAUSTED


def test_markers_widen_routing_area():
    router = ShortestPathRouter(debugger=ExperimentObserver())
    narrow = router.build_grid((0, 0), (1, 1), PolygonCollection())
    wide = router.build_grid((0, 0), (1, 1), [PointMarker((5, 5), name="gate")])
    assert narrow.bbox.east < 5
    assert wide.bbox.east > 5
    assert wide.bbox.north > 5


def test_obstacle_lists_are_flattened():
    obstacles = [PolygonCollection((square(2, -1, 3, 1),)), [SinglePolygon(square(4, -1, 5, 1))]]
    path = shortest_path((0, 0), (7, 0), obstacles)
    for p in path.coordinates[1:-1]:
        assert not point_in_polygon(p, square(2, -1, 3, 1))
        assert not point_in_polygon(p, square(4, -1, 5, 1))


def test_invalid_inputs():
    with pytest.raises(InvalidInput):
        shortest_path((0, 0), (1, 1), "not an obstacle")
    with pytest.raises(InvalidInput):
        shortest_path((0, 0), (1, 1), None)
    with pytest.raises(InvalidInput):
        shortest_path(None, (1, 1), PolygonCollection())
    with pytest.raises(InvalidInput):
        RouterConfig(bbox_padding_factor=0)
    with pytest.raises(InvalidInput):
        RouterConfig(units="furlongs")


def test_grid_budget():
    with pytest.raises(ResourceExhausted):
        shortest_path((0, 0), (10, 5), PolygonCollection(), RouterConfig(max_grid_cells=100))


def test_debug_mode_writes_log(tmp_path):
    config = RouterConfig(debug_mode=True, log_dir=str(tmp_path))
    router = ShortestPathRouter(config)
    assert isinstance(router.debugger, DebugObserver)
    router.route((0, 0), (2, 1), PolygonCollection())
    router.debugger.close()

    assert os.path.exists(router.debugger.log_file)
    with open(router.debugger.log_file, 'r', encoding='utf-8') as f:
        content = f.read()
    assert "Routing area" in content
    assert "Path map" in content


def test_heuristic_selected_by_config():
    config = RouterConfig(heuristic="octile")
    by_name = ShortestPathRouter(config).route((0, 0), (10, 5), PolygonCollection())
    by_object = ShortestPathRouter(heuristic=OctileHeuristic()).route((0, 0), (10, 5), PolygonCollection())
    assert by_name.cost == pytest.approx(by_object.cost)
    assert by_name.cells == by_object.cells


@pytest.mark.parametrize("start, end", [
    ((0, 0), (10, 0)),   # 同纬度
    ((3, 0), (3, 10)),   # 同经度
])
def test_route_along_parallel_or_meridian_without_obstacles(start, end):
    path = shortest_path(start, end, PolygonCollection())
    assert path.coordinates[0] == Coordinate(*start)
    assert path.coordinates[-1] == Coordinate(*end)
    first, last = path.cells[0], path.cells[-1]
    l_walk = abs(first[0] - last[0]) + abs(first[1] - last[1])
    assert octile_cells(first, last) - 1e-9 <= path.cost <= l_walk + 1e-9


def test_start_equals_end_without_obstacles():
    path = shortest_path((1, 1), (1, 1), PolygonCollection())
    assert path.cost == 0.0
    assert len(path.cells) == 1
    assert path.coordinates[0] == path.coordinates[-1] == Coordinate(1, 1)


def test_detour_below_rectangular_obstacle():
    block = Polygon.from_rings([[[0, -5], [5, -5], [5, -3], [0, -3], [0, -5]]])
    start, end = Coordinate(-5, -6), Coordinate(9, -6)
    path = shortest_path(start, end, SinglePolygon(block))

    assert path.coordinates[0] == start
    assert path.coordinates[-1] == end
    assert not any(point_in_polygon(p, block) for p in path.coordinates[1:-1])
    assert len(path.cells) == 88
    assert path.cost == pytest.approx(87.0)


def test_default_heuristic_counts_cells_whatever_the_step_cost():
    router = ShortestPathRouter(RouterConfig(straight_edge_cost=10))
    assert router.planner.h_fn.estimate((0, 0), (3, 4)) == 7
    assert router.planner.h_fn.cost_scale == 1.0


def test_context_manager_closes_own_debug_log(tmp_path):
    config = RouterConfig(debug_mode=True, log_dir=str(tmp_path))
    with ShortestPathRouter(config) as router:
        router.route((0, 0), (2, 1), PolygonCollection())
        assert router.debugger.logger.handlers
    assert router.debugger.logger.handlers == []


def test_close_leaves_caller_debugger_open(tmp_path):
    observer = DebugObserver(log_dir=str(tmp_path))
    try:
        with ShortestPathRouter(debugger=observer) as router:
            router.route((0, 0), (2, 1), PolygonCollection())
        assert observer.logger.handlers
    finally:
        observer.close()
