# tests/planning/test_a_star_planning.py
import sys
import os
import math

import pytest

# --- 路径设置 (确保能导入 geopath) ---
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from geopath.errors import InvalidInput, ResourceExhausted
from geopath.map.grid_map import GeoGridMap
from geopath.planning.heuristics import OctileHeuristic, ZeroHeuristic
from geopath.planning.planners import AStarPlanner, SearchState
from geopath.visualization.observers import ExperimentObserver

SQRT2 = math.sqrt(2)


@pytest.fixture
def open_grid():
    return GeoGridMap.from_matrix([[0, 0, 0], [0, 0, 0], [0, 0, 0]])


@pytest.fixture
def blocked_center_grid():
    return GeoGridMap.from_matrix([[0, 0, 0], [0, 1, 0], [0, 0, 0]])


@pytest.fixture
def enclosed_grid():
    """中心格子被一圈障碍包围"""
    return GeoGridMap.from_matrix([
        [0, 0, 0, 0, 0],
        [0, 1, 1, 1, 0],
        [0, 1, 0, 1, 0],
        [0, 1, 1, 1, 0],
        [0, 0, 0, 0, 0],
    ])


def test_diagonal_on_open_grid(open_grid):
    result = AStarPlanner().plan((0, 0), (2, 2), open_grid)
    assert result.status is SearchState.SUCCEEDED
    assert result.cells == [(0, 0), (1, 1), (2, 2)]
    assert result.cost == pytest.approx(2 * SQRT2)


def test_detour_around_blocked_center(blocked_center_grid):
    result = AStarPlanner().plan((0, 0), (2, 2), blocked_center_grid)
    assert result.succeeded
    assert result.cost == pytest.approx(2 + SQRT2)
    assert result.cells == [(0, 0), (1, 0), (2, 1), (2, 2)]
    for x, y in result.cells:
        assert not blocked_center_grid.is_obstacle(x, y)


def test_consecutive_cells_are_neighbours(blocked_center_grid):
    result = AStarPlanner(heuristic=OctileHeuristic()).plan((0, 2), (2, 0), blocked_center_grid)
    assert result.cost == pytest.approx(2 + SQRT2)
    for (x0, y0), (x1, y1) in zip(result.cells, result.cells[1:]):
        assert max(abs(x1 - x0), abs(y1 - y0)) == 1


def test_start_equals_goal(open_grid):
    result = AStarPlanner().plan((1, 1), (1, 1), open_grid)
    assert result.succeeded
    assert result.cells == [(1, 1)]
    assert result.cost == 0.0


def test_enclosed_goal_exhausts(enclosed_grid):
    result = AStarPlanner().plan((0, 0), (2, 2), enclosed_grid)
    assert result.status is SearchState.EXHAUSTED
    assert result.cells == []
    assert result.cost == math.inf
    # 外圈 16 个格子全部扩展一次
    assert result.expanded == 16

    inside_out = AStarPlanner().plan((2, 2), (0, 0), enclosed_grid)
    assert inside_out.status is SearchState.EXHAUSTED
    assert inside_out.expanded == 1


def test_invalid_endpoints(blocked_center_grid):
    planner = AStarPlanner()
    with pytest.raises(InvalidInput):
        planner.plan((1, 1), (2, 2), blocked_center_grid)
    with pytest.raises(InvalidInput):
        planner.plan((0, 0), (1, 1), blocked_center_grid)
    with pytest.raises(InvalidInput):
        planner.plan((0, 0), (3, 0), blocked_center_grid)


def test_iteration_budget(open_grid):
    with pytest.raises(ResourceExhausted):
        AStarPlanner(max_iterations=1).plan((0, 0), (2, 2), open_grid)


def test_edge_cost_scaling(open_grid):
    result = AStarPlanner(straight_cost=2.0).plan((0, 0), (2, 2), open_grid)
    assert result.cost == pytest.approx(4 * SQRT2)
    assert result.cells == [(0, 0), (1, 1), (2, 2)]
    with pytest.raises(InvalidInput):
        AStarPlanner(straight_cost=0)


def test_each_call_starts_fresh(blocked_center_grid, open_grid):
    planner = AStarPlanner(heuristic=ZeroHeuristic())
    first = planner.plan((0, 0), (2, 2), blocked_center_grid)
    planner.plan((2, 2), (0, 0), open_grid)
    again = planner.plan((0, 0), (2, 2), blocked_center_grid)
    assert again.cells == first.cells
    assert again.cost == first.cost
    assert again.expanded == first.expanded


def test_nodes_are_expanded_at_most_once():
    grid_map = GeoGridMap.from_matrix([[0] * 8 for _ in range(8)])
    observer = ExperimentObserver()
    AStarPlanner(heuristic=ZeroHeuristic()).plan((0, 0), (7, 5), grid_map, debugger=observer)
    assert len(observer.expanded_nodes) == len(set(observer.expanded_nodes))


def test_default_heuristic_is_not_scaled_by_step_cost(blocked_center_grid):
    planner = AStarPlanner(straight_cost=10.0)
    assert planner.h_fn.estimate((0, 0), (3, 4)) == 7
    result = planner.plan((0, 0), (2, 2), blocked_center_grid)
    assert result.cost == pytest.approx(10 * (2 + SQRT2))
    assert result.cells == [(0, 0), (1, 0), (2, 1), (2, 2)]
