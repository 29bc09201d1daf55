# geopath/planning/reconstruct.py
from geopath.errors import UnreachableGoal
from geopath.map.base import MapBase
from geopath.planning.planners.base import SearchResult, trace_cells
from geopath.types import Coordinate, Path


class PathReconstructor:
    """
    搜索结果 -> 地理坐标路径

    沿终点节点的 parent 链回溯得到格子序列，经坐标表映射为格子中心，
    首尾分别补上调用方传入的原始起点 / 终点 (未吸附)，
    保证返回路径的端点与请求完全一致。
    """

    def reconstruct(self, result: SearchResult, grid_map: MapBase, start, end) -> Path:
        if not result.succeeded or result.goal_index is None:
            raise UnreachableGoal("search did not reach the goal; no path to reconstruct", result)

        cells = trace_cells(result.nodes, result.goal_index)
        coordinates = [Coordinate.of(start)]
        coordinates.extend(grid_map.grid_to_world(x, y) for x, y in cells)
        coordinates.append(Coordinate.of(end))

        cost = result.nodes[result.goal_index].g
        return Path(coordinates=coordinates, cost=cost, cells=cells, grid_map=grid_map)
