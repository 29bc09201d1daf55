# geopath/router.py
"""
端到端流程：障碍物 + 起终点 -> 路径

1. 归一化输入 (封闭联合类型只在这里解析一次)
2. 计算所有障碍物、标记点、起终点的外包框，并按 bbox_padding_factor 放大
3. 栅格化 (1 = 障碍)
4. 一次遍历同时吸附起点和终点
5. 唯一一次 A* 搜索
6. 回溯路径并映射回地理坐标
"""
from typing import Iterable, List, Optional, Tuple, Union

from geopath.config import RouterConfig
from geopath.errors import InvalidInput, UnreachableGoal
from geopath.geo.measurement import bbox
from geopath.geo.transformation import pad_bbox
from geopath.map.grid_map import GeoGridMap, format_matrix
from geopath.map.mapper import CoordinateMapper
from geopath.map.rasterizer import GridRasterizer
from geopath.planning.heuristics import HEURISTICS, Heuristic
from geopath.planning.interfaces import IPlannerObserver
from geopath.planning.planners.a_star import AStarPlanner
from geopath.planning.reconstruct import PathReconstructor
from geopath.types import (BoundingBox, Coordinate, ObstacleInput, Path, PointMarker, Polygon,
                           PolygonCollection, SinglePolygon)
from geopath.visualization.observers import DebugObserver, EfficientObserver

Obstacles = Union[ObstacleInput, Polygon, Iterable[Union[ObstacleInput, Polygon]], None]

# 起终点重合且没有障碍物时，外包框的最小边长 (度)
MIN_SPAN_DEG = 0.01


def normalize_obstacles(obstacles: Obstacles) -> Tuple[List[Polygon], List[PointMarker]]:
    """
    把障碍物输入解析为 (多边形列表, 标记点列表)。
    支持: PolygonCollection / SinglePolygon / PointMarker / Polygon，以及它们组成的列表。
    """
    polygons: List[Polygon] = []
    markers: List[PointMarker] = []

    def visit(item):
        if isinstance(item, PolygonCollection):
            polygons.extend(item.polygons)
        elif isinstance(item, SinglePolygon):
            polygons.append(item.polygon)
        elif isinstance(item, Polygon):
            polygons.append(item)
        elif isinstance(item, PointMarker):
            markers.append(item)
        elif isinstance(item, (list, tuple)):
            for sub in item:
                visit(sub)
        else:
            raise InvalidInput(f"invalid obstacles: unsupported geometry {type(item).__name__}")

    if obstacles is None:
        raise InvalidInput("obstacles are required (use an empty PolygonCollection for none)")
    visit(obstacles)
    return polygons, markers


def expand_collapsed(extent: BoundingBox) -> BoundingBox:
    """
    起终点同纬度 (高为 0) 或同经度 (宽为 0) 时外包框退化成线段，无法栅格化。
    退化的方向用另一方向的边长补齐，两个方向都退化时用 MIN_SPAN_DEG。
    """
    span = max(extent.width, extent.height, MIN_SPAN_DEG)
    west, south, east, north = extent.west, extent.south, extent.east, extent.north
    if extent.width <= 0:
        west, east = west - span / 2, east + span / 2
    if extent.height <= 0:
        south, north = south - span / 2, north + span / 2
    return BoundingBox(west, south, east, north)


class ShortestPathRouter:
    """
    在障碍物之间求两点的最小栅格代价路径
    """

    def __init__(self,
                 config: Optional[RouterConfig] = None,
                 heuristic: Optional[Heuristic] = None,
                 debugger: Optional[IPlannerObserver] = None):
        self.config = config if config is not None else RouterConfig()
        self._owns_debugger = debugger is None
        if debugger is None:
            debugger = DebugObserver(self.config.log_dir) if self.config.debug_mode else EfficientObserver()
        self.debugger = debugger

        self.rasterizer = GridRasterizer(resolution_columns=self.config.resolution_columns,
                                         max_cells=self.config.max_grid_cells,
                                         units=self.config.units)
        self.mapper = CoordinateMapper(units=self.config.units)
        if heuristic is None:
            # 启发式按格子数估计，不随 straight_edge_cost 缩放
            heuristic = HEURISTICS[self.config.heuristic]()
        self.planner = AStarPlanner(heuristic=heuristic,
                                    straight_cost=self.config.straight_edge_cost,
                                    max_iterations=self.config.max_iterations)
        self.reconstructor = PathReconstructor()

    def close(self):
        """释放路由器自己创建的 DebugObserver 的日志文件"""
        if self._owns_debugger and isinstance(self.debugger, DebugObserver):
            self.debugger.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def build_grid(self, start, end, obstacles: Obstacles) -> GeoGridMap:
        """归一化输入、放大外包框并栅格化"""
        start = Coordinate.of(start)
        end = Coordinate.of(end)
        polygons, markers = normalize_obstacles(obstacles)

        # 路径范围：障碍物 + 标记点 + 起终点
        extent = expand_collapsed(bbox([polygons, markers, start, end]))
        padded = pad_bbox(extent, self.config.bbox_padding_factor, units=self.config.units)
        self.debugger.log("Routing area", payload={
            "bbox": (extent.west, extent.south, extent.east, extent.north),
            "padded": (padded.west, padded.south, padded.east, padded.north),
            "polygons": len(polygons), "markers": len(markers)})

        return self.rasterizer.rasterize(polygons, padded, debugger=self.debugger)

    def route(self, start, end, obstacles: Obstacles) -> Path:
        """
        :return: Path (坐标序列从原始起点到原始终点)
        :raises UnreachableGoal: 起终点之间没有可通行路径
        """
        start = Coordinate.of(start)
        end = Coordinate.of(end)
        grid_map = self.build_grid(start, end, obstacles)

        snapped = self.mapper.snap_many({"start": start, "end": end}, grid_map, debugger=self.debugger)
        result = self.planner.plan(snapped["start"], snapped["end"], grid_map, debugger=self.debugger)
        if not result.succeeded:
            raise UnreachableGoal(
                f"no route from {(start.lon, start.lat)} to {(end.lon, end.lat)} "
                f"after expanding {result.expanded} cells", result)

        path = self.reconstructor.reconstruct(result, grid_map, start, end)
        if isinstance(self.debugger, DebugObserver):
            self.debugger.log("Path map\n" + format_matrix(grid_map.render_path(path.cells)), level='DEBUG')
        return path


def shortest_path(start, end, obstacles: Obstacles, config: Optional[RouterConfig] = None) -> Path:
    """便捷入口：单次路由，结束后释放日志文件"""
    with ShortestPathRouter(config) as router:
        return router.route(start, end, obstacles)
