# geopath/map/rasterizer.py
import math
from typing import Optional, Sequence

import numpy as np

from geopath.errors import DegenerateGeometry, InvalidInput, ResourceExhausted
from geopath.geo.booleans import is_inside_any
from geopath.geo.measurement import distance
from geopath.map.grid_map import BLOCKED, FREE, GeoGridMap
from geopath.planning.interfaces import IPlannerObserver
from geopath.types import BoundingBox, Coordinate, Polygon
from geopath.visualization.observers import EfficientObserver

# floor() 前的容差：cell_width 由同一距离先除后乘得到，整除时会出现 99.99999999999999
_FLOOR_TOLERANCE = 1e-9


class GridRasterizer:
    """
    将障碍物多边形栅格化为占用栅格。

    工作流程：
    1. 名义分辨率 = 外包框南边的大圆长度 / resolution_columns
    2. 分别用南边、西边的大圆长度把分辨率换算成经度 / 纬度方向的格子尺寸
       (修正经度随纬度缩短的问题)
    3. 行列数取整，剩余的边距平均分到两侧，使栅格在外包框内居中
    4. 自北向南、自西向东逐格取中心点做点在多边形内判断，1 = 障碍
    """

    def __init__(self,
                 resolution_columns: int = 100,
                 max_cells: Optional[int] = None,
                 units: str = "kilometers"):
        if resolution_columns < 1:
            raise InvalidInput(f"resolution_columns must be >= 1, got {resolution_columns}")
        self.resolution_columns = resolution_columns
        self.max_cells = max_cells
        self.units = units

    def rasterize(self,
                  obstacles: Sequence[Polygon],
                  bbox: BoundingBox,
                  debugger: IPlannerObserver = None) -> GeoGridMap:
        if debugger is None:
            debugger = EfficientObserver()
        if bbox is None:
            raise InvalidInput("bbox is required")
        if obstacles is None:
            raise InvalidInput("obstacles are required (pass an empty list for none)")
        if bbox.is_degenerate:
            raise DegenerateGeometry(f"bbox must satisfy west < east and south < north: {bbox}")

        west, south, east, north = bbox.west, bbox.south, bbox.east, bbox.north

        # 1. 分辨率与格子尺寸 (度)
        width_dist = distance(Coordinate(west, south), Coordinate(east, south), self.units)
        height_dist = distance(Coordinate(west, south), Coordinate(west, north), self.units)
        if not (width_dist > 0 and height_dist > 0):
            raise DegenerateGeometry(f"bbox has no extent: {bbox}")
        resolution = width_dist / self.resolution_columns

        cell_width = resolution / width_dist * (east - west)
        cell_height = resolution / height_dist * (north - south)

        # 2. 行列数，并把栅格居中
        bbox_horizontal = east - west
        bbox_vertical = north - south
        columns = int(math.floor(bbox_horizontal / cell_width + _FLOOR_TOLERANCE))
        rows = int(math.floor(bbox_vertical / cell_height + _FLOOR_TOLERANCE))
        if rows < 1 or columns < 1:
            raise DegenerateGeometry(f"grid has {rows} rows and {columns} columns for bbox {bbox}")
        if self.max_cells is not None and rows * columns > self.max_cells:
            raise ResourceExhausted(
                f"grid of {rows}x{columns} cells exceeds the budget of {self.max_cells}")

        delta_x = (bbox_horizontal - columns * cell_width) / 2
        delta_y = (bbox_vertical - rows * cell_height) / 2

        obstacles = list(obstacles)
        debugger.log("Rasterizing obstacles", payload={
            "rows": rows, "columns": columns, "resolution": resolution,
            "cell_width": cell_width, "cell_height": cell_height,
            "obstacles": len(obstacles)})

        # 3. 逐格分类 (中心点)
        grid = np.zeros((rows, columns), dtype=np.int8)
        table = np.zeros((rows, columns, 2), dtype=float)
        for r in range(rows):
            current_y = north - delta_y - (r + 0.5) * cell_height
            for c in range(columns):
                current_x = west + delta_x + (c + 0.5) * cell_width
                pt = Coordinate(current_x, current_y)
                grid[r, c] = BLOCKED if is_inside_any(pt, obstacles) else FREE
                table[r, c] = (current_x, current_y)

        grid_map = GeoGridMap(grid, table, bbox=bbox, resolution=resolution,
                              cell_width=cell_width, cell_height=cell_height)
        debugger.log("Grid ready", payload={"blocked": int(grid.sum()), "cells": rows * columns})
        return grid_map
