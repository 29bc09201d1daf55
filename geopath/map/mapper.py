# geopath/map/mapper.py
from typing import Dict, Mapping

import numpy as np

from geopath.errors import InvalidInput, NoFreeCell
from geopath.geo.measurement import distances_from
from geopath.map.grid_map import GeoGridMap
from geopath.planning.interfaces import IPlannerObserver
from geopath.types import CellIndex, Coordinate
from geopath.visualization.observers import EfficientObserver


class CoordinateMapper:
    """
    把任意地理坐标吸附到最近的可通行格子 (按格子中心的大圆距离)。
    距离相同时取扫描顺序 (自北向南、自西向东) 中的第一个格子。
    """

    def __init__(self, units: str = "kilometers"):
        self.units = units

    def snap(self, target, grid_map: GeoGridMap, debugger: IPlannerObserver = None) -> CellIndex:
        return self.snap_many({"target": target}, grid_map, debugger)["target"]

    def snap_many(self,
                  anchors: Mapping[str, Coordinate],
                  grid_map: GeoGridMap,
                  debugger: IPlannerObserver = None) -> Dict[str, CellIndex]:
        """
        空闲格子只筛选一次，每个锚点 (如 start / end) 在同一批格子上向量化求最近格子
        """
        if debugger is None:
            debugger = EfficientObserver()
        if not anchors:
            raise InvalidInput("at least one anchor is required")
        points = {name: Coordinate.of(value) for name, value in anchors.items()}

        # 1. 展平成行优先的格子序列 (即扫描顺序)，只保留空闲格子
        free = grid_map.free_mask.ravel()
        if not free.any():
            debugger.log("No traversable cell in grid", level='ERROR',
                         payload={"width": grid_map.width, "height": grid_map.height})
            raise NoFreeCell(f"no free cell in {grid_map.width}x{grid_map.height} grid")
        flat_ids = np.flatnonzero(free)
        lons = grid_map.coordinates[..., 0].ravel()[flat_ids]
        lats = grid_map.coordinates[..., 1].ravel()[flat_ids]

        # 2. 每个锚点一行距离，argmin 取第一个最小值
        snapped: Dict[str, CellIndex] = {}
        for name, point in points.items():
            dists = distances_from(point, lons, lats, self.units)
            best = int(flat_ids[int(np.argmin(dists))])
            y_idx, x_idx = divmod(best, grid_map.width)
            snapped[name] = (x_idx, y_idx)
            debugger.log(f"Snapped {name}", level='DEBUG', payload={
                "coordinate": (point.lon, point.lat), "cell": (x_idx, y_idx),
                "distance": float(dists.min())})
        return snapped
