# geopath/__init__.py
"""
geopath: 在多边形障碍物之间求两点间最小栅格代价路径 (8-连通 A*)
"""

from geopath.config import RouterConfig
from geopath.errors import (DegenerateGeometry, GeoPathError, InvalidInput, NoFreeCell,
                            ResourceExhausted, UnreachableGoal)
from geopath.router import ShortestPathRouter, normalize_obstacles, shortest_path
from geopath.types import (BoundingBox, Coordinate, Path, PointMarker, Polygon,
                           PolygonCollection, SinglePolygon)

__all__ = [
    "RouterConfig",
    "ShortestPathRouter",
    "shortest_path",
    "normalize_obstacles",
    "Coordinate",
    "BoundingBox",
    "Polygon",
    "PolygonCollection",
    "SinglePolygon",
    "PointMarker",
    "Path",
    "GeoPathError",
    "InvalidInput",
    "DegenerateGeometry",
    "NoFreeCell",
    "UnreachableGoal",
    "ResourceExhausted",
]
