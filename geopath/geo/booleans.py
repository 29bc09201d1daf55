# geopath/geo/booleans.py
from typing import Iterable, Sequence

from geopath.errors import DegenerateGeometry, InvalidInput
from geopath.types import BoundingBox, Coordinate, Polygon


def in_bbox(point: Coordinate, bbox: BoundingBox) -> bool:
    return bbox.contains(point)


def in_ring(point: Coordinate, ring: Sequence[Coordinate], ignore_boundary: bool = False) -> bool:
    """
    射线法 (even-odd rule) 判断点是否在环内
    :param ignore_boundary: True 时边界上的点视为不在环内
    """
    # 去掉闭合点 (不修改调用方的数据)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring = ring[:-1]
    if len(ring) < 3:
        raise DegenerateGeometry(f"ring needs at least 3 vertices, got {len(ring)}")

    px, py = point.lon, point.lat
    is_inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i].lon, ring[i].lat
        xj, yj = ring[j].lon, ring[j].lat
        j = i

        # 点恰好落在边上
        on_boundary = (py * (xi - xj) + yi * (xj - px) + yj * (px - xi) == 0
                       and (xi - px) * (xj - px) <= 0
                       and (yi - py) * (yj - py) <= 0)
        if on_boundary:
            return not ignore_boundary

        # 水平射线与边相交
        intersect = ((yi > py) != (yj > py)) and (px < (xj - xi) * (py - yi) / (yj - yi) + xi)
        if intersect:
            is_inside = not is_inside
    return is_inside


def point_in_polygon(point: Coordinate, polygon: Polygon, ignore_boundary: bool = False) -> bool:
    """
    点是否在多边形内 (含洞)
    外环边界默认算在内；洞的边界不算洞内
    """
    if point is None:
        raise InvalidInput("point is required")
    if polygon is None:
        raise InvalidInput("polygon is required")

    # 外包框快速排除
    if polygon.bbox is not None and not in_bbox(point, polygon.bbox):
        return False

    if not in_ring(point, polygon.outer, ignore_boundary):
        return False
    for hole in polygon.holes:
        if in_ring(point, hole, ignore_boundary=True):
            return False
    return True


def is_inside_any(point: Coordinate, polygons: Iterable[Polygon]) -> bool:
    """点落在任意一个多边形内即返回 True"""
    for polygon in polygons:
        if point_in_polygon(point, polygon):
            return True
    return False
