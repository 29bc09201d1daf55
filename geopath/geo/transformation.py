# geopath/geo/transformation.py
from typing import Optional, Union

from geopath.errors import InvalidInput
from geopath.geo.measurement import bbox, center, rhumb_bearing, rhumb_destination, rhumb_distance
from geopath.types import (BoundingBox, Coordinate, PointMarker, Polygon,
                           PolygonCollection, SinglePolygon)

Scalable = Union[Polygon, SinglePolygon, PolygonCollection, PointMarker, Coordinate]


def transform_scale(geometry: Scalable, factor: float,
                    origin: Optional[Coordinate] = None,
                    units: str = "kilometers") -> Scalable:
    """
    以 origin (默认外包框中心) 为基点，按 factor 缩放几何。
    每个顶点：恒向线距离 * factor，方位角不变，再求恒向线终点。
    返回新的几何对象，输入不被修改。
    """
    if geometry is None:
        raise InvalidInput("geojson required")
    if factor == 0:
        raise InvalidInput("invalid factor")

    if isinstance(geometry, PolygonCollection):
        # 每个多边形绕各自的中心缩放
        return PolygonCollection(tuple(_scale_polygon(p, factor, origin, units) for p in geometry.polygons))
    if isinstance(geometry, SinglePolygon):
        return SinglePolygon(_scale_polygon(geometry.polygon, factor, origin, units))
    if isinstance(geometry, Polygon):
        return _scale_polygon(geometry, factor, origin, units)
    if isinstance(geometry, (PointMarker, Coordinate)):
        # 点没有尺度
        return geometry
    raise InvalidInput(f"unsupported geometry: {type(geometry).__name__}")


def _scale_polygon(polygon: Polygon, factor: float, origin: Optional[Coordinate], units: str) -> Polygon:
    if factor == 1:
        return polygon
    if origin is None:
        origin = center(polygon)

    def scale_point(point: Coordinate) -> Coordinate:
        original_distance = rhumb_distance(origin, point, units)
        bearing = rhumb_bearing(origin, point)
        return rhumb_destination(origin, original_distance * factor, bearing, units)

    rings = [[scale_point(p) for p in ring] for ring in polygon.rings]
    return Polygon(outer=rings[0], holes=tuple(rings[1:]))


def pad_bbox(box: BoundingBox, factor: float, units: str = "kilometers") -> BoundingBox:
    """外包框绕中心放大 factor 倍 (用于给栅格留边)"""
    return bbox(transform_scale(box.to_polygon(), factor, units=units))
