# geopath/geo/measurement.py
"""
球面地球模型上的测量工具。

- 恒向线 (rhumb line) 距离 / 方位角 / 终点
- 大圆 (haversine) 距离，含 numpy 向量化版本
- 外包框与中心点

三个恒向线公式共用同一套病态保护 (|Δψ| 过小时 q 取 cos φ1) 和
极点 / 180° 经线修正，保证 destination(p, distance(p, q), bearing(p, q)) ≈ q。
"""
import math
from typing import Iterable, List, Union

import numpy as np

from geopath.errors import InvalidInput
from geopath.types import (BoundingBox, Coordinate, PointMarker, Polygon,
                           PolygonCollection, SinglePolygon)

# 地球半径 [m]
EARTH_RADIUS = 6371008.8

# 各单位下的地球半径 (radians -> length 的换算系数)
FACTORS = {
    "centimeters": EARTH_RADIUS * 100,
    "centimetres": EARTH_RADIUS * 100,
    "degrees": EARTH_RADIUS / 111325,
    "feet": EARTH_RADIUS * 3.28084,
    "inches": EARTH_RADIUS * 39.370,
    "kilometers": EARTH_RADIUS / 1000,
    "kilometres": EARTH_RADIUS / 1000,
    "meters": EARTH_RADIUS,
    "metres": EARTH_RADIUS,
    "miles": EARTH_RADIUS / 1609.344,
    "nauticalmiles": EARTH_RADIUS / 1852,
    "radians": 1.0,
    "yards": EARTH_RADIUS * 1.0936,
}

# E-W 航向时 Δψ -> 0，q = Δφ/Δψ 变成 0/0
_PSI_EPSILON = 1e-11


def _factor(units: str) -> float:
    try:
        return FACTORS[units]
    except KeyError:
        raise InvalidInput(f"{units} units is invalid") from None


def radians_to_length(radians: float, units: str = "kilometers") -> float:
    return radians * _factor(units)


def length_to_radians(distance: float, units: str = "kilometers") -> float:
    return distance / _factor(units)


def convert_length(length: float, original_unit: str = "kilometers", final_unit: str = "kilometers") -> float:
    if not length >= 0:
        raise InvalidInput("length must be a positive number")
    return radians_to_length(length_to_radians(length, original_unit), final_unit)


def _stretch(phi1: float, phi2: float, delta_phi: float) -> float:
    """墨卡托投影下的经度拉伸系数 q"""
    delta_psi = math.log(math.tan(phi2 / 2 + math.pi / 4) / math.tan(phi1 / 2 + math.pi / 4))
    return delta_phi / delta_psi if abs(delta_psi) > _PSI_EPSILON else math.cos(phi1)


# --- 1. 恒向线 ---

def rhumb_distance(start, end, units: str = "kilometers") -> float:
    origin = Coordinate.of(start)
    destination = Coordinate.of(end)

    # 跨 180° 经线时取较短的一侧
    dest_lon = destination.lon
    if dest_lon - origin.lon > 180:
        dest_lon -= 360
    elif origin.lon - dest_lon > 180:
        dest_lon += 360

    phi1 = math.radians(origin.lat)
    phi2 = math.radians(destination.lat)
    delta_phi = phi2 - phi1
    delta_lambda = math.radians(abs(dest_lon - origin.lon))
    if delta_lambda > math.pi:
        delta_lambda -= 2 * math.pi

    q = _stretch(phi1, phi2, delta_phi)

    # 在 "拉伸后" 的墨卡托平面上做勾股定理
    delta = math.sqrt(delta_phi * delta_phi + q * q * delta_lambda * delta_lambda)
    return convert_length(delta * EARTH_RADIUS, "meters", units)


def _calculate_rhumb_bearing(start: Coordinate, end: Coordinate) -> float:
    """返回 [0, 360) 的方位角"""
    phi1 = math.radians(start.lat)
    phi2 = math.radians(end.lat)
    delta_lambda = math.radians(end.lon - start.lon)
    if delta_lambda > math.pi:
        delta_lambda -= 2 * math.pi
    if delta_lambda < -math.pi:
        delta_lambda += 2 * math.pi

    delta_psi = math.log(math.tan(phi2 / 2 + math.pi / 4) / math.tan(phi1 / 2 + math.pi / 4))
    theta = math.atan2(delta_lambda, delta_psi)
    return (math.degrees(theta) + 360) % 360


def rhumb_bearing(start, end, final: bool = False) -> float:
    """
    恒向线方位角，范围 (-180, 180]
    final=True 时交换起终点计算
    """
    start = Coordinate.of(start)
    end = Coordinate.of(end)
    if final:
        bear360 = _calculate_rhumb_bearing(end, start)
    else:
        bear360 = _calculate_rhumb_bearing(start, end)
    return -(360 - bear360) if bear360 > 180 else bear360


def rhumb_destination(origin, distance: float, bearing: float, units: str = "kilometers") -> Coordinate:
    """
    从 origin 沿恒向线方位 bearing 走 distance 后的位置。
    distance 为负时向反方向移动。
    """
    origin = Coordinate.of(origin)
    if distance is None or not math.isfinite(distance):
        raise InvalidInput(f"distance must be a finite number, got {distance!r}")

    delta = length_to_radians(distance, units)   # 角距离
    lambda1 = math.radians(origin.lon)
    phi1 = math.radians(origin.lat)
    theta = math.radians(bearing)

    delta_phi = delta * math.cos(theta)
    phi2 = phi1 + delta_phi

    # 越过极点时把纬度折回
    if abs(phi2) > math.pi / 2:
        phi2 = math.pi - phi2 if phi2 > 0 else -math.pi - phi2

    q = _stretch(phi1, phi2, delta_phi)
    delta_lambda = delta * math.sin(theta) / q
    lambda2 = lambda1 + delta_lambda

    lon = (math.degrees(lambda2) + 540) % 360 - 180
    lat = math.degrees(phi2)

    # 跨 180° 经线补偿，保证相对 origin 连续
    if lon - origin.lon > 180:
        lon -= 360
    elif origin.lon - lon > 180:
        lon += 360
    return Coordinate(lon, lat)


# --- 2. 大圆距离 ---

def distance(start, end, units: str = "kilometers") -> float:
    """haversine 大圆距离"""
    a = Coordinate.of(start)
    b = Coordinate.of(end)
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    h = math.sin(d_lat / 2) ** 2 + math.sin(d_lon / 2) ** 2 * math.cos(lat1) * math.cos(lat2)
    return radians_to_length(2 * math.atan2(math.sqrt(h), math.sqrt(1 - h)), units)


def distances_from(origin, lons: np.ndarray, lats: np.ndarray, units: str = "kilometers") -> np.ndarray:
    """
    向量化的 haversine：origin 到一组点 (lons[i], lats[i]) 的距离
    与 distance() 逐点结果一致
    """
    origin = Coordinate.of(origin)
    lons = np.asarray(lons, dtype=float)
    lats = np.asarray(lats, dtype=float)
    d_lat = np.radians(lats - origin.lat)
    d_lon = np.radians(lons - origin.lon)
    lat1 = math.radians(origin.lat)
    lat2 = np.radians(lats)
    h = np.sin(d_lat / 2) ** 2 + np.sin(d_lon / 2) ** 2 * math.cos(lat1) * np.cos(lat2)
    return 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h)) * _factor(units)


# --- 3. 外包框 ---

Geometry = Union[Coordinate, Polygon, BoundingBox, SinglePolygon, PolygonCollection, PointMarker]


def _collect_points(geometry, out: List[Coordinate]):
    if isinstance(geometry, Coordinate):
        out.append(geometry)
    elif isinstance(geometry, PointMarker):
        out.append(geometry.coordinate)
    elif isinstance(geometry, Polygon):
        out.extend(geometry.outer)
    elif isinstance(geometry, SinglePolygon):
        out.extend(geometry.polygon.outer)
    elif isinstance(geometry, PolygonCollection):
        for polygon in geometry.polygons:
            out.extend(polygon.outer)
    elif isinstance(geometry, BoundingBox):
        out.append(Coordinate(geometry.west, geometry.south))
        out.append(Coordinate(geometry.east, geometry.north))
    elif isinstance(geometry, (list, tuple)):
        for item in geometry:
            _collect_points(item, out)
    else:
        raise InvalidInput(f"unsupported geometry: {type(geometry).__name__}")


def bbox(geometry: Union[Geometry, Iterable[Geometry]]) -> BoundingBox:
    """计算任意几何 (或几何列表) 的外包框"""
    if geometry is None:
        raise InvalidInput("geojson is required")
    points: List[Coordinate] = []
    _collect_points(geometry, points)
    if not points:
        raise InvalidInput("geometry has no coordinates")
    lons = [p.lon for p in points]
    lats = [p.lat for p in points]
    return BoundingBox(min(lons), min(lats), max(lons), max(lats))


def center(geometry: Union[Geometry, Iterable[Geometry]]) -> Coordinate:
    """外包框中心"""
    ext = bbox(geometry)
    return Coordinate((ext.west + ext.east) / 2, (ext.south + ext.north) / 2)
