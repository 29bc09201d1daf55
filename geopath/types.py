# geopath/types.py
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from geopath.errors import DegenerateGeometry, InvalidInput

# 栅格索引 (x, y) = (列, 行)。行 0 为北边界，列 0 为西边界
CellIndex = Tuple[int, int]


@dataclass(frozen=True)
class Coordinate:
    """
    地理坐标 (经度, 纬度)，单位：度
    """
    lon: float
    lat: float

    def __iter__(self) -> Iterator[float]:
        yield self.lon
        yield self.lat

    @classmethod
    def of(cls, value) -> "Coordinate":
        """接受 Coordinate 或任意 (lon, lat) 二元序列"""
        if isinstance(value, Coordinate):
            return value
        if value is None:
            raise InvalidInput("coordinate is required")
        try:
            lon, lat = value
            return cls(float(lon), float(lat))
        except (TypeError, ValueError) as exc:
            raise InvalidInput(f"invalid coordinate: {value!r}") from exc


@dataclass(frozen=True)
class BoundingBox:
    """(west, south, east, north)，单位：度"""
    west: float
    south: float
    east: float
    north: float

    @property
    def width(self) -> float:
        return self.east - self.west

    @property
    def height(self) -> float:
        return self.north - self.south

    @property
    def is_degenerate(self) -> bool:
        return not (self.west < self.east and self.south < self.north)

    def contains(self, point: Coordinate) -> bool:
        """含边界"""
        return (self.west <= point.lon <= self.east and
                self.south <= point.lat <= self.north)

    def to_polygon(self) -> "Polygon":
        sw = Coordinate(self.west, self.south)
        se = Coordinate(self.east, self.south)
        ne = Coordinate(self.east, self.north)
        nw = Coordinate(self.west, self.north)
        return Polygon(outer=(sw, se, ne, nw, sw))


Ring = Tuple[Coordinate, ...]


def _normalize_ring(points: Sequence) -> Ring:
    """转换为 Coordinate 元组并闭合；去掉闭合点后至少 3 个不同顶点"""
    if points is None:
        raise InvalidInput("ring is required")
    ring = [Coordinate.of(p) for p in points]
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    if len(set(ring[:-1])) < 3:
        raise DegenerateGeometry(f"ring needs at least 3 distinct vertices, got {len(set(ring[:-1]))}")
    return tuple(ring)


@dataclass(frozen=True)
class Polygon:
    """
    多边形：外环 + 若干内环 (洞)。
    所有环以闭合形式保存 (首点 == 尾点)。
    """
    outer: Ring
    holes: Tuple[Ring, ...] = ()
    bbox: BoundingBox = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "outer", _normalize_ring(self.outer))
        object.__setattr__(self, "holes", tuple(_normalize_ring(h) for h in self.holes))
        lons = [p.lon for p in self.outer]
        lats = [p.lat for p in self.outer]
        object.__setattr__(self, "bbox", BoundingBox(min(lons), min(lats), max(lons), max(lats)))

    @property
    def rings(self) -> Tuple[Ring, ...]:
        return (self.outer,) + self.holes

    @classmethod
    def from_rings(cls, rings: Sequence[Sequence]) -> "Polygon":
        """从嵌套列表构造：[[[lon, lat], ...], [hole...], ...]"""
        if not rings:
            raise InvalidInput("polygon needs an outer ring")
        return cls(outer=rings[0], holes=tuple(rings[1:]))


# --- 障碍物输入的封闭联合类型 ---

@dataclass(frozen=True)
class PolygonCollection:
    polygons: Tuple[Polygon, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "polygons", tuple(self.polygons))


@dataclass(frozen=True)
class SinglePolygon:
    polygon: Polygon


@dataclass(frozen=True)
class PointMarker:
    """命名的出入口标记，只参与范围计算，不阻挡"""
    coordinate: Coordinate
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "coordinate", Coordinate.of(self.coordinate))


ObstacleInput = Union[PolygonCollection, SinglePolygon, PointMarker]


@dataclass
class SearchNode:
    """
    搜索树节点
    parent 为节点池 (arena) 中的下标，-1 表示根节点
    """
    cell: CellIndex
    parent: int
    g: float
    h: float

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass
class Path:
    """
    规划结果
    coordinates: 从原始起点到原始终点的坐标序列 (未吸附)
    cost: 栅格代价 (边权之和，不是测地线长度)
    """
    coordinates: List[Coordinate]
    cost: float
    cells: List[CellIndex] = field(default_factory=list)
    grid_map: Optional[object] = field(default=None, repr=False)

    def __len__(self) -> int:
        return len(self.coordinates)
