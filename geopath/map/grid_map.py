# geopath/map/grid_map.py
from typing import Iterable, Optional, Sequence

import numpy as np

from geopath.errors import DegenerateGeometry, InvalidInput
from geopath.map.base import MapBase
from geopath.types import BoundingBox, CellIndex, Coordinate

FREE = 0
BLOCKED = 1
PATH = 2   # 仅用于 render_path 的输出


class GeoGridMap(MapBase):
    """
    占用栅格 + 格子中心坐标表。

    - data[y, x]: 1 = 障碍, 0 = 空闲
    - coordinates[y, x] = (lon, lat)，格子中心
    行 0 为北边界 (纬度随行号递减)，列 0 为西边界 (经度随列号递增)。
    两个数组在构造后只读，可以被多次搜索共享。
    """

    def __init__(self,
                 occupancy: np.ndarray,
                 coordinates: np.ndarray,
                 bbox: Optional[BoundingBox] = None,
                 resolution: float = 1.0,
                 cell_width: float = 1.0,
                 cell_height: float = 1.0):
        grid = np.array(occupancy, dtype=np.int8)
        if grid.ndim != 2 or grid.shape[0] < 1 or grid.shape[1] < 1:
            raise DegenerateGeometry(f"grid must have at least one row and one column, got shape {grid.shape}")
        if not np.isin(grid, (FREE, BLOCKED)).all():
            raise InvalidInput("occupancy grid must contain only 0 (free) and 1 (blocked)")

        table = np.array(coordinates, dtype=float)
        if table.shape != grid.shape + (2,):
            raise InvalidInput(f"coordinate table shape {table.shape} does not match grid {grid.shape}")

        grid.flags.writeable = False
        table.flags.writeable = False
        self._grid = grid
        self._coordinates = table
        self._bbox = bbox
        self._resolution = resolution
        self._cell_width = cell_width
        self._cell_height = cell_height

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]]) -> "GeoGridMap":
        """
        直接由 0/1 矩阵构造平面栅格。
        坐标表就是格子索引本身: coordinates[y, x] = (x, y)
        """
        grid = np.array(matrix, dtype=np.int8)
        if grid.ndim != 2:
            raise InvalidInput("matrix must be two dimensional")
        ys, xs = np.indices(grid.shape)
        table = np.stack([xs, ys], axis=-1).astype(float)
        return cls(grid, table)

    @property
    def data(self) -> np.ndarray:
        return self._grid

    @property
    def coordinates(self) -> np.ndarray:
        return self._coordinates

    @property
    def resolution(self) -> float:
        return self._resolution

    @property
    def bbox(self) -> Optional[BoundingBox]:
        return self._bbox

    @property
    def cell_width(self) -> float:
        return self._cell_width

    @property
    def cell_height(self) -> float:
        return self._cell_height

    @property
    def free_mask(self) -> np.ndarray:
        return self._grid == FREE

    def is_obstacle(self, x_idx: int, y_idx: int) -> bool:
        if not self.is_valid_index(x_idx, y_idx):
            return True  # 越界视为障碍
        return self._grid[y_idx, x_idx] == BLOCKED

    def grid_to_world(self, x_idx: int, y_idx: int) -> Coordinate:
        if not self.is_valid_index(x_idx, y_idx):
            raise InvalidInput(f"cell {(x_idx, y_idx)} is outside the {self.width}x{self.height} grid")
        lon, lat = self._coordinates[y_idx, x_idx]
        return Coordinate(float(lon), float(lat))

    def render_path(self, cells: Iterable[CellIndex]) -> np.ndarray:
        """返回占用矩阵的副本，路径格子标记为 PATH (不污染原图)"""
        canvas = self._grid.copy()
        for x, y in cells:
            canvas[y, x] = PATH
        return canvas

    def __repr__(self):
        return (f"GeoGridMap({self.width}x{self.height}, blocked={int(self._grid.sum())}, "
                f"bbox={self._bbox})")


def format_matrix(matrix: np.ndarray) -> str:
    """矩阵转文本，每行一行，空格分隔"""
    return "\n".join(" ".join(str(int(v)) for v in row) for row in np.asarray(matrix))
