# geopath/map/base.py
from abc import ABC, abstractmethod

import numpy as np

from geopath.types import Coordinate


class MapBase(ABC):
    """
    规划器看到的栅格：行列索引 + 每个格子的地理坐标。
    索引约定 (x, y) = (列, 行)，data[y, x]。
    """

    @property
    @abstractmethod
    def data(self) -> np.ndarray:
        """占用矩阵 (rows x cols)，0 = 空闲, 1 = 障碍"""

    @property
    @abstractmethod
    def resolution(self) -> float:
        """名义分辨率 (外包框宽度 / 列数，按所选单位)"""

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    def is_valid_index(self, x_idx: int, y_idx: int) -> bool:
        return 0 <= x_idx < self.width and 0 <= y_idx < self.height

    @abstractmethod
    def is_obstacle(self, x_idx: int, y_idx: int) -> bool:
        """越界的索引也算障碍"""

    @abstractmethod
    def grid_to_world(self, x_idx: int, y_idx: int) -> Coordinate:
        """格子中心的地理坐标"""
