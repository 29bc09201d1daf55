# geopath/planning/heuristics/base.py
from abc import ABC, abstractmethod

from geopath.types import CellIndex


class Heuristic(ABC):
    """
    栅格启发式：估计从 current 格子到 goal 格子的剩余代价。

    子类只需给出以格子为单位的距离 cell_distance(dx, dy)，
    cost_scale 为平移一格的代价，与 AStarPlanner 的 straight_cost 一致时 h 与 g 同量纲。
    """
    name = "base"

    def __init__(self, cost_scale: float = 1.0):
        self.cost_scale = cost_scale

    def estimate(self, current: CellIndex, goal: CellIndex) -> float:
        dx = abs(current[0] - goal[0])
        dy = abs(current[1] - goal[1])
        return self.cost_scale * self.cell_distance(dx, dy)

    @abstractmethod
    def cell_distance(self, dx: int, dy: int) -> float:
        """dx, dy >= 0"""
        pass

    def __repr__(self):
        return f"{type(self).__name__}(cost_scale={self.cost_scale})"
