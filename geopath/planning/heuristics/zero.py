# geopath/planning/heuristics/zero.py
from geopath.types import CellIndex
from .base import Heuristic


class ZeroHeuristic(Heuristic):
    """h = 0，A* 退化为 Dijkstra"""
    name = "zero"

    def estimate(self, current: CellIndex, goal: CellIndex) -> float:
        return 0.0

    def cell_distance(self, dx: int, dy: int) -> float:
        return 0.0
