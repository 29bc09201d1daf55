# geopath/planning/heuristics/euclidean.py
import math

from .base import Heuristic


class EuclideanHeuristic(Heuristic):
    name = "euclidean"

    def cell_distance(self, dx: int, dy: int) -> float:
        # 可采纳，但比 octile 松
        return math.hypot(dx, dy)
