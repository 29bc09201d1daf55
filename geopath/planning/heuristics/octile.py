# geopath/planning/heuristics/octile.py
from .base import Heuristic

# sqrt(2) - 1，略小于真值以保证不高估
_DIAGONAL_EXTRA = 0.41421356


class OctileHeuristic(Heuristic):
    """8-连通栅格上无障碍时的精确距离：先斜走 min(dx, dy)，再直走剩下的"""
    name = "octile"

    def cell_distance(self, dx: int, dy: int) -> float:
        return max(dx, dy) + _DIAGONAL_EXTRA * min(dx, dy)
