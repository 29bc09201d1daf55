# geopath/planning/heuristics/manhattan.py
from .base import Heuristic


class ManhattanHeuristic(Heuristic):
    """
    L1 距离: |dx| + |dy|，默认启发式。

    8-连通栅格上一步斜移只花 sqrt(2) 却让 h 减少 2，h 会高估真实代价，
    A* 返回的路径可能比最优路径长；换来的是搜索明显偏向终点，扩展节点少。
    需要最优路径时改用 OctileHeuristic。
    """
    name = "manhattan"

    def cell_distance(self, dx: int, dy: int) -> float:
        return dx + dy
