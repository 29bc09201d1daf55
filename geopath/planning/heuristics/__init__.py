# geopath/planning/heuristics/__init__.py
# 所有启发式都以格子索引为输入，乘 cost_scale 后与边代价同量纲

from .base import Heuristic
from .manhattan import ManhattanHeuristic
from .octile import OctileHeuristic
from .euclidean import EuclideanHeuristic
from .zero import ZeroHeuristic

HEURISTICS = {
    h.name: h for h in (ManhattanHeuristic, OctileHeuristic, EuclideanHeuristic, ZeroHeuristic)
}

__all__ = [
    "Heuristic",
    "ManhattanHeuristic",
    "OctileHeuristic",
    "EuclideanHeuristic",
    "ZeroHeuristic",
    "HEURISTICS",
]
