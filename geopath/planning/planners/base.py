# geopath/planning/planners/base.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from geopath.map.base import MapBase
from geopath.planning.interfaces import IPlannerObserver
from geopath.types import CellIndex, SearchNode


class SearchState(Enum):
    INITIALIZED = 0
    SEARCHING = 1
    SUCCEEDED = 2   # 终点进入 ClosedSet
    EXHAUSTED = 3   # OpenSet 耗尽，无路径


@dataclass
class SearchResult:
    """
    一次搜索的结果
    失败时 status 为 EXHAUSTED，cells 为空，cost 为 inf
    """
    status: SearchState
    cells: List[CellIndex] = field(default_factory=list)
    cost: float = float("inf")
    expanded: int = 0
    nodes: List[SearchNode] = field(default_factory=list, repr=False)
    goal_index: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status is SearchState.SUCCEEDED


class PlannerBase(ABC):
    """
    所有栅格规划器的抽象基类
    """

    @abstractmethod
    def plan(self,
             start: CellIndex,
             goal: CellIndex,
             grid_map: MapBase,
             debugger: Optional[IPlannerObserver] = None) -> SearchResult:
        """
        执行路径规划
        :param start: 起点格子 (x, y)
        :param goal: 目标格子 (x, y)
        :param grid_map: 占用栅格
        :param debugger: 观察者钩子 (用于可视化搜索过程)
        :return: SearchResult (失败时 status = EXHAUSTED，不会返回空的 "成功" 路径)
        """
        pass


def trace_cells(nodes: List[SearchNode], index: int) -> List[CellIndex]:
    """沿 parent 下标回溯到根节点，返回 起点 -> 终点 顺序的格子序列"""
    cells = []
    while index != -1:
        node = nodes[index]
        cells.append(node.cell)
        index = node.parent
    cells.reverse()
    return cells
