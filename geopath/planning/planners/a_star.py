# geopath/planning/planners/a_star.py
import heapq
import itertools
import math
from typing import Dict, List, Optional, Set, Tuple

from geopath.errors import InvalidInput, ResourceExhausted
from geopath.map.base import MapBase
from geopath.planning.heuristics.base import Heuristic
from geopath.planning.heuristics.manhattan import ManhattanHeuristic
from geopath.planning.interfaces import IPlannerObserver
from geopath.planning.planners.base import PlannerBase, SearchResult, SearchState, trace_cells
from geopath.types import CellIndex, SearchNode
from geopath.visualization.observers import EfficientObserver


class SearchContext:
    """
    单次搜索的全部可变状态，每次 plan() 新建，用完即弃。

    - nodes: 节点池 (arena)，parent 用下标表示
    - open_heap: (f, h, seq, node_index)，同一格子可能存在多个条目 (旧条目为过期副本)
    - open_g: 每个格子在 OpenSet 中记录过的最小 g
    - closed: 已确定的格子，只增不减
    """

    def __init__(self):
        self.nodes: List[SearchNode] = []
        self.open_heap: List[Tuple[float, float, int, int]] = []
        self.open_g: Dict[CellIndex, float] = {}
        self.closed: Set[CellIndex] = set()
        self.state = SearchState.INITIALIZED
        self.expanded = 0
        self.goal_index: Optional[int] = None
        self._seq = itertools.count()

    def push(self, cell: CellIndex, parent: int, g: float, h: float) -> int:
        index = len(self.nodes)
        self.nodes.append(SearchNode(cell, parent, g, h))
        self.open_g[cell] = g
        # 平局规则：f 小优先，其次 h 小，其次先入队
        heapq.heappush(self.open_heap, (g + h, h, next(self._seq), index))
        return index

    def pop(self) -> int:
        return heapq.heappop(self.open_heap)[3]


class AStarPlanner(PlannerBase):
    """
    8-连通 Grid A*。

    工作流程：
    1. OpenSet 初始只有起点 (g=0, h=heuristic(start, goal))。
    2. 每轮先检查终点是否已进入 ClosedSet；否则弹出 f 最小的节点。
       如果该格子已关闭 (过期副本)，直接丢弃，不计步数。
    3. 扩展 8 个邻居：越界、障碍、已关闭的跳过；
       邻居不在 OpenSet 中则新建节点，已在 OpenSet 中但 g 更大则压入改进后的新节点
       (旧条目留在堆里，弹出时按过期副本丢弃)。
    4. OpenSet 耗尽仍未到达终点 -> EXHAUSTED。

    默认启发式为 Manhattan，在 8-连通下不可采纳 (可能返回非最优路径)。
    """

    def __init__(self,
                 heuristic: Optional[Heuristic] = None,
                 straight_cost: float = 1.0,
                 max_iterations: Optional[int] = None):
        if not straight_cost > 0:
            raise InvalidInput(f"straight_cost must be positive, got {straight_cost}")
        self.straight_cost = straight_cost
        self.h_fn = heuristic if heuristic is not None else ManhattanHeuristic()
        self.bevel_cost = math.sqrt(straight_cost ** 2 + straight_cost ** 2)
        self.max_iterations = max_iterations

        # 8 个运动方向 (dx, dy, cost)
        s, b = self.straight_cost, self.bevel_cost
        self.motions = [
            (1, 0, s), (0, 1, s), (-1, 0, s), (0, -1, s),
            (1, 1, b), (1, -1, b), (-1, 1, b), (-1, -1, b)
        ]

    def plan(self,
             start: CellIndex,
             goal: CellIndex,
             grid_map: MapBase,
             debugger: IPlannerObserver = None) -> SearchResult:

        # 1. 初始化观察者
        if debugger is None:
            debugger = EfficientObserver()
        debugger.set_map_info(grid_map)

        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        for name, cell in (("start", start), ("goal", goal)):
            if not grid_map.is_valid_index(*cell):
                raise InvalidInput(f"{name} cell {cell} is outside the {grid_map.width}x{grid_map.height} grid")
            if grid_map.is_obstacle(*cell):
                raise InvalidInput(f"{name} cell {cell} is blocked")

        # 2. 每次调用使用新的搜索上下文
        ctx = SearchContext()
        h0 = self.h_fn.estimate(start, goal)
        ctx.push(start, -1, 0.0, h0)
        debugger.record_open_set_node(start, h0, h0)
        ctx.state = SearchState.SEARCHING

        # 3. 主循环
        while True:
            # A. 终止条件：终点已关闭
            if goal in ctx.closed:
                ctx.state = SearchState.SUCCEEDED
                goal_index = ctx.goal_index
                goal_node = ctx.nodes[goal_index]
                cells = trace_cells(ctx.nodes, goal_index)
                debugger.log("Path found", payload={
                    "cost": goal_node.g, "cells": len(cells), "expanded": ctx.expanded})
                return SearchResult(SearchState.SUCCEEDED, cells, goal_node.g,
                                    ctx.expanded, ctx.nodes, goal_index)

            if not ctx.open_heap:
                ctx.state = SearchState.EXHAUSTED
                debugger.log("Open set is empty, no path found.", level='WARN',
                             payload={"start": start, "goal": goal, "expanded": ctx.expanded})
                return SearchResult(SearchState.EXHAUSTED, expanded=ctx.expanded, nodes=ctx.nodes)

            current_index = ctx.pop()
            current = ctx.nodes[current_index]

            # B. 过期副本
            if current.cell in ctx.closed:
                continue

            ctx.closed.add(current.cell)
            if current.cell == goal:
                ctx.goal_index = current_index
            ctx.expanded += 1
            if self.max_iterations is not None and ctx.expanded > self.max_iterations:
                debugger.log("Iteration budget exceeded", level='ERROR',
                             payload={"max_iterations": self.max_iterations})
                raise ResourceExhausted(
                    f"A* expanded more than {self.max_iterations} nodes without reaching {goal}")
            debugger.record_current_expansion(current.cell)

            # C. 扩展邻居
            cx, cy = current.cell
            for dx, dy, edge_cost in self.motions:
                neighbor = (cx + dx, cy + dy)

                if grid_map.is_obstacle(*neighbor):  # 越界也算障碍
                    continue
                if neighbor in ctx.closed:
                    continue

                new_g = current.g + edge_cost
                best_g = ctx.open_g.get(neighbor)
                if best_g is None or new_g < best_g:
                    h_val = self.h_fn.estimate(neighbor, goal)
                    ctx.push(neighbor, current_index, new_g, h_val)
                    debugger.record_open_set_node(neighbor, new_g + h_val, h_val)
                    debugger.record_edge(current.cell, neighbor)

