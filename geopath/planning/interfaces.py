# geopath/planning/interfaces.py
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from geopath.types import CellIndex


class IPlannerObserver(ABC):
    """
    搜索过程的观察者。
    A*、栅格化、吸附和路由器都只通过这里汇报进度，
    具体记录多少由实现决定 (见 geopath.visualization.observers)。
    """

    @abstractmethod
    def record_open_set_node(self, node: CellIndex, f: float = 0.0, h: float = 0.0):
        """格子被压入 OpenSet (包括改进 g 值后的重复压入)"""

    @abstractmethod
    def record_current_expansion(self, node: CellIndex):
        """格子被关闭"""

    @abstractmethod
    def record_edge(self, start_node: CellIndex, end_node: CellIndex):
        """搜索树上的 parent -> child"""

    @abstractmethod
    def set_map_info(self, map_info: Any):
        """本次搜索使用的栅格"""

    @abstractmethod
    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        """
        :param level: 'DEBUG' / 'INFO' / 'WARN' / 'ERROR'
        :param payload: 结构化数据，如栅格尺寸、代价、吸附结果
        """
