# geopath/visualization/observers.py
import itertools
import logging
import os
import time
from typing import Any, Dict, List, Optional, Tuple

from geopath.planning.interfaces import IPlannerObserver
from geopath.types import CellIndex

# 同一秒内开启的多个调试会话靠序号区分日志文件
_session_ids = itertools.count()

_LEVELS = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}


class EfficientObserver(IPlannerObserver):
    """
    默认模式：什么都不记，只把 ERROR 打到控制台
    """
    def record_open_set_node(self, node: CellIndex, f: float = 0.0, h: float = 0.0): pass
    def record_current_expansion(self, node: CellIndex): pass
    def record_edge(self, start_node: CellIndex, end_node: CellIndex): pass
    def set_map_info(self, map_info: Any): pass

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        if level == 'ERROR':
            print(f"[ERROR] {message}")


class ExperimentObserver(IPlannerObserver):
    """
    实验模式：保存整次搜索的轨迹，供启发式对比和 plot_route 回放。

    - open_set_history: [(x, y, f, h)]，按压入顺序
    - expanded_nodes:   [(x, y)]，按关闭顺序
    - edges:            [(parent, child)]
    - messages:         [(level, message, payload)]
    """
    def __init__(self):
        self.open_set_history: List[Tuple[int, int, float, float]] = []
        self.expanded_nodes: List[CellIndex] = []
        self.edges: List[Tuple[CellIndex, CellIndex]] = []
        self.messages: List[Tuple[str, str, Optional[Dict]]] = []
        self.map_info = None

    def record_open_set_node(self, node: CellIndex, f: float = 0.0, h: float = 0.0):
        x, y = node
        self.open_set_history.append((x, y, f, h))

    def record_current_expansion(self, node: CellIndex):
        self.expanded_nodes.append(node)

    def record_edge(self, start_node: CellIndex, end_node: CellIndex):
        self.edges.append((start_node, end_node))

    def set_map_info(self, map_info: Any):
        self.map_info = map_info

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        # 控制台保持安静，消息留给调用方检查
        self.messages.append((level, message, payload))


class DebugObserver(ExperimentObserver):
    """
    Debug 模式：在实验模式的记录之外，把每一步写入独立的日志文件
    <log_dir>/plan_debug_<时间戳>_<序号>.log
    """
    def __init__(self, log_dir: str = "logs/planning_debug"):
        super().__init__()
        self.log_dir = log_dir
        os.makedirs(self.log_dir, exist_ok=True)

        session = f"{time.strftime('%Y%m%d_%H%M%S')}_{next(_session_ids)}"
        self.log_file = os.path.join(self.log_dir, f"plan_debug_{session}.log")

        # 每个会话一个 logger，不向 root 传播，避免重复输出
        self.logger = logging.getLogger(f"geopath.debug.{session}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        handler = logging.FileHandler(self.log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        self.logger.addHandler(handler)

        self.logger.info("=== Debug Session Started ===")

    def record_current_expansion(self, node: CellIndex):
        super().record_current_expansion(node)
        self.logger.debug(f"Expanding: {node}")

    def set_map_info(self, map_info: Any):
        super().set_map_info(map_info)
        self.logger.info(f"Map Info set: {map_info}")

    def log(self, message: str, level: str = 'INFO', payload: Optional[Dict] = None):
        super().log(message, level, payload)
        if payload:
            message = f"{message} | Payload: {payload}"
        self.logger.log(_LEVELS.get(level, logging.INFO), message)

    def close(self):
        """关闭文件句柄；之后的日志不再写入"""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
