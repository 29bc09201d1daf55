# geopath/config.py
import math
from dataclasses import dataclass, field
from typing import Optional

from geopath.errors import InvalidInput
from geopath.geo.measurement import FACTORS
from geopath.planning.heuristics import HEURISTICS


@dataclass
class RouterConfig:
    """
    路径规划全局配置
    """
    # --- 1. 代价 ---
    straight_edge_cost: float = 1.0     # 平移代价，斜移代价自动取 sqrt(2) 倍

    # --- 2. 栅格 ---
    bbox_padding_factor: float = 1.15   # 外包框放大系数，保证栅格四周留有余量
    resolution_columns: int = 100       # 名义列数 (分辨率 = 外包框宽度 / 列数)
    units: str = "kilometers"           # 距离单位 (影响 resolution 的数值，不影响栅格形状)

    # --- 3. 搜索 ---
    heuristic: str = "manhattan"        # manhattan / octile / euclidean / zero

    # --- 4. 资源预算 (超出时抛 ResourceExhausted) ---
    max_grid_cells: Optional[int] = 1_000_000
    max_iterations: Optional[int] = None   # None: 不限制 (每个格子最多扩展一次)

    # --- 5. 调试 ---
    debug_mode: bool = False
    log_dir: str = "logs/planning_debug"

    # --- 派生属性 ---
    bevel_edge_cost: float = field(init=False)

    def __post_init__(self):
        if not self.straight_edge_cost > 0:
            raise InvalidInput(f"straight_edge_cost must be positive, got {self.straight_edge_cost}")
        if self.bbox_padding_factor == 0:
            raise InvalidInput("invalid factor: bbox_padding_factor must be nonzero")
        if self.resolution_columns < 1:
            raise InvalidInput(f"resolution_columns must be >= 1, got {self.resolution_columns}")
        if self.units not in FACTORS:
            raise InvalidInput(f"{self.units} units is invalid")
        if self.heuristic not in HEURISTICS:
            raise InvalidInput(f"unknown heuristic {self.heuristic!r}, expected one of {sorted(HEURISTICS)}")
        for name in ("max_grid_cells", "max_iterations"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise InvalidInput(f"{name} must be >= 1 or None, got {value}")

        self.bevel_edge_cost = math.sqrt(self.straight_edge_cost ** 2 + self.straight_edge_cost ** 2)
