# geopath/errors.py
from typing import Any, Optional


class GeoPathError(Exception):
    """geopath 所有异常的基类"""


class InvalidInput(GeoPathError, ValueError):
    """输入非法：空几何、缩放因子为 0、不支持的几何类型、配置错误等"""


class DegenerateGeometry(InvalidInput):
    """
    几何退化：
    - 多边形环去掉闭合点后不足 3 个不同顶点
    - 栅格化后行数或列数为 0
    """


class NoFreeCell(GeoPathError):
    """栅格中没有任何可通行格子，起终点无法吸附"""


class UnreachableGoal(GeoPathError):
    """OpenSet 耗尽仍未到达终点 (没有路径)"""

    def __init__(self, message: str, result: Optional[Any] = None):
        super().__init__(message)
        # 保留失败的搜索结果，便于调用方做诊断
        self.result = result


class ResourceExhausted(GeoPathError):
    """栅格尺寸或搜索迭代次数超出预算"""
