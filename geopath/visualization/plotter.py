# 绘图逻辑 (Matplotlib)

from typing import Optional

import matplotlib.pyplot as plt

from geopath.map.grid_map import GeoGridMap
from geopath.types import Path


def plot_route(grid_map: GeoGridMap,
               path: Optional[Path] = None,
               debugger=None,
               ax=None):
    """
    画出占用栅格、已扩展的格子 (如果 debugger 有记录) 和最终路径
    :return: matplotlib Axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    # A. 底图：按格子边缘给出经纬度范围；平面栅格直接用索引
    if grid_map.bbox is not None:
        x0, x1 = grid_map.coordinates[0, 0, 0], grid_map.coordinates[0, -1, 0]
        y0, y1 = grid_map.coordinates[-1, 0, 1], grid_map.coordinates[0, 0, 1]
        extent = [x0 - grid_map.cell_width / 2, x1 + grid_map.cell_width / 2,
                  y0 - grid_map.cell_height / 2, y1 + grid_map.cell_height / 2]
    else:
        extent = [-0.5, grid_map.width - 0.5, grid_map.height - 0.5, -0.5]
    ax.imshow(grid_map.data, cmap='Greys', extent=extent, alpha=0.5, aspect='auto')

    # B. 已扩展节点 - 红色小点
    expanded = getattr(debugger, 'expanded_nodes', None)
    if expanded:
        pts = [grid_map.grid_to_world(x, y) for x, y in expanded]
        ax.scatter([p.lon for p in pts], [p.lat for p in pts], c='red', s=2, alpha=0.3, label='Expanded Nodes')

    # C. 路径 - 蓝色实线，起点绿点、终点红叉
    if path is not None and path.coordinates:
        xs = [p.lon for p in path.coordinates]
        ys = [p.lat for p in path.coordinates]
        ax.plot(xs, ys, 'b-', linewidth=2.0, label='Planned Path')
        ax.plot(xs[0], ys[0], 'go', markersize=8, label='Start')
        ax.plot(xs[-1], ys[-1], 'rx', markersize=8, label='Goal')
        ax.set_title(f"Route cost: {path.cost:.3f} ({len(path.cells)} cells)")

    ax.set_xlabel("Longitude [deg]")
    ax.set_ylabel("Latitude [deg]")
    ax.grid(True, linestyle=':', alpha=0.3)
    if ax.get_legend_handles_labels()[0]:
        ax.legend()
    return ax
