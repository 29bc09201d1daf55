# tests/visualization/test_plotter.py
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from geopath import PolygonCollection, ShortestPathRouter
from geopath.map.grid_map import GeoGridMap
from geopath.visualization.observers import ExperimentObserver
from geopath.visualization.plotter import plot_route


def test_plot_route_with_search_replay():
    observer = ExperimentObserver()
    router = ShortestPathRouter(debugger=observer)
    path = router.route((0, 0), (3, 2), PolygonCollection())

    ax = plot_route(path.grid_map, path, debugger=observer)
    try:
        assert len(ax.images) == 1
        # 路径、起点、终点
        assert len(ax.lines) == 3
        assert len(ax.collections) == 1
        assert "Route cost" in ax.get_title()
    finally:
        plt.close(ax.figure)


def test_plot_plain_grid():
    grid_map = GeoGridMap.from_matrix([[0, 1], [0, 0]])
    fig, ax = plt.subplots()
    assert plot_route(grid_map, ax=ax) is ax
    assert ax.get_legend() is None
    plt.close(fig)
