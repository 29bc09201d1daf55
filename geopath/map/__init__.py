# geopath/map/__init__.py

from .base import MapBase
from .grid_map import BLOCKED, FREE, PATH, GeoGridMap, format_matrix
from .rasterizer import GridRasterizer
from .mapper import CoordinateMapper

__all__ = ["MapBase", "GeoGridMap", "GridRasterizer", "CoordinateMapper",
           "BLOCKED", "FREE", "PATH", "format_matrix"]
