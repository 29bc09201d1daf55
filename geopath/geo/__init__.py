# geopath/geo/__init__.py

from .measurement import (EARTH_RADIUS, bbox, center, convert_length, distance, distances_from,
                          rhumb_bearing, rhumb_destination, rhumb_distance)
from .booleans import in_bbox, in_ring, is_inside_any, point_in_polygon
from .transformation import pad_bbox, transform_scale

__all__ = [
    "EARTH_RADIUS",
    "bbox",
    "center",
    "convert_length",
    "distance",
    "distances_from",
    "rhumb_bearing",
    "rhumb_destination",
    "rhumb_distance",
    "in_bbox",
    "in_ring",
    "is_inside_any",
    "point_in_polygon",
    "pad_bbox",
    "transform_scale",
]
