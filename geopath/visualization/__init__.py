# geopath/visualization/__init__.py

from .observers import DebugObserver, EfficientObserver, ExperimentObserver

__all__ = ["EfficientObserver", "ExperimentObserver", "DebugObserver"]
