# geopath/planning/planners/__init__.py

from .base import PlannerBase, SearchResult, SearchState, trace_cells
from .a_star import AStarPlanner, SearchContext


__all__ = [
    "PlannerBase",
    "SearchResult",
    "SearchState",
    "trace_cells",
    "AStarPlanner",
    "SearchContext",
]
