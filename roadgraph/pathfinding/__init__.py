"""Pathfinding module for finding road routes."""

from .edge import MapEdge
from .errors import CorruptedStateError, InvalidArgumentError
from .graph import MapGraph
from .search import PathFinder, PathResult

__all__ = [
    "MapEdge",
    "MapGraph",
    "PathFinder",
    "PathResult",
    "InvalidArgumentError",
    "CorruptedStateError",
]
