"""Geographic primitives: points, distances and nearest-node lookup."""

from .distance import haversine
from .nearest_node import NearestNodeFinder
from .point import GeographicPoint

__all__ = ["haversine", "GeographicPoint", "NearestNodeFinder"]
