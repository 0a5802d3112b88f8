"""Snap arbitrary coordinates to graph nodes using a KD-Tree."""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
from scipy.spatial import cKDTree

from .point import GeographicPoint


@dataclass
class NearestResult:
    """Result of nearest node search."""

    point: GeographicPoint
    distance_km: float


def _unit_vectors(coords: np.ndarray) -> np.ndarray:
    """Convert an (n, 2) array of degrees (lat, lon) to (n, 3) unit vectors."""
    lat, lon = np.radians(coords[:, 0]), np.radians(coords[:, 1])
    return np.column_stack((
        np.cos(lat) * np.cos(lon),
        np.cos(lat) * np.sin(lon),
        np.sin(lat),
    ))


class NearestNodeFinder:
    """
    Find the graph nodes closest to a coordinate in O(log n).

    Nodes are indexed as 3D unit vectors: the straight chord between two
    vectors grows with the great-circle distance, so the tree ranks nodes
    the way the Haversine formula does at every latitude.
    """

    def __init__(self, points: Iterable[GeographicPoint] = ()):
        """
        Initialize finder with a set of nodes.

        Args:
            points: Graph nodes to index (order is made deterministic)
        """
        self.points: list[GeographicPoint] = sorted(set(points))
        self.tree: cKDTree | None = None
        self._build_tree()

    def _build_tree(self) -> None:
        """Build KD-Tree from node coordinates."""
        if not self.points:
            self.tree = None
            return

        coords = np.array([[p.lat, p.lon] for p in self.points])
        self.tree = cKDTree(_unit_vectors(coords))

    def find_nearest(self, lat: float, lon: float) -> NearestResult | None:
        """
        Find the node nearest to a coordinate.

        Returns:
            NearestResult, or None if no nodes are indexed
        """
        results = self.find_nearest_k(lat, lon, k=1)
        return results[0] if results else None

    def find_nearest_k(self, lat: float, lon: float, k: int) -> list[NearestResult]:
        """
        Find the k nodes nearest to a coordinate, closest first.

        Args:
            lat: Latitude of the query point (degrees)
            lon: Longitude of the query point (degrees)
            k: Number of nodes to return (capped at the number indexed)
        """
        if self.tree is None or k < 1:
            return []

        k = min(k, len(self.points))
        query = GeographicPoint(lat, lon)
        _, indices = self.tree.query(_unit_vectors(np.array([[lat, lon]]))[0], k=k)

        results = []
        for idx in np.atleast_1d(indices):
            point = self.points[int(idx)]
            results.append(NearestResult(point=point, distance_km=query.distance(point)))

        results.sort(key=lambda r: r.distance_km)
        return results

    def __len__(self) -> int:
        return len(self.points)
