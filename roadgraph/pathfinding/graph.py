"""Road network graph over geographic points."""

import csv
import logging
import math
import numbers
from pathlib import Path

import networkx as nx

from roadgraph.geo.point import GeographicPoint

from .edge import MapEdge
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class MapGraph:
    """
    Directed graph of a road network.

    Nodes are intersections keyed by their GeographicPoint value, edges are
    one-way road segments. Each node keeps its outgoing MapEdges, in
    insertion order, under the "edges" attribute; the same edges are
    mirrored in the underlying MultiDiGraph with their length as weight.
    """

    def __init__(self):
        """Initialize empty graph."""
        self.graph = nx.MultiDiGraph()

    def add_node(self, location: GeographicPoint | None) -> bool:
        """
        Add an intersection.

        Returns:
            True if the node was added, False if it was None or already present
        """
        if location is None or location in self.graph:
            return False
        self.graph.add_node(location, edges=[])
        return True

    def add_edge(
        self,
        start: GeographicPoint,
        end: GeographicPoint,
        name: str,
        road_type: str,
        length: float,
    ) -> None:
        """
        Add a directed road segment from start to end.

        Both endpoints must already be nodes.

        Raises:
            InvalidArgumentError: If an argument is None, the length is not a
                finite non-negative number, or an endpoint is not in the graph
        """
        if start is None or end is None or name is None or road_type is None:
            raise InvalidArgumentError("Edge endpoints, name and road type are required")
        if not isinstance(length, numbers.Real):
            raise InvalidArgumentError(f"Edge length must be a number, got {length!r}")
        if not math.isfinite(length) or length < 0:
            raise InvalidArgumentError(f"Edge length must be finite and >= 0, got {length}")
        if start not in self.graph or end not in self.graph:
            raise InvalidArgumentError(
                "Both endpoints must be added as nodes before adding an edge"
            )

        edge = MapEdge(start, end, name, road_type, float(length))
        self.graph.nodes[start]["edges"].append(edge)
        self.graph.add_edge(start, end, length=edge.length, name=name, road_type=road_type)

    def load_road_map(self, filepath: str | Path) -> int:
        """
        Load directed road segments from CSV.

        Expected columns: lat1, lon1, lat2, lon2, name, road_type
        Optional columns: length (km)

        Endpoints are added as nodes. When length is missing or empty the
        straight-line distance between the endpoints is used.

        Returns:
            Number of edges added
        """
        filepath = Path(filepath)
        edges_added = 0
        rows_skipped = 0

        with open(filepath, encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            for line_no, row in enumerate(reader, start=2):
                try:
                    start = GeographicPoint(float(row["lat1"]), float(row["lon1"]))
                    end = GeographicPoint(float(row["lat2"]), float(row["lon2"]))
                    name = row["name"].strip()
                    road_type = row["road_type"].strip()

                    raw_length = (row.get("length") or "").strip()
                    length = float(raw_length) if raw_length else start.distance(end)

                    if not math.isfinite(length) or length < 0:
                        raise ValueError(f"invalid length {length}")

                    self.add_node(start)
                    self.add_node(end)
                    self.add_edge(start, end, name, road_type, length)
                    edges_added += 1
                except (ValueError, KeyError, TypeError, AttributeError) as e:
                    logger.warning("Skipping %s line %d: %s", filepath.name, line_no, e)
                    rows_skipped += 1
                    continue

        logger.info(
            "Loaded %d edges from %s (%d rows skipped), graph has %d nodes",
            edges_added,
            filepath,
            rows_skipped,
            self.node_count(),
        )
        return edges_added

    def node_count(self) -> int:
        """Return number of intersections."""
        return self.graph.number_of_nodes()

    def edge_count(self) -> int:
        """Return number of road segments."""
        return self.graph.number_of_edges()

    def nodes(self) -> frozenset[GeographicPoint]:
        """Return all intersections."""
        return frozenset(self.graph.nodes)

    def has_node(self, location: GeographicPoint) -> bool:
        """Check if an intersection exists in the graph."""
        return location in self.graph

    def get_edges(self, location: GeographicPoint) -> tuple[MapEdge, ...]:
        """Get outgoing road segments in insertion order (empty if unknown)."""
        if location not in self.graph:
            return ()
        return tuple(self.graph.nodes[location]["edges"])

    def get_neighbors(self, location: GeographicPoint) -> list[GeographicPoint]:
        """Get intersections reachable by a single segment."""
        return list(dict.fromkeys(edge.end for edge in self.get_edges(location)))

    def get_edge(self, start: GeographicPoint, end: GeographicPoint) -> MapEdge | None:
        """Get the shortest segment from start to end, if any."""
        candidates = [edge for edge in self.get_edges(start) if edge.end == end]
        if not candidates:
            return None
        return min(candidates, key=lambda edge: edge.length)

    def __contains__(self, location: object) -> bool:
        return location in self.graph

    def __len__(self) -> int:
        """Return number of intersections."""
        return self.node_count()

    def __str__(self) -> str:
        lines = ["--------------- NODES ---------------"]
        for node in self.graph.nodes:
            neighbors = "".join(f"{n}; " for n in self.get_neighbors(node))
            lines.append(f"{node} -> {neighbors}")

        lines.append("--------------- EDGES ---------------")
        for node in self.graph.nodes:
            edges = "".join(f"{edge}; " for edge in self.get_edges(node))
            lines.append(f"{node} -> {edges}")

        lines.append(f"numVertices = {self.node_count()} numEdges = {self.edge_count()}")
        return "\n".join(lines)
