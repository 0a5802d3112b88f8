"""Route search over a road graph: BFS, Dijkstra and A*."""

import heapq
import itertools
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from roadgraph.geo.point import GeographicPoint

from .errors import CorruptedStateError
from .graph import MapGraph

logger = logging.getLogger(__name__)

NodeCallback = Callable[[GeographicPoint], None]
Heuristic = Callable[[GeographicPoint, GeographicPoint], float]

ALGORITHMS = ("bfs", "dijkstra", "astar")


def _noop(point: GeographicPoint) -> None:
    pass


def straight_line(point: GeographicPoint, goal: GeographicPoint) -> float:
    """Great-circle distance to the goal; never longer than any road route."""
    return point.distance(goal)


def _zero(point: GeographicPoint, goal: GeographicPoint) -> float:
    return 0.0


@dataclass
class SegmentInfo:
    """Information about a path segment."""

    start: GeographicPoint
    end: GeographicPoint
    name: str
    road_type: str
    length_km: float


@dataclass
class PathResult:
    """Result of pathfinding."""

    path: list[GeographicPoint]
    found: bool
    algorithm: str
    total_length: float = 0.0  # km
    num_segments: int = 0
    nodes_explored: int = 0  # Nodes reported to the search callback
    segments: list[SegmentInfo] = field(default_factory=list)


def reconstruct_path(
    parents: dict[GeographicPoint, GeographicPoint],
    start: GeographicPoint,
    goal: GeographicPoint,
    limit: int,
) -> list[GeographicPoint]:
    """
    Walk the parent mapping back from goal to start.

    Args:
        parents: Point -> point it was reached from
        start: Search origin
        goal: Search target, reached by the search
        limit: Maximum number of steps (the graph's node count)

    Returns:
        Path from start to goal, both included

    Raises:
        CorruptedStateError: If start is not reached within limit steps
    """
    path = [goal]
    current = goal
    for _ in range(limit):
        if current == start:
            path.reverse()
            return path
        if current not in parents:
            break
        current = parents[current]
        path.append(current)

    raise CorruptedStateError(
        f"Parent chain from {goal} does not lead back to {start} "
        f"within {limit} steps"
    )


class PathFinder:
    """
    Find routes in a road network.

    Every search keeps its frontier, visited set, parents and costs local
    to the call, so one finder can serve concurrent searches as long as
    the graph is not being modified.
    """

    def __init__(self, graph: MapGraph, heuristic: Heuristic | None = None):
        """
        Initialize pathfinder with a road graph.

        Args:
            graph: MapGraph instance (read-only during searches)
            heuristic: A* estimate of the remaining cost from a point to the
                goal; defaults to straight-line distance
        """
        self.graph = graph
        self.heuristic = heuristic or straight_line

    def bfs(
        self,
        start: GeographicPoint,
        goal: GeographicPoint,
        node_searched: NodeCallback | None = None,
    ) -> list[GeographicPoint]:
        """
        Find a path with the fewest segments using breadth first search.

        Args:
            start: The starting location
            goal: The goal location
            node_searched: Called with each point as it is discovered

        Returns:
            Points from start to goal (both included), or [] if there is none
        """
        node_searched = node_searched or _noop
        if start not in self.graph or goal not in self.graph:
            logger.debug("bfs: %s or %s is not in the graph", start, goal)
            return []

        frontier = deque([start])
        visited = {start}
        parents: dict[GeographicPoint, GeographicPoint] = {}
        node_searched(start)

        while frontier:
            current = frontier.popleft()
            if current == goal:
                return reconstruct_path(parents, start, goal, self.graph.node_count())

            for edge in self.graph.get_edges(current):
                nxt = edge.end
                if nxt not in visited:
                    visited.add(nxt)
                    parents[nxt] = current
                    frontier.append(nxt)
                    node_searched(nxt)

        logger.debug("bfs: path not found from %s to %s", start, goal)
        return []

    def dijkstra(
        self,
        start: GeographicPoint,
        goal: GeographicPoint,
        node_searched: NodeCallback | None = None,
    ) -> list[GeographicPoint]:
        """
        Find the shortest path by total length using Dijkstra's algorithm.

        Args:
            start: The starting location
            goal: The goal location
            node_searched: Called with each point as it is settled

        Returns:
            Points from start to goal (both included), or [] if there is none
        """
        return self._best_first(start, goal, _zero, node_searched, "dijkstra")

    def a_star(
        self,
        start: GeographicPoint,
        goal: GeographicPoint,
        node_searched: NodeCallback | None = None,
    ) -> list[GeographicPoint]:
        """
        Find the shortest path by total length using A* search.

        The heuristic must not overestimate the remaining length (and must
        be consistent) for the result to be optimal.

        Args:
            start: The starting location
            goal: The goal location
            node_searched: Called with each point as it is settled

        Returns:
            Points from start to goal (both included), or [] if there is none
        """
        return self._best_first(start, goal, self.heuristic, node_searched, "astar")

    def _best_first(
        self,
        start: GeographicPoint,
        goal: GeographicPoint,
        heuristic: Heuristic,
        node_searched: NodeCallback | None,
        label: str,
    ) -> list[GeographicPoint]:
        """Priority-queue search ordered by cost so far plus heuristic."""
        node_searched = node_searched or _noop
        if start not in self.graph or goal not in self.graph:
            logger.debug("%s: %s or %s is not in the graph", label, start, goal)
            return []

        # Heap entries are (priority, insertion seq, point); seq gives FIFO
        # order among equal priorities. Entries are never removed in place:
        # a point pushed again with a better cost leaves a stale entry behind.
        counter = itertools.count()
        best_cost = {start: 0.0}
        parents: dict[GeographicPoint, GeographicPoint] = {}
        settled: set[GeographicPoint] = set()
        queue = [(heuristic(start, goal), next(counter), start)]

        while queue:
            priority, _, current = heapq.heappop(queue)
            if current in settled:
                continue
            cost = best_cost[current]
            if priority > cost + heuristic(current, goal):
                continue

            settled.add(current)
            node_searched(current)
            if current == goal:
                logger.debug(
                    "%s: reached goal at cost %.3f after settling %d nodes",
                    label,
                    cost,
                    len(settled),
                )
                return reconstruct_path(parents, start, goal, self.graph.node_count())

            for edge in self.graph.get_edges(current):
                nxt = edge.end
                if nxt in settled:
                    continue
                new_cost = cost + edge.length
                if new_cost < best_cost.get(nxt, float("inf")):
                    best_cost[nxt] = new_cost
                    parents[nxt] = current
                    heapq.heappush(
                        queue, (new_cost + heuristic(nxt, goal), next(counter), nxt)
                    )

        logger.debug("%s: path not found from %s to %s", label, start, goal)
        return []

    def find_path(
        self,
        start: GeographicPoint,
        goal: GeographicPoint,
        algorithm: str = "astar",
    ) -> PathResult:
        """
        Find a route and summarize it segment by segment.

        Args:
            start: Starting intersection
            goal: Ending intersection
            algorithm: One of "bfs", "dijkstra", "astar"

        Returns:
            PathResult with path, length, segments, and success flag

        Raises:
            ValueError: If the algorithm name is unknown
        """
        searches = {"bfs": self.bfs, "dijkstra": self.dijkstra, "astar": self.a_star}
        if algorithm not in searches:
            raise ValueError(
                f"Unknown algorithm {algorithm!r}, expected one of {', '.join(ALGORITHMS)}"
            )

        explored = []
        path = searches[algorithm](start, goal, explored.append)
        if not path:
            return PathResult(
                path=[], found=False, algorithm=algorithm, nodes_explored=len(explored)
            )

        segments = []
        for a, b in zip(path, path[1:]):
            edge = self.graph.get_edge(a, b)
            segments.append(SegmentInfo(
                start=a,
                end=b,
                name=edge.name,
                road_type=edge.road_type,
                length_km=edge.length,
            ))

        return PathResult(
            path=path,
            found=True,
            algorithm=algorithm,
            total_length=sum(s.length_km for s in segments),
            num_segments=len(segments),
            nodes_explored=len(explored),
            segments=segments,
        )

    def path_length(self, path: list[GeographicPoint]) -> float:
        """
        Total length of a sequence of points, following the shortest
        segment between each consecutive pair.

        Raises:
            ValueError: If two consecutive points are not connected
        """
        total = 0.0
        for a, b in zip(path, path[1:]):
            edge = self.graph.get_edge(a, b)
            if edge is None:
                raise ValueError(f"No road from {a} to {b}")
            total += edge.length
        return total


def format_length(km: float) -> str:
    """Format a length in kilometers to a human readable string."""
    if km < 1:
        return f"{round(km * 1000)} m"
    return f"{km:.1f} km"
