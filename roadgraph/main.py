"""
Road Route Finder - Main entry point.

Usage:
    python -m roadgraph.main --start 1,1 --goal 8,-1
    python -m roadgraph.main --map roads.csv --start 1,1 --goal 8,-1 --algorithm all
    python -m roadgraph.main --help
"""

import argparse
import logging
import sys
from pathlib import Path

from roadgraph.geo import GeographicPoint, NearestNodeFinder
from roadgraph.pathfinding import MapGraph, PathFinder, PathResult
from roadgraph.pathfinding.search import ALGORITHMS, format_length

# Default data paths
DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_MAP_FILE = DATA_DIR / "simpletest.csv"

DEFAULT_ALGORITHM = "astar"

logger = logging.getLogger(__name__)


def resolve_point(
    point: GeographicPoint, graph: MapGraph, finder: NearestNodeFinder | None
) -> GeographicPoint:
    """Return point itself if it is a node, else the nearest node when snapping."""
    if point in graph or finder is None:
        return point
    nearest = finder.find_nearest(point.lat, point.lon)
    if nearest is None:
        return point
    logger.info(
        "Snapped %s to %s (%s away)",
        point,
        nearest.point,
        format_length(nearest.distance_km),
    )
    return nearest.point


def format_result(result: PathResult) -> str:
    """Format a search result for terminal output."""
    if not result.found:
        return f"[{result.algorithm}] Path not found ({result.nodes_explored} nodes explored)"

    lines = [
        f"[{result.algorithm}] {result.num_segments} segments, "
        f"{format_length(result.total_length)}, "
        f"{result.nodes_explored} nodes explored"
    ]
    lines.append("  " + " -> ".join(f"({p.lat}, {p.lon})" for p in result.path))
    for seg in result.segments:
        lines.append(
            f"    {seg.name} ({seg.road_type}): {format_length(seg.length_km)}"
        )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Road Route Finder - Shortest paths over a road network"
    )
    parser.add_argument(
        "--map",
        type=Path,
        default=DEFAULT_MAP_FILE,
        help="Path to road map CSV",
    )
    parser.add_argument(
        "--start",
        type=GeographicPoint.parse,
        help="Start point as 'lat,lon'",
    )
    parser.add_argument(
        "--goal",
        type=GeographicPoint.parse,
        help="Goal point as 'lat,lon'",
    )
    parser.add_argument(
        "--algorithm",
        choices=[*ALGORITHMS, "all"],
        default=DEFAULT_ALGORITHM,
        help=f"Search algorithm (default: {DEFAULT_ALGORITHM})",
    )
    parser.add_argument(
        "--snap",
        action="store_true",
        help="Snap start/goal to the nearest intersection",
    )
    parser.add_argument(
        "--show-graph",
        action="store_true",
        help="Print the loaded graph",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.map.exists():
        print(f"Error: Map file not found: {args.map}", file=sys.stderr)
        return 1

    graph = MapGraph()
    graph.load_road_map(args.map)

    if args.show_graph:
        print(graph)

    if args.start is None or args.goal is None:
        if not args.show_graph:
            print("Error: --start and --goal are required", file=sys.stderr)
            return 1
        return 0

    finder = NearestNodeFinder(graph.nodes()) if args.snap else None
    start = resolve_point(args.start, graph, finder)
    goal = resolve_point(args.goal, graph, finder)

    pathfinder = PathFinder(graph)
    algorithms = ALGORITHMS if args.algorithm == "all" else (args.algorithm,)
    for algorithm in algorithms:
        print(format_result(pathfinder.find_path(start, goal, algorithm)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
