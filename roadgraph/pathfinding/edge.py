"""Directed road segment between two intersections."""

from dataclasses import dataclass

from roadgraph.geo.point import GeographicPoint


@dataclass(frozen=True)
class MapEdge:
    """A one-way road segment; endpoints are stored by value."""

    start: GeographicPoint
    end: GeographicPoint
    name: str
    road_type: str
    length: float  # km

    def __str__(self) -> str:
        return f"{self.name} from {self.start} to {self.end}"
