"""Immutable geographic coordinate used as a graph node key."""

from dataclasses import dataclass

from .distance import haversine


@dataclass(frozen=True, order=True)
class GeographicPoint:
    """
    A road intersection identified by its coordinates.

    Equality, hashing and ordering all follow the (lat, lon) value, so two
    points built from the same numbers are the same node.
    """

    lat: float
    lon: float

    def distance(self, other: "GeographicPoint") -> float:
        """Straight-line (great-circle) distance to another point, in km."""
        return haversine(self.lat, self.lon, other.lat, other.lon)

    @classmethod
    def parse(cls, text: str) -> "GeographicPoint":
        """
        Build a point from a "lat,lon" string.

        Raises:
            ValueError: If the text is not two comma-separated numbers
        """
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"Expected 'lat,lon', got {text!r}")
        return cls(float(parts[0].strip()), float(parts[1].strip()))

    def __str__(self) -> str:
        return f"Lat: {self.lat}, Lon: {self.lon}"
