"""Tests for geo module."""

import pytest

from roadgraph.geo.distance import haversine
from roadgraph.geo.nearest_node import NearestNodeFinder
from roadgraph.geo.point import GeographicPoint


class TestHaversine:
    """Tests for Haversine distance calculation."""

    def test_same_point(self):
        distance = haversine(32.8674, -117.2190, 32.8674, -117.2190)
        assert distance == pytest.approx(0.0, abs=0.001)

    def test_one_degree_latitude(self):
        # One degree along a meridian is about 111.2 km
        distance = haversine(0, 0, 1, 0)
        assert distance == pytest.approx(111.19, abs=0.05)

    def test_san_diego_los_angeles(self):
        # San Diego: 32.7157, -117.1611
        # Los Angeles: 34.0522, -118.2437
        distance = haversine(32.7157, -117.1611, 34.0522, -118.2437)
        # Should be around 175-185 km
        assert 170 < distance < 190

    def test_symmetric(self):
        assert haversine(1, 2, 3, 4) == pytest.approx(haversine(3, 4, 1, 2))

    def test_antipodal(self):
        distance = haversine(0, 0, 0, 180)
        assert distance == pytest.approx(20015.1, abs=0.5)


class TestGeographicPoint:
    """Tests for GeographicPoint."""

    def test_value_equality(self):
        assert GeographicPoint(1.0, 2.0) == GeographicPoint(1.0, 2.0)
        assert GeographicPoint(1.0, 2.0) != GeographicPoint(2.0, 1.0)

    def test_usable_as_key(self):
        seen = {GeographicPoint(1.0, 2.0): "a"}
        assert seen[GeographicPoint(1.0, 2.0)] == "a"
        assert len({GeographicPoint(0, 0), GeographicPoint(0.0, 0.0)}) == 1

    def test_ordering(self):
        points = [GeographicPoint(2, 0), GeographicPoint(1, 5), GeographicPoint(1, 3)]
        assert sorted(points) == [
            GeographicPoint(1, 3),
            GeographicPoint(1, 5),
            GeographicPoint(2, 0),
        ]

    def test_immutable(self):
        point = GeographicPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.lat = 3.0

    def test_distance_matches_haversine(self):
        a = GeographicPoint(32.7157, -117.1611)
        b = GeographicPoint(34.0522, -118.2437)
        assert a.distance(b) == pytest.approx(haversine(32.7157, -117.1611, 34.0522, -118.2437))

    def test_str(self):
        assert str(GeographicPoint(1.5, -2.0)) == "Lat: 1.5, Lon: -2.0"

    def test_parse(self):
        assert GeographicPoint.parse("32.86, -117.22") == GeographicPoint(32.86, -117.22)

    @pytest.mark.parametrize("text", ["1.0", "1,2,3", "a,b", ""])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            GeographicPoint.parse(text)


class TestNearestNodeFinder:
    """Tests for KD-Tree nearest node lookup."""

    @pytest.fixture
    def finder(self):
        return NearestNodeFinder([
            GeographicPoint(0, 0),
            GeographicPoint(0, 1),
            GeographicPoint(1, 1),
            GeographicPoint(5, 5),
        ])

    def test_nearest(self, finder):
        result = finder.find_nearest(0.1, 0.9)
        assert result.point == GeographicPoint(0, 1)
        assert result.distance_km == pytest.approx(haversine(0.1, 0.9, 0, 1))

    def test_exact_node(self, finder):
        result = finder.find_nearest(5, 5)
        assert result.point == GeographicPoint(5, 5)
        assert result.distance_km == pytest.approx(0.0, abs=1e-9)

    def test_nearest_k_sorted(self, finder):
        results = finder.find_nearest_k(0, 0, k=3)
        assert [r.point for r in results] == [
            GeographicPoint(0, 0),
            GeographicPoint(0, 1),
            GeographicPoint(1, 1),
        ]
        distances = [r.distance_km for r in results]
        assert distances == sorted(distances)

    def test_k_larger_than_nodes(self, finder):
        assert len(finder.find_nearest_k(0, 0, k=10)) == 4

    def test_high_latitude(self):
        # At 80N five degrees of longitude span less ground than two of latitude
        east = GeographicPoint(80, 5)
        south = GeographicPoint(78, 0)
        assert haversine(80, 0, 80, 5) < haversine(80, 0, 78, 0)

        finder = NearestNodeFinder([east, south])
        assert finder.find_nearest(80, 0).point == east

    def test_across_antimeridian(self):
        finder = NearestNodeFinder([GeographicPoint(0, -179.9), GeographicPoint(0, 179)])
        result = finder.find_nearest(0, 179.9)
        assert result.point == GeographicPoint(0, -179.9)
        assert result.distance_km == pytest.approx(haversine(0, 179.9, 0, -179.9))

    def test_empty(self):
        finder = NearestNodeFinder()
        assert len(finder) == 0
        assert finder.find_nearest(0, 0) is None
        assert finder.find_nearest_k(0, 0, k=2) == []
