# tests/test_geo.py
"""Unit tests for the haversine distance helper."""

import math
import pytest
from spotfinder.utils.geo import distance_km, EARTH_RADIUS_KM


class TestDistance:
    def test_same_point_is_zero(self):
        assert distance_km(42.0, -93.6, 42.0, -93.6) == 0.0

    def test_tenth_of_a_degree_latitude(self):
        # 0.1° along a meridian = R * 0.1° in radians ≈ 11.12 km
        expected = EARTH_RADIUS_KM * math.radians(0.1)
        assert distance_km(42.0, -93.6, 42.1, -93.6) == pytest.approx(expected, rel=1e-9)

    def test_symmetric(self):
        a = distance_km(40.7128, -74.0060, 51.5074, -0.1278)
        b = distance_km(51.5074, -0.1278, 40.7128, -74.0060)
        assert a == pytest.approx(b)
        assert a == pytest.approx(5570, rel=0.01)   # New York → London

    def test_antipodal_points(self):
        half_circumference = math.pi * EARTH_RADIUS_KM
        assert distance_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(half_circumference)
        assert distance_km(90.0, 0.0, -90.0, 0.0) == pytest.approx(half_circumference)
        assert not math.isnan(distance_km(45.0, 10.0, -45.0, -170.0))

    def test_longitude_wraparound(self):
        assert distance_km(0.0, 179.9, 0.0, -179.9) == pytest.approx(EARTH_RADIUS_KM * math.radians(0.2))
