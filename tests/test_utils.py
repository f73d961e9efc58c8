"""
Tests for HopGlobe utility functions.
"""

import logging
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hopglobe.config import Config
from hopglobe.utils import (
    clamp_latitude,
    haversine_distance,
    normalize_longitude,
    setup_logging,
    validate_coordinates,
)


class TestHaversineDistance:
    """Tests for haversine_distance function."""

    def test_same_point(self):
        """Distance between same point should be zero."""
        assert haversine_distance(37.7749, -122.4194, 37.7749, -122.4194) == 0

    def test_known_distance(self):
        """San Francisco to Tokyo is roughly 8270 km."""
        distance = haversine_distance(37.7749, -122.4194, 35.6762, 139.6503)
        assert 8200 < distance < 8350

    def test_symmetry(self):
        a = haversine_distance(51.5, -0.1, -33.9, 151.2)
        b = haversine_distance(-33.9, 151.2, 51.5, -0.1)
        assert a == pytest.approx(b)

    def test_half_circumference(self):
        distance = haversine_distance(0, 0, 0, 180)
        assert distance == pytest.approx(20015.1, rel=1e-3)


class TestCoordinateHelpers:
    """Tests for coordinate normalization and validation."""

    @pytest.mark.parametrize(
        "lng,expected",
        [(0, 0.0), (180, 180.0), (-180, -180.0), (190, -170.0), (-190, 170.0), (540, -180.0)],
    )
    def test_normalize_longitude(self, lng, expected):
        assert normalize_longitude(lng) == pytest.approx(expected)

    @pytest.mark.parametrize("lat,expected", [(45, 45.0), (95, 90.0), (-120, -90.0)])
    def test_clamp_latitude(self, lat, expected):
        assert clamp_latitude(lat) == expected

    def test_validate_coordinates(self):
        assert validate_coordinates(35.6762, 139.6503)
        assert validate_coordinates(-90, 180)
        assert not validate_coordinates(100, 0)
        assert not validate_coordinates(0, 200)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_level_from_config(self):
        config = Config()
        config.set("logging.level", "debug")
        setup_logging(config)
        assert logging.getLogger().level == logging.DEBUG

    def test_defaults(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
