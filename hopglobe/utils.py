"""
HopGlobe Utility Functions
Common utility functions for distance calculations and logging setup.
"""

import logging
from math import radians, sin, cos, sqrt, atan2
from typing import Optional

from .config import Config, Constants


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great circle distance between two points using Haversine formula.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers

    Example:
        >>> round(haversine_distance(37.7749, -122.4194, 35.6762, 139.6503))
        8270
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return Constants.EARTH_RADIUS_KM * c


def normalize_longitude(lng: float) -> float:
    """
    Wrap a longitude into the [-180, 180] range.

    Example:
        >>> normalize_longitude(190)
        -170.0
    """
    if -180 <= lng <= 180:
        return float(lng)
    return ((lng + 180) % 360) - 180


def clamp_latitude(lat: float) -> float:
    """Clamp a latitude into the [-90, 90] range."""
    return max(-90.0, min(90.0, float(lat)))


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate latitude and longitude coordinates.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if coordinates are valid

    Example:
        >>> validate_coordinates(35.6762, 139.6503)
        True
        >>> validate_coordinates(100, 200)
        False
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180


def setup_logging(config: Optional[Config] = None) -> None:
    """
    Configure the root logger from the ``logging`` section of a config.

    Args:
        config: HopGlobe configuration (defaults are used when None)
    """
    config = config or Config()
    level = getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=level, format=config.log_format, force=True)
