"""
Great Circle Interpolation
Positions along a great-circle arc and a chase camera that trails the packet.
"""

from math import acos, atan2, cos, degrees, radians, sin, sqrt
from typing import List

from hopglobe.config import Settings
from hopglobe.models import CameraPose, GeoPoint
from hopglobe.utils import clamp_latitude, normalize_longitude


def angular_distance(start: GeoPoint, end: GeoPoint) -> float:
    """
    Central angle between two points via the spherical law of cosines.

    Args:
        start: First point
        end: Second point

    Returns:
        Angle in radians (0 to pi)
    """
    lat1, lng1, lat2, lng2 = map(radians, [start.lat, start.lng, end.lat, end.lng])

    cos_d = sin(lat1) * sin(lat2) + cos(lat1) * cos(lat2) * cos(lng2 - lng1)
    # Rounding can push the cosine just outside [-1, 1]
    return acos(max(-1.0, min(1.0, cos_d)))


def interpolate(start: GeoPoint, end: GeoPoint, t: float) -> GeoPoint:
    """
    Spherical linear interpolation between two points.

    Both endpoints are projected onto the unit sphere, blended with the slerp
    coefficients and projected back to latitude/longitude.

    Args:
        start: Arc start
        end: Arc end
        t: Fraction of the arc travelled (0 = start, 1 = end)

    Returns:
        Point on the great circle through start and end

    Example:
        >>> p = interpolate(GeoPoint(0, 0), GeoPoint(0, 90), 0.5)
        >>> round(p.lng, 6)
        45.0
    """
    d = angular_distance(start, end)

    # Near-duplicate points: sin(d) is ~0 and the coefficients blow up
    if d < Settings.MIN_ARC_RADIANS:
        return start

    lat1, lng1, lat2, lng2 = map(radians, [start.lat, start.lng, end.lat, end.lng])

    sin_d = sin(d)
    a = sin((1 - t) * d) / sin_d
    b = sin(t * d) / sin_d

    x = a * cos(lat1) * cos(lng1) + b * cos(lat2) * cos(lng2)
    y = a * cos(lat1) * sin(lng1) + b * cos(lat2) * sin(lng2)
    z = a * sin(lat1) + b * sin(lat2)

    lat = atan2(z, sqrt(x * x + y * y))
    lng = atan2(y, x)

    return GeoPoint(lat=degrees(lat), lng=degrees(lng))


def sample_arc(start: GeoPoint, end: GeoPoint, samples: int = Settings.ARC_SAMPLES) -> List[GeoPoint]:
    """
    Evenly spaced points along an arc, both endpoints included.

    Args:
        start: Arc start
        end: Arc end
        samples: Number of intervals (at least 1)

    Returns:
        List of ``samples + 1`` points
    """
    samples = max(1, samples)
    points = [interpolate(start, end, i / samples) for i in range(samples)]
    points.append(end)
    return points


def camera_behind(
    packet: GeoPoint, heading: GeoPoint, altitude: float = Settings.CAMERA_ALTITUDE
) -> CameraPose:
    """
    Place a chase camera behind the packet, looking toward ``heading``.

    The offset is taken in plain lat/lng space rather than along a geodesic.
    It only drives a cinematic camera, so the planar approximation is enough.

    Args:
        packet: Current packet position
        heading: Point the packet is flying toward
        altitude: Camera altitude in globe radii

    Returns:
        Camera pose trailing the packet by ``CAMERA_TRAIL_DEGREES``
    """
    dlat = heading.lat - packet.lat
    dlng = heading.lng - packet.lng
    norm = sqrt(dlat * dlat + dlng * dlng)

    # Destination reached or zero-length segment: no direction to trail
    if norm < Settings.MIN_HEADING_NORM:
        return CameraPose(lat=packet.lat, lng=packet.lng, altitude=altitude)

    trail = Settings.CAMERA_TRAIL_DEGREES
    return CameraPose(
        lat=clamp_latitude(packet.lat - dlat / norm * trail),
        lng=normalize_longitude(packet.lng - dlng / norm * trail),
        altitude=altitude,
    )

