"""
Cable GeoJSON Parsing
Converts the TeleGeography cable FeatureCollection into SubmarineCable records.
"""

import logging
from typing import Any, List, Optional

from hopglobe.config import Colors
from hopglobe.models import GeoPoint, SubmarineCable
from hopglobe.utils import validate_coordinates

logger = logging.getLogger(__name__)


def parse_cable_geojson(data: Any) -> List[SubmarineCable]:
    """
    Parse a cable FeatureCollection.

    Every line of a ``MultiLineString`` becomes its own cable with id
    ``"<feature id>-<line index>"`` so each can be drawn as one polyline.
    Features without a name, without geometry or with an unsupported
    geometry type are skipped, as are lines with fewer than two points or
    with a position outside the valid latitude/longitude range.

    Args:
        data: Decoded GeoJSON document

    Returns:
        List of cables (empty for anything that is not a FeatureCollection)

    GeoJSON coordinates are ``[lng, lat]`` pairs.
    """
    if not isinstance(data, dict) or not isinstance(data.get("features"), list):
        logger.warning("Cable data is not a FeatureCollection")
        return []

    cables: List[SubmarineCable] = []
    skipped = 0

    for feature in data["features"]:
        parsed = _parse_feature(feature)
        if parsed is None:
            skipped += 1
            continue
        cables.extend(parsed)

    if skipped:
        logger.debug("Skipped %d malformed cable features", skipped)

    return cables


def _parse_feature(feature: Any) -> Optional[List[SubmarineCable]]:
    if not isinstance(feature, dict):
        return None

    properties = feature.get("properties") or {}
    geometry = feature.get("geometry")

    if not isinstance(properties, dict) or not isinstance(geometry, dict):
        return None

    name = properties.get("name")
    if not name:
        return None

    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates") or []

    if geometry_type == "LineString":
        lines = [coordinates]
    elif geometry_type == "MultiLineString":
        lines = coordinates
    else:
        return None

    if not isinstance(lines, list):
        return None

    base_id = properties.get("id") or name
    color = properties.get("color") or Colors.DEFAULT_CABLE_COLOR

    cables = []
    for index, line in enumerate(lines):
        points = _parse_line(line)
        if points is None or len(points) < 2:
            continue
        cables.append(
            SubmarineCable.from_points(f"{base_id}-{index}", name, color, points)
        )
    return cables


def _parse_line(line: Any) -> Optional[List[GeoPoint]]:
    if not isinstance(line, list):
        return None

    points = []
    for position in line:
        try:
            lng, lat = float(position[0]), float(position[1])
        except (TypeError, ValueError, IndexError, KeyError):
            return None
        if not validate_coordinates(lat, lng):
            return None
        points.append(GeoPoint(lat=lat, lng=lng))
    return points

