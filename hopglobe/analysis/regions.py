"""
Region Tables

Coarse continent and ocean-crossing bounding boxes used to guess which
submarine cables a route could ride. The boxes overlap; lookups take the
first match in declaration order.
"""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from hopglobe.models import GeoPoint


@dataclass(frozen=True)
class BoundingBox:
    """
    Latitude/longitude box in degrees.

    A box whose ``min_lng`` is greater than its ``max_lng`` wraps across the
    antimeridian.
    """

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @property
    def wraps_antimeridian(self) -> bool:
        return self.min_lng > self.max_lng

    def contains(self, point: GeoPoint) -> bool:
        if not self.min_lat <= point.lat <= self.max_lat:
            return False
        if self.wraps_antimeridian:
            return point.lng >= self.min_lng or point.lng <= self.max_lng
        return self.min_lng <= point.lng <= self.max_lng


@dataclass(frozen=True)
class Region:
    """A named continent box."""

    name: str
    box: BoundingBox


@dataclass(frozen=True)
class OceanCrossing:
    """An ocean box and the continents it connects."""

    name: str
    box: BoundingBox
    connects: FrozenSet[str]


# Order matters: classification is first-match-wins
CONTINENTS: Tuple[Region, ...] = (
    Region("americas", BoundingBox(min_lat=-60, max_lat=85, min_lng=-170, max_lng=-30)),
    Region("europe", BoundingBox(min_lat=35, max_lat=75, min_lng=-10, max_lng=40)),
    Region("asia", BoundingBox(min_lat=0, max_lat=80, min_lng=60, max_lng=180)),
    Region("africa", BoundingBox(min_lat=-40, max_lat=40, min_lng=-20, max_lng=55)),
    Region("oceania", BoundingBox(min_lat=-50, max_lat=0, min_lng=100, max_lng=180)),
)

OCEANS: Tuple[OceanCrossing, ...] = (
    OceanCrossing(
        "atlantic",
        BoundingBox(min_lat=-60, max_lat=80, min_lng=-80, max_lng=0),
        frozenset({"americas", "europe", "africa"}),
    ),
    OceanCrossing(
        "pacific",
        # Straddles the dateline
        BoundingBox(min_lat=-60, max_lat=70, min_lng=100, max_lng=-100),
        frozenset({"americas", "asia", "oceania"}),
    ),
    OceanCrossing(
        "indian",
        BoundingBox(min_lat=-60, max_lat=30, min_lng=30, max_lng=120),
        frozenset({"africa", "asia", "oceania"}),
    ),
)
