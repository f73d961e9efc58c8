"""
Submarine Cable Matching
Guesses which submarine cables plausibly carry a route's traffic.

The heuristic:
1. Classify both route endpoints into a continent
2. Stop when either is unknown or both share a continent (no ocean crossing)
3. For every ocean connecting the two continents, keep cables that enter the
   ocean box and touch both continents
4. Merge the matches across oceans, first occurrence wins

This answers "could carry this route", not "is provably used".
"""

import logging
from typing import Dict, List, Optional, Sequence

from hopglobe.models import GeoPoint, SubmarineCable

from .regions import CONTINENTS, OCEANS, OceanCrossing, Region

logger = logging.getLogger(__name__)


class SubmarineCableRegionMatcher:
    """
    Matches cables to routes using declarative continent and ocean tables.

    Example:
        >>> matcher = SubmarineCableRegionMatcher()
        >>> matcher.classify_region(GeoPoint(35.7, 139.7))
        'asia'
    """

    def __init__(
        self,
        continents: Sequence[Region] = CONTINENTS,
        oceans: Sequence[OceanCrossing] = OCEANS,
    ) -> None:
        """
        Initialize matcher.

        Args:
            continents: Continent boxes in priority order
            oceans: Ocean boxes with their connected continents
        """
        self.continents = tuple(continents)
        self.oceans = tuple(oceans)

    def classify_region(self, point: GeoPoint) -> Optional[str]:
        """
        Name of the first continent box containing the point.

        Returns:
            Continent name, or None outside every box
        """
        for region in self.continents:
            if region.box.contains(point):
                return region.name
        return None

    def find_cables_between(
        self, start: GeoPoint, end: GeoPoint, cables: Sequence[SubmarineCable]
    ) -> List[SubmarineCable]:
        """
        Find cables that could carry traffic between two points.

        Args:
            start: Route start
            end: Route end
            cables: Candidate cables

        Returns:
            Matching cables without duplicate ids, in discovery order
        """
        start_region = self.classify_region(start)
        end_region = self.classify_region(end)

        if start_region is None or end_region is None or start_region == end_region:
            return []

        matches: Dict[str, SubmarineCable] = {}
        for ocean in self.oceans:
            if start_region not in ocean.connects or end_region not in ocean.connects:
                continue

            for cable in cables:
                if cable.id in matches:
                    continue
                if self._crosses(cable, ocean, start_region, end_region):
                    matches[cable.id] = cable

        logger.debug(
            "%s -> %s: %d candidate cables", start_region, end_region, len(matches)
        )
        return list(matches.values())

    def highlight(
        self, cables: Sequence[SubmarineCable], route_points: Sequence[GeoPoint]
    ) -> List[SubmarineCable]:
        """
        Annotate cables with whether they plausibly carry the route.

        The first and last route points are taken as the route endpoints.
        Input cables are never modified; annotated copies are returned.

        Args:
            cables: All cables
            route_points: Ordered route coordinates

        Returns:
            Copies of every cable with ``is_highlighted`` set
        """
        if len(route_points) < 2:
            return [cable.with_highlight(False) for cable in cables]

        matched_ids = {
            cable.id
            for cable in self.find_cables_between(route_points[0], route_points[-1], cables)
        }

        return [cable.with_highlight(cable.id in matched_ids) for cable in cables]

    def _crosses(
        self,
        cable: SubmarineCable,
        ocean: OceanCrossing,
        start_region: str,
        end_region: str,
    ) -> bool:
        if not any(ocean.box.contains(point) for point in cable.coordinates):
            return False

        touched = {self.classify_region(point) for point in cable.coordinates}
        return start_region in touched and end_region in touched
