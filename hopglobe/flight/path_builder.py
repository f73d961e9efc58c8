"""
Flight Path Builder
Turns the discovered hop list into the ordered legs of the packet flight.
"""

from typing import List, Optional, Sequence

from hopglobe.models import FlightSegment, GeoPoint, Hop


def build_flight_path(
    hops: Sequence[Hop], origin: Optional[GeoPoint]
) -> List[FlightSegment]:
    """
    Build flight segments from an ordered hop list.

    Hops without a location (timeouts, unresolved addresses) are skipped, but
    each segment keeps the index of its destination hop in the original,
    unfiltered list so consumers can look the hop up directly.

    Args:
        hops: Hops in hop-number order
        origin: Trace origin; when present the first segment starts there

    Returns:
        Ordered list of segments (empty when no hop is located)

    Example:
        >>> segments = build_flight_path(hops, origin)
        >>> [s.hop_index for s in segments]
        [0, 2]
    """
    located = [(index, hop) for index, hop in enumerate(hops) if hop.location is not None]

    if not located:
        return []

    segments: List[FlightSegment] = []

    first_index, first_hop = located[0]
    if origin is not None:
        segments.append(
            FlightSegment(start=origin, end=first_hop.location, hop_index=first_index)
        )

    for (_, previous), (index, current) in zip(located, located[1:]):
        segments.append(
            FlightSegment(start=previous.location, end=current.location, hop_index=index)
        )

    return segments
