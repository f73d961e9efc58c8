"""
Presentation Helpers
Colors, labels and globe primitives derived from the hop list.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from hopglobe.config import Colors, Settings
from hopglobe.models import CameraPose, GeoLocation, GeoPoint, Hop


@dataclass(frozen=True)
class GlobeArc:
    """A colored route arc between two consecutive located points."""

    start: GeoPoint
    end: GeoPoint
    color: str
    hop_index: int


@dataclass(frozen=True)
class GlobePoint:
    """A labelled marker on the globe; hop_number 0 is the origin."""

    lat: float
    lng: float
    size: float
    color: str
    label: str
    hop_number: int
    provider: Optional[str] = None
    provider_color: Optional[str] = None


def latency_color(avg_rtt: float) -> str:
    """
    Get color for a round-trip time.

    Args:
        avg_rtt: Average RTT in milliseconds

    Returns:
        Color hex code (green for fast through red for very slow)
    """
    for upper_bound, color in Colors.LATENCY_BUCKETS:
        if avg_rtt < upper_bound:
            return color
    return Colors.LATENCY_SLOW


def datacenter_color(provider: str) -> str:
    """Brand color for a cloud provider, gray when the provider is unknown."""
    return Colors.DATACENTER_COLORS.get(provider, Colors.DATACENTER_DEFAULT_COLOR)


def datacenter_short_name(provider: str) -> str:
    """
    Compact provider name for tight spaces.

    Example:
        >>> datacenter_short_name("Google Cloud")
        'GCP'
    """
    return Colors.DATACENTER_SHORT_NAMES.get(provider, provider)


def heatmap_color(weight: float) -> str:
    """
    Blend from green (weight 0) to red (weight 1).

    Returns:
        CSS ``rgba`` string
    """
    weight = max(0.0, min(1.0, weight))
    r = round(34 + weight * 205)
    g = round(197 - weight * 129)
    b = round(94 - weight * 26)
    return f"rgba({r}, {g}, {b}, 0.7)"


def format_rtt(rtt: float) -> str:
    """
    Format an RTT for display.

    Example:
        >>> format_rtt(12.345)
        '12.3 ms'
    """
    if rtt < 1:
        return "<1 ms"
    return f"{rtt:.1f} ms"


def generate_arcs(hops: Sequence[Hop], origin: Optional[GeoPoint]) -> List[GlobeArc]:
    """
    Route arcs through every located hop, colored by the arriving hop's RTT.

    Args:
        hops: Hop list
        origin: Trace origin; adds an arc to the first located hop

    Returns:
        Ordered list of arcs
    """
    located = [(index, hop) for index, hop in enumerate(hops) if hop.location is not None]
    if not located:
        return []

    arcs = []
    first_index, first_hop = located[0]
    if origin is not None:
        arcs.append(
            GlobeArc(origin, first_hop.location, latency_color(first_hop.avg_rtt), first_index)
        )

    for (_, previous), (index, current) in zip(located, located[1:]):
        arcs.append(
            GlobeArc(previous.location, current.location, latency_color(current.avg_rtt), index)
        )

    return arcs


def generate_points(
    hops: Sequence[Hop],
    origin: Optional[GeoLocation],
    selected_index: Optional[int] = None,
) -> List[GlobePoint]:
    """
    Markers for the origin and every located hop.

    The selected hop is drawn largest, the destination in its own color.
    Hops inside a cloud datacenter carry the short provider name and its
    brand color.
    """
    points = []

    if origin is not None:
        points.append(
            GlobePoint(
                lat=origin.lat,
                lng=origin.lng,
                size=0.8,
                color=Colors.SOURCE_COLOR,
                label=getattr(origin, "city", None) or "Source",
                hop_number=0,
            )
        )

    for index, hop in enumerate(hops):
        if hop.location is None:
            continue

        provider = provider_color = None
        if hop.data_center is not None:
            provider = datacenter_short_name(hop.data_center.provider)
            provider_color = hop.data_center.color or datacenter_color(hop.data_center.provider)

        if index == selected_index:
            size = 1.2
        elif hop.is_destination:
            size = 1.0
        else:
            size = 0.6

        points.append(
            GlobePoint(
                lat=hop.location.lat,
                lng=hop.location.lng,
                size=size,
                color=Colors.DESTINATION_COLOR if hop.is_destination else latency_color(hop.avg_rtt),
                label=getattr(hop.location, "city", None) or hop.ip_address,
                hop_number=hop.hop_number,
                provider=provider,
                provider_color=provider_color,
            )
        )

    return points


def overview_camera(hops: Sequence[Hop], origin: Optional[GeoPoint]) -> CameraPose:
    """
    Camera for the non-flight view: follows the newest hop as it arrives.

    Falls back to the origin before any hop is known, and to a default
    Pacific view when neither gives a position.
    """
    altitude = Settings.OVERVIEW_CAMERA_ALTITUDE

    if not hops and origin is not None:
        return CameraPose(origin.lat, origin.lng, altitude)

    if hops and hops[-1].location is not None:
        last = hops[-1].location
        return CameraPose(last.lat, last.lng, altitude)

    return CameraPose(Settings.OVERVIEW_DEFAULT_LAT, Settings.OVERVIEW_DEFAULT_LNG, altitude)
