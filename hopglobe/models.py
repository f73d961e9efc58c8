"""
HopGlobe Data Model

Immutable value types shared by the flight animation, the heatmap and the
submarine cable matcher. Records arriving from the probing backend use
camelCase keys; ``from_dict`` constructors accept that wire shape.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from hopglobe.utils import validate_coordinates


@dataclass(frozen=True, eq=False)
class GeoPoint:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeoPoint):
            return NotImplemented
        return self.lat == other.lat and self.lng == other.lng

    def __hash__(self) -> int:
        return hash((self.lat, self.lng))

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True, eq=False)
class GeoLocation(GeoPoint):
    """
    A geolocated point with optional descriptive fields.

    Descriptive fields do not take part in equality, so a location compares
    equal to the bare ``GeoPoint`` at the same coordinates.
    """

    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["GeoLocation"]:
        """
        Build a location from a backend record.

        Accepts either ``latitude``/``longitude`` or ``lat``/``lng`` keys.
        Returns None for missing, non-numeric or out-of-range coordinates.
        """
        if not data:
            return None

        try:
            lat = float(data.get("latitude", data.get("lat")))
            lng = float(data.get("longitude", data.get("lng")))
        except (TypeError, ValueError):
            return None

        if not validate_coordinates(lat, lng):
            return None

        return cls(
            lat=lat,
            lng=lng,
            city=data.get("city") or None,
            region=data.get("region") or None,
            country=data.get("country") or None,
            country_code=data.get("countryCode") or None,
        )

    @property
    def label(self) -> Optional[str]:
        """Human readable place name, if any."""
        parts = [p for p in (self.city, self.country) if p]
        return ", ".join(parts) if parts else None


@dataclass(frozen=True)
class DataCenter:
    """Cloud provider detected for a hop; color is the provider brand color."""

    provider: str
    color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["DataCenter"]:
        if not isinstance(data, dict) or not data.get("provider"):
            return None
        return cls(provider=str(data["provider"]), color=data.get("color") or None)


@dataclass(frozen=True)
class Hop:
    """A router discovered by the probing backend."""

    hop_number: int
    ip_address: str
    location: Optional[GeoLocation] = None
    avg_rtt: float = 0.0
    is_timeout: bool = False
    is_destination: bool = False
    hostname: Optional[str] = None
    rtt: Tuple[float, ...] = ()
    timestamp: int = 0
    data_center: Optional[DataCenter] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Hop":
        """Build a hop from a camelCase backend record."""
        return cls(
            hop_number=int(data.get("hopNumber", 0)),
            ip_address=data.get("ipAddress") or "*",
            location=GeoLocation.from_dict(data.get("location")),
            avg_rtt=float(data.get("avgRtt") or 0.0),
            is_timeout=bool(data.get("isTimeout", False)),
            is_destination=bool(data.get("isDestination", False)),
            hostname=data.get("hostname") or None,
            rtt=tuple(float(r) for r in data.get("rtt") or ()),
            timestamp=int(data.get("timestamp") or 0),
            data_center=DataCenter.from_dict(data.get("dataCenter")),
        )


@dataclass(frozen=True)
class FlightSegment:
    """
    One great-circle leg of the packet flight.

    ``hop_index`` is the index in the original (unfiltered) hop list of the
    hop this segment arrives at.
    """

    start: GeoPoint
    end: GeoPoint
    hop_index: int


@dataclass(frozen=True)
class CameraPose:
    """Camera placement above the globe; altitude is in globe radii."""

    lat: float
    lng: float
    altitude: float

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng, "altitude": self.altitude}


@dataclass(frozen=True)
class FlightState:
    """
    Snapshot of the single active packet flight.

    The defaults are the idle state. Snapshots are immutable; the animation
    publishes a new one on every change.
    """

    is_flying: bool = False
    current_segment: int = 0
    segment_progress: float = 0.0
    speed: float = 1.0
    is_paused: bool = False
    is_complete: bool = False
    packet_position: Optional[GeoPoint] = None
    camera_position: Optional[CameraPose] = None
    current_hop_index: Optional[int] = None

    def evolve(self, **changes: Any) -> "FlightState":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isFlying": self.is_flying,
            "currentSegment": self.current_segment,
            "segmentProgress": self.segment_progress,
            "speed": self.speed,
            "isPaused": self.is_paused,
            "isComplete": self.is_complete,
            "packetPosition": (
                self.packet_position.to_dict() if self.packet_position else None
            ),
            "cameraPosition": (
                self.camera_position.to_dict() if self.camera_position else None
            ),
            "currentHopIndex": self.current_hop_index,
        }


@dataclass(frozen=True)
class HeatmapPoint:
    """A latency heatmap grid cell; weight 0 is fastest, 1 is slowest."""

    lat: float
    lng: float
    weight: float


@dataclass(frozen=True)
class SubmarineCable:
    """One polyline of a submarine cable system."""

    id: str
    name: str
    color: str
    coordinates: Tuple[GeoPoint, ...]
    is_highlighted: bool = False

    @classmethod
    def from_points(
        cls, cable_id: str, name: str, color: str, points: Sequence[GeoPoint]
    ) -> "SubmarineCable":
        return cls(id=cable_id, name=name, color=color, coordinates=tuple(points))

    def with_highlight(self, highlighted: bool) -> "SubmarineCable":
        """Return an annotated copy; the original is left untouched."""
        return replace(self, is_highlighted=highlighted)
