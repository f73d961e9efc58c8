"""
Trace Session Context

Holds the state of one traceroute session as reported by the probing backend:
status, origin, discovered hops and the selected hop. The backend talks to
the session through events:

    started    {sessionId, target, source, timestamp}
    hop        {sessionId, hop}
    completed  {sessionId, totalHops, timestamp}
    cancelled  {sessionId, timestamp}
    error      {sessionId, error, timestamp}

Events for another session id are ignored.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from hopglobe.analysis.cable_matcher import SubmarineCableRegionMatcher
from hopglobe.flight.path_builder import build_flight_path
from hopglobe.models import FlightSegment, GeoLocation, GeoPoint, Hop, SubmarineCable

logger = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_RUNNING = "running"
STATUS_COMPLETED = "completed"
STATUS_ERROR = "error"
STATUS_CANCELLED = "cancelled"


class TraceSession:
    """
    Externally owned session context passed into the builder and matcher.

    Hops are appended in arrival order and never mutated or removed.
    """

    def __init__(self) -> None:
        self._clear()

    def _clear(self) -> None:
        self.session_id: str = ""
        self.target: str = ""
        self.status: str = STATUS_IDLE
        self.origin: Optional[GeoLocation] = None
        self.hops: List[Hop] = []
        self.selected_hop_index: Optional[int] = None
        self.total_hops: Optional[int] = None
        self.error: Optional[str] = None
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    # --- Lifecycle ---

    def start(self, session_id: str, target: str, origin: Optional[GeoLocation]) -> bool:
        """
        Begin a new session, dropping the previous one.

        Returns:
            False if a session with the same id is already active
        """
        if session_id and session_id == self.session_id:
            return False

        self._clear()
        self.session_id = session_id
        self.target = target
        self.origin = origin
        self.status = STATUS_RUNNING
        self.start_time = datetime.now()
        logger.info("Trace %s to %s started", session_id, target)
        return True

    def add_hop(self, hop: Hop) -> bool:
        """
        Append a discovered hop and select it.

        Returns:
            False when there is no session or the hop number was already seen
        """
        if not self.session_id:
            return False
        if any(h.hop_number == hop.hop_number for h in self.hops):
            logger.debug("Duplicate hop %d ignored", hop.hop_number)
            return False

        self.hops.append(hop)
        self.selected_hop_index = len(self.hops) - 1
        return True

    def complete(self, total_hops: int) -> None:
        if not self.session_id:
            return
        self.status = STATUS_COMPLETED
        self.total_hops = total_hops
        self.end_time = datetime.now()
        logger.info("Trace %s completed with %d hops", self.session_id, total_hops)

    def cancel(self) -> None:
        if not self.session_id:
            return
        self.status = STATUS_CANCELLED
        self.end_time = datetime.now()

    def fail(self, error: str) -> None:
        if not self.session_id:
            return
        self.status = STATUS_ERROR
        self.error = error
        self.end_time = datetime.now()
        logger.warning("Trace %s failed: %s", self.session_id, error)

    def select_hop(self, index: Optional[int]) -> None:
        self.selected_hop_index = index

    def reset(self) -> None:
        self._clear()

    def apply_event(self, event: Dict[str, Any]) -> bool:
        """
        Apply one backend event of the form ``{"type": ..., "data": {...}}``.

        Returns:
            True if the event changed the session
        """
        event_type = event.get("type")
        data = event.get("data") or {}

        if event_type == "started":
            return self.start(
                str(data.get("sessionId", "")),
                data.get("target", ""),
                GeoLocation.from_dict(data.get("source")),
            )

        if data.get("sessionId") not in (None, self.session_id):
            logger.debug("Event for session %s ignored", data.get("sessionId"))
            return False

        if event_type == "hop":
            return self.add_hop(Hop.from_dict(data.get("hop") or {}))
        if event_type == "completed":
            self.complete(int(data.get("totalHops", len(self.hops))))
        elif event_type == "cancelled":
            self.cancel()
        elif event_type == "error":
            self.fail(data.get("error", "Unknown error"))
        else:
            logger.debug("Unknown event type %r ignored", event_type)
            return False
        return bool(self.session_id)

    # --- Derived data ---

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    def route_points(self) -> List[GeoPoint]:
        """Origin (when known) followed by every located hop."""
        if not self.hops:
            return []

        points: List[GeoPoint] = []
        if self.origin is not None:
            points.append(self.origin)
        points.extend(hop.location for hop in self.hops if hop.location is not None)
        return points

    def flight_segments(self) -> List[FlightSegment]:
        return build_flight_path(self.hops, self.origin)

    def highlighted_cables(
        self,
        cables: Sequence[SubmarineCable],
        matcher: Optional[SubmarineCableRegionMatcher] = None,
    ) -> List[SubmarineCable]:
        """
        Annotate cables for the current route.

        Highlighting only happens once the trace has completed; before that
        every cable is returned un-highlighted.
        """
        if not cables:
            return []

        points = self.route_points()
        if not self.is_completed or len(points) < 2:
            return [cable.with_highlight(False) for cable in cables]

        matcher = matcher or SubmarineCableRegionMatcher()
        return matcher.highlight(cables, points)


def load_trace(path: str) -> TraceSession:
    """
    Load a recorded trace from a JSON file.

    Two layouts are accepted: a list of backend events, or a snapshot object
    ``{"target", "source", "hops", "status"}``.

    Args:
        path: JSON file path

    Returns:
        Populated session

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid JSON or has neither layout
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    session = TraceSession()

    if isinstance(data, list):
        for event in data:
            if isinstance(event, dict):
                session.apply_event(event)
        return session

    if isinstance(data, dict) and isinstance(data.get("hops"), list):
        session.start(
            str(data.get("id") or path),
            data.get("target", ""),
            GeoLocation.from_dict(data.get("source")),
        )
        for record in data["hops"]:
            session.add_hop(Hop.from_dict(record))
        if data.get("status", STATUS_COMPLETED) == STATUS_COMPLETED:
            session.complete(int(data.get("totalHops", len(session.hops))))
        return session

    raise ValueError(f"Unrecognized trace file layout: {path}")
