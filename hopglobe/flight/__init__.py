"""
HopGlobe Flight Component

Packet flight animation along the great-circle path through discovered hops.

Main Classes:
    - FlightAnimation: Time-stepped flight state machine
    - ManualFrameScheduler: Synthetic-clock frame pump
    - RealtimeFrameScheduler: Paced single-threaded frame loop

Example:
    >>> from hopglobe.flight import FlightAnimation, ManualFrameScheduler
    >>> scheduler = ManualFrameScheduler()
    >>> animation = FlightAnimation(scheduler, hops, origin)
    >>> animation.start()
    >>> scheduler.advance(16)
"""

from .animation import FlightAnimation, record_flight
from .interpolation import angular_distance, camera_behind, interpolate, sample_arc
from .path_builder import build_flight_path
from .scheduler import FrameScheduler, ManualFrameScheduler, RealtimeFrameScheduler

__all__ = [
    # Main classes
    "FlightAnimation",
    "FrameScheduler",
    "ManualFrameScheduler",
    "RealtimeFrameScheduler",
    # Functions
    "record_flight",
    "build_flight_path",
    "interpolate",
    "camera_behind",
    "angular_distance",
    "sample_arc",
]
