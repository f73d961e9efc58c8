"""
Packet Flight Animation

Animates a single packet along the flight path built from the hop list:
Idle -> Flying <-> Paused -> Complete, with replay from Complete and exit to
Idle from anywhere.

Timing model:
    - Each segment takes BASE_SEGMENT_DURATION_MS / speed to fly
    - After arriving at a hop the packet dwells for HOP_PAUSE_MS, also
      consumed at ``speed``
    - The chase camera trails the packet at CAMERA_ALTITUDE

The animation owns its ``FlightState``. Consumers read ``state`` snapshots;
every change publishes a new immutable snapshot.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from hopglobe.config import Settings
from hopglobe.models import FlightSegment, FlightState, GeoPoint, Hop

from .interpolation import camera_behind, interpolate
from .path_builder import build_flight_path
from .scheduler import FrameScheduler, ManualFrameScheduler

logger = logging.getLogger(__name__)


class FlightAnimation:
    """
    Time-stepped packet flight driven by an injected frame scheduler.

    Every public method is safe to call in any state; calls that make no
    sense for the current state are no-ops.

    Example:
        >>> scheduler = ManualFrameScheduler()
        >>> animation = FlightAnimation(scheduler, hops, origin)
        >>> animation.start()
        >>> scheduler.advance(16)  # first frame only sets the time baseline
        1
        >>> scheduler.advance(500)
        1
        >>> animation.state.segment_progress
        0.25
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        hops: Sequence[Hop] = (),
        origin: Optional[GeoPoint] = None,
    ):
        """
        Initialize the animation in the idle state.

        Args:
            scheduler: Frame scheduler used for per-frame callbacks
            hops: Initial hop list
            origin: Trace origin
        """
        self.scheduler = scheduler
        self._segments: Tuple[FlightSegment, ...] = ()
        self._state = FlightState()
        self._frame_handle: Optional[int] = None
        self._last_timestamp: Optional[float] = None
        self._hop_pause_ms = 0.0
        self._in_tick = False

        self.update_path(hops, origin)

    # --- Read access ---

    @property
    def state(self) -> FlightState:
        """Current state snapshot."""
        return self._state

    @property
    def segments(self) -> Tuple[FlightSegment, ...]:
        """Cached flight segments."""
        return self._segments

    @property
    def has_pending_frame(self) -> bool:
        return self._frame_handle is not None

    def update_path(self, hops: Sequence[Hop], origin: Optional[GeoPoint]) -> None:
        """
        Rebuild the cached segments after the hop list or origin changed.

        The segment tuple is swapped in whole; a tick already running keeps
        the tuple it started with.
        """
        self._segments = tuple(build_flight_path(hops, origin))
        logger.debug("Flight path rebuilt: %d segments", len(self._segments))

    # --- Controls ---

    def start(self) -> None:
        """Start flying from the first segment. No-op without segments."""
        if not self._segments:
            logger.debug("Flight not started: no located hops")
            return

        self._cancel_frame()
        self._state = self._initial_state(self._state)
        logger.info("Flight started over %d segments", len(self._segments))
        self._request_frame()

    def pause(self) -> None:
        """Freeze the flight and drop the pending frame."""
        if not self._state.is_flying or self._state.is_paused:
            return

        self._cancel_frame()
        self._state = self._state.evolve(is_paused=True)
        logger.debug("Flight paused at segment %d", self._state.current_segment)

    def resume(self) -> None:
        """Continue a paused flight; time spent paused is not counted."""
        if not self._state.is_paused:
            return

        self._state = self._state.evolve(is_paused=False)
        self._last_timestamp = None
        logger.debug("Flight resumed at segment %d", self._state.current_segment)
        if self._state.is_flying and not self._state.is_complete:
            self._request_frame()

    def reset(self) -> None:
        """Replay from the first segment. No-op outside flight mode."""
        if not self._state.is_flying:
            return

        self._cancel_frame()

        if not self._segments:
            self._state = self._state.evolve(
                is_flying=False,
                is_complete=False,
                is_paused=False,
                packet_position=None,
                camera_position=None,
                current_hop_index=None,
            )
            return

        self._state = self._initial_state(self._state)
        logger.debug("Flight reset")
        self._request_frame()

    def exit(self) -> None:
        """Cancel any pending frame and return to the idle defaults."""
        self._cancel_frame()
        self._state = FlightState()
        self._hop_pause_ms = 0.0
        self._last_timestamp = None
        logger.debug("Flight mode exited")

    def set_speed(self, speed: float) -> None:
        """
        Change the speed multiplier; progress is kept.

        Raises:
            ValueError: If speed is not positive
        """
        if speed <= 0:
            raise ValueError(f"Speed must be positive, got {speed}")
        self._state = self._state.evolve(speed=float(speed))

    # --- Time stepping ---

    def tick(self, elapsed_ms: float) -> FlightState:
        """
        Advance the flight by ``elapsed_ms`` of wall time.

        Args:
            elapsed_ms: Time since the previous tick

        Returns:
            The state after the tick
        """
        state = self._state
        if state.is_paused or not state.is_flying or state.is_complete:
            return state

        if self._in_tick:
            logger.debug("Ignoring re-entrant tick")
            return state

        self._in_tick = True
        try:
            self._state = self._advance(state, self._segments, elapsed_ms)
        finally:
            self._in_tick = False

        return self._state

    def _advance(
        self,
        state: FlightState,
        segments: Tuple[FlightSegment, ...],
        elapsed_ms: float,
    ) -> FlightState:
        if not segments:
            return self._complete(state.evolve(is_complete=True))

        # Dwelling at a hop
        if self._hop_pause_ms > 0:
            self._hop_pause_ms -= elapsed_ms * state.speed
            if self._hop_pause_ms > 0:
                return state
            self._hop_pause_ms = 0.0

        segment_duration = Settings.BASE_SEGMENT_DURATION_MS / state.speed
        progress = state.segment_progress + elapsed_ms / segment_duration
        index = state.current_segment

        if progress >= 1:
            progress = 0.0
            index += 1

            if index >= len(segments):
                last = segments[-1]
                return self._complete(
                    state.evolve(
                        is_complete=True,
                        segment_progress=1.0,
                        current_segment=len(segments) - 1,
                        packet_position=last.end,
                        camera_position=camera_behind(
                            last.end, last.end, Settings.CAMERA_ALTITUDE
                        ),
                        current_hop_index=last.hop_index,
                    )
                )

            self._hop_pause_ms = Settings.HOP_PAUSE_MS
            logger.debug("Packet reached hop index %d", segments[index - 1].hop_index)

        if index >= len(segments):
            # Path shrank underneath the flight
            return self._complete(state.evolve(is_complete=True))

        segment = segments[index]
        packet = interpolate(segment.start, segment.end, progress)

        return state.evolve(
            current_segment=index,
            segment_progress=progress,
            packet_position=packet,
            camera_position=camera_behind(packet, segment.end, Settings.CAMERA_ALTITUDE),
            current_hop_index=segment.hop_index,
        )

    def _complete(self, state: FlightState) -> FlightState:
        self._cancel_frame()
        self._hop_pause_ms = 0.0
        logger.info("Flight complete")
        return state

    def _initial_state(self, previous: FlightState) -> FlightState:
        first = self._segments[0]
        self._hop_pause_ms = 0.0
        self._last_timestamp = None

        return previous.evolve(
            is_flying=True,
            current_segment=0,
            segment_progress=0.0,
            is_paused=False,
            is_complete=False,
            packet_position=first.start,
            camera_position=camera_behind(first.start, first.end, Settings.CAMERA_ALTITUDE),
            current_hop_index=first.hop_index,
        )

    # --- Frame scheduling ---

    def _on_frame(self, timestamp_ms: float) -> None:
        self._frame_handle = None

        if self._last_timestamp is None:
            self._last_timestamp = timestamp_ms
        elapsed = timestamp_ms - self._last_timestamp
        self._last_timestamp = timestamp_ms

        state = self.tick(elapsed)

        if state.is_flying and not state.is_paused and not state.is_complete:
            self._request_frame()

    def _request_frame(self) -> None:
        if self._frame_handle is None:
            self._frame_handle = self.scheduler.request_tick(self._on_frame)

    def _cancel_frame(self) -> None:
        if self._frame_handle is not None:
            self.scheduler.cancel_tick(self._frame_handle)
            self._frame_handle = None


def record_flight(
    hops: Sequence[Hop],
    origin: Optional[GeoPoint],
    speed: float = Settings.DEFAULT_SPEED,
    frame_ms: float = Settings.DEFAULT_FRAME_MS,
    max_frames: int = 100_000,
) -> List[FlightState]:
    """
    Fly the packet on a synthetic clock and collect every frame's state.

    Args:
        hops: Hop list
        origin: Trace origin
        speed: Speed multiplier
        frame_ms: Synthetic frame interval
        max_frames: Safety bound on the number of frames

    Returns:
        State snapshots, starting with the state right after ``start``.
        Empty when the flight cannot start.
    """
    scheduler = ManualFrameScheduler()
    animation = FlightAnimation(scheduler, hops, origin)
    animation.set_speed(speed)
    animation.start()

    if not animation.state.is_flying:
        return []

    frames = [animation.state]
    while scheduler.pending_count and len(frames) <= max_frames:
        scheduler.advance(frame_ms)
        frames.append(animation.state)

    return frames
