"""
Frame Schedulers

The flight animation never drives itself with real timers. It asks a
scheduler to be called back before the next frame and receives the frame
timestamp (milliseconds) in that callback.

Schedulers:
    - ManualFrameScheduler: synthetic clock, frames pumped by ``advance``
    - RealtimeFrameScheduler: single-threaded loop pacing frames at a fixed rate
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Per-frame callback capability: request a tick, cancel a pending one."""

    @abstractmethod
    def request_tick(self, callback: FrameCallback) -> int:
        """
        Ask for ``callback`` to run on the next frame.

        Returns:
            Handle that can be passed to ``cancel_tick``
        """

    @abstractmethod
    def cancel_tick(self, handle: int) -> None:
        """Drop a pending callback. Unknown or spent handles are ignored."""


class _QueuedFrameScheduler(FrameScheduler):
    """
    Shared callback bookkeeping.

    Callbacks requested while a frame is running wait for the next frame, so
    a frame never re-enters itself. Cancelling a callback that is due later in
    the running frame stops it from firing.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, FrameCallback] = {}
        self._due: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    def request_tick(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_tick(self, handle: int) -> None:
        self._pending.pop(handle, None)
        self._due.pop(handle, None)

    @property
    def pending_count(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def _run_frame(self, timestamp_ms: float) -> int:
        self._due = self._pending
        self._pending = {}

        ran = 0
        while self._due:
            handle = next(iter(self._due))
            callback = self._due.pop(handle)
            callback(timestamp_ms)
            ran += 1
        return ran


class ManualFrameScheduler(_QueuedFrameScheduler):
    """
    Scheduler with a synthetic clock.

    Each ``advance`` call moves the clock and runs the callbacks that were
    pending before the call.

    Example:
        >>> scheduler = ManualFrameScheduler()
        >>> animation = FlightAnimation(scheduler, hops, origin)
        >>> animation.start()
        >>> scheduler.advance(16.7)
        1
    """

    def __init__(self, start_ms: float = 0.0):
        super().__init__()
        self.now_ms = start_ms

    def advance(self, elapsed_ms: float) -> int:
        """
        Move the clock forward and run one frame.

        Args:
            elapsed_ms: Time since the previous frame

        Returns:
            Number of callbacks that ran
        """
        self.now_ms += elapsed_ms
        return self._run_frame(self.now_ms)


class RealtimeFrameScheduler(_QueuedFrameScheduler):
    """
    Cooperative frame loop paced against a monotonic clock.

    ``run`` keeps delivering frames while any callback is pending, sleeping
    between frames to hold the target rate. Everything happens on the calling
    thread.

    Args:
        fps: Target frame rate
        clock: Returns the current time in seconds
        sleep: Sleeps for the given number of seconds
    """

    def __init__(
        self,
        fps: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if fps <= 0:
            raise ValueError("fps must be positive")
        super().__init__()
        self.frame_interval = 1.0 / fps
        self._clock = clock
        self._sleep = sleep

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Deliver frames until nothing is pending.

        Args:
            max_frames: Optional upper bound on delivered frames

        Returns:
            Number of frames delivered
        """
        frames = 0
        while self._pending and (max_frames is None or frames < max_frames):
            frame_start = self._clock()
            self._run_frame(frame_start * 1000.0)
            frames += 1

            remaining = self.frame_interval - (self._clock() - frame_start)
            if remaining > 0:
                self._sleep(remaining)

        logger.debug("Frame loop stopped after %d frames", frames)
        return frames
