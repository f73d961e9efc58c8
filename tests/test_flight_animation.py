"""
Tests for the packet flight animation.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hopglobe.config import Settings
from hopglobe.flight.animation import FlightAnimation, record_flight
from hopglobe.flight.interpolation import camera_behind
from hopglobe.flight.scheduler import ManualFrameScheduler
from hopglobe.models import FlightState, GeoLocation, GeoPoint, Hop

ORIGIN = GeoLocation(0.0, 0.0, city="Null Island")
POINT_A = GeoLocation(0.0, 10.0, city="A")
POINT_B = GeoLocation(0.0, 20.0, city="B")


@pytest.fixture
def hops():
    """Three hops; the middle one timed out."""
    return [
        Hop(hop_number=1, ip_address="10.0.0.1", location=POINT_A, avg_rtt=5.0),
        Hop(hop_number=2, ip_address="*", is_timeout=True),
        Hop(hop_number=3, ip_address="10.0.0.3", location=POINT_B, avg_rtt=40.0, is_destination=True),
    ]


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()


@pytest.fixture
def animation(scheduler, hops):
    return FlightAnimation(scheduler, hops, ORIGIN)


def fly_to_second_segment(animation):
    animation.start()
    return animation.tick(Settings.BASE_SEGMENT_DURATION_MS)


class TestStart:
    """Tests for starting a flight."""

    def test_initial_state(self, animation):
        """A new animation is idle."""
        assert animation.state == FlightState()
        assert len(animation.segments) == 2
        assert not animation.has_pending_frame

    def test_start_sets_first_segment(self, animation):
        animation.start()
        state = animation.state

        assert state.is_flying
        assert not state.is_complete
        assert state.current_segment == 0
        assert state.segment_progress == 0.0
        assert state.packet_position == ORIGIN
        assert state.camera_position == camera_behind(ORIGIN, POINT_A, Settings.CAMERA_ALTITUDE)
        assert state.current_hop_index == 0
        assert animation.has_pending_frame

    def test_start_without_segments_is_noop(self, scheduler):
        """No located hops means nothing to fly."""
        animation = FlightAnimation(
            scheduler, [Hop(hop_number=1, ip_address="*", is_timeout=True)], ORIGIN
        )
        animation.start()

        assert animation.state == FlightState()
        assert scheduler.pending_count == 0

    def test_start_keeps_speed(self, animation):
        animation.set_speed(3)
        animation.start()
        assert animation.state.speed == 3.0


class TestTick:
    """Tests for time stepping."""

    def test_progress_is_elapsed_over_duration(self, animation):
        animation.start()
        state = animation.tick(500)

        assert state.segment_progress == pytest.approx(0.25)
        assert state.packet_position.lat == pytest.approx(0.0, abs=1e-9)
        assert state.packet_position.lng == pytest.approx(2.5, abs=1e-6)

    def test_tick_when_idle_is_noop(self, animation):
        assert animation.tick(1000) == FlightState()

    def test_segment_transition(self, animation):
        """Finishing a segment moves to the next one at zero progress."""
        state = fly_to_second_segment(animation)

        assert state.current_segment == 1
        assert state.segment_progress == 0.0
        assert state.current_hop_index == 2
        assert state.packet_position.lng == pytest.approx(POINT_A.lng, abs=1e-6)

    def test_hop_pause(self, animation):
        """The packet dwells at the hop before flying on."""
        state = fly_to_second_segment(animation)

        assert animation.tick(250) is state

        state = animation.tick(250)
        assert state.current_segment == 1
        assert state.segment_progress == pytest.approx(250 / Settings.BASE_SEGMENT_DURATION_MS)

    def test_completion(self, animation, scheduler):
        fly_to_second_segment(animation)
        animation.tick(Settings.HOP_PAUSE_MS)

        state = animation.tick(Settings.BASE_SEGMENT_DURATION_MS)

        assert state.is_complete
        assert state.is_flying
        assert state.segment_progress == 1.0
        assert state.current_segment == 1
        assert state.packet_position == POINT_B
        assert state.current_hop_index == 2
        assert not animation.has_pending_frame
        assert scheduler.pending_count == 0

    def test_complete_freezes_state(self, animation):
        fly_to_second_segment(animation)
        animation.tick(Settings.HOP_PAUSE_MS)
        completed = animation.tick(Settings.BASE_SEGMENT_DURATION_MS)

        assert animation.tick(1000) is completed
        assert animation.tick(1000) is completed

    def test_path_shrinking_completes(self, animation, hops):
        """A flight whose segment vanished completes on the next tick."""
        fly_to_second_segment(animation)
        animation.update_path(hops[:1], ORIGIN)

        state = animation.tick(Settings.HOP_PAUSE_MS + 100)

        assert state.is_complete
        assert not animation.has_pending_frame


class TestFrames:
    """Tests for frame-driven playback."""

    def test_first_frame_sets_baseline(self, animation, scheduler):
        animation.start()

        assert scheduler.advance(16) == 1
        assert animation.state.segment_progress == 0.0

        scheduler.advance(1000)
        assert animation.state.segment_progress == pytest.approx(0.5)

    def test_frame_requests_next_frame(self, animation, scheduler):
        animation.start()
        scheduler.advance(16)
        assert animation.has_pending_frame
        assert scheduler.pending_count == 1

    def test_progress_monotonic_within_segment(self, hops):
        """Progress never decreases in a segment and restarts at 0 on the next."""
        frames = record_flight(hops, ORIGIN)

        for previous, current in zip(frames, frames[1:]):
            if current.current_segment == previous.current_segment:
                assert current.segment_progress >= previous.segment_progress
            else:
                assert current.current_segment == previous.current_segment + 1
                assert current.segment_progress == 0.0


class TestPauseResume:
    """Tests for pause and resume."""

    def test_pause_freezes_and_cancels_frame(self, animation, scheduler):
        animation.start()
        scheduler.advance(16)
        scheduler.advance(400)
        animation.pause()

        assert animation.state.is_paused
        assert not animation.has_pending_frame
        assert scheduler.pending_count == 0
        assert animation.tick(1000).segment_progress == pytest.approx(0.2)

    def test_paused_time_is_not_counted(self, animation, scheduler):
        animation.start()
        scheduler.advance(16)
        scheduler.advance(400)
        animation.pause()

        assert scheduler.advance(10000) == 0

        animation.resume()
        assert animation.has_pending_frame
        scheduler.advance(16)
        assert animation.state.segment_progress == pytest.approx(0.2)

        scheduler.advance(200)
        assert animation.state.segment_progress == pytest.approx(0.3)

    def test_pause_when_idle_is_noop(self, animation):
        animation.pause()
        assert animation.state == FlightState()

    def test_resume_when_not_paused_is_noop(self, animation, scheduler):
        animation.start()
        animation.resume()
        assert scheduler.pending_count == 1


class TestSpeed:
    """Tests for the speed multiplier."""

    def test_speed_scales_progress(self, animation):
        animation.start()
        animation.set_speed(2)

        assert animation.tick(500).segment_progress == pytest.approx(0.5)

    def test_speed_scales_hop_pause(self, animation):
        fly_to_second_segment(animation)
        animation.set_speed(2)

        state = animation.tick(250)
        assert state.segment_progress == pytest.approx(250 / (Settings.BASE_SEGMENT_DURATION_MS / 2))

    def test_speed_change_keeps_progress(self, animation):
        animation.start()
        animation.tick(500)
        animation.set_speed(0.5)
        assert animation.state.segment_progress == pytest.approx(0.25)

    @pytest.mark.parametrize("speed", [0, -1])
    def test_non_positive_speed_rejected(self, animation, speed):
        with pytest.raises(ValueError):
            animation.set_speed(speed)
        assert animation.state.speed == 1.0


class TestResetExit:
    """Tests for replay and leaving flight mode."""

    def test_reset_replays_completed_flight(self, animation):
        fly_to_second_segment(animation)
        animation.tick(Settings.HOP_PAUSE_MS)
        animation.tick(Settings.BASE_SEGMENT_DURATION_MS)

        animation.reset()
        state = animation.state

        assert state.is_flying
        assert not state.is_complete
        assert state.current_segment == 0
        assert state.segment_progress == 0.0
        assert state.packet_position == ORIGIN
        assert animation.has_pending_frame

    def test_reset_when_idle_is_noop(self, animation, scheduler):
        """Replay only applies to a flight that has been started."""
        animation.reset()

        assert animation.state == FlightState()
        assert not animation.has_pending_frame
        assert scheduler.pending_count == 0

    def test_reset_after_exit_is_noop(self, animation):
        animation.start()
        animation.exit()
        animation.reset()
        assert animation.state == FlightState()

    def test_reset_clears_hop_pause(self, animation):
        fly_to_second_segment(animation)
        animation.reset()

        assert animation.tick(500).segment_progress == pytest.approx(0.25)

    def test_exit_returns_to_idle(self, animation, scheduler):
        animation.set_speed(3)
        animation.start()
        scheduler.advance(16)
        animation.exit()

        assert animation.state == FlightState()
        assert animation.state.speed == 1.0
        assert not animation.has_pending_frame
        assert scheduler.pending_count == 0

    def test_no_frames_after_exit(self, animation, scheduler):
        """A frame requested before exit never fires."""
        animation.start()
        animation.exit()

        assert scheduler.advance(100) == 0
        assert animation.tick(100) == FlightState()
        assert animation.state == FlightState()


class TestRecordFlight:
    """Tests for record_flight function."""

    def test_records_until_complete(self, hops):
        frames = record_flight(hops, ORIGIN)

        assert frames[0].current_segment == 0
        assert frames[0].packet_position == ORIGIN
        assert frames[-1].is_complete
        assert frames[-1].packet_position == POINT_B
        assert not any(f.is_complete for f in frames[:-1])

    def test_frame_count_matches_duration(self, hops):
        frames = record_flight(hops, ORIGIN, frame_ms=100)
        # 2 segments of 2000 ms plus one 500 ms hop pause, plus baseline frames
        assert 44 <= len(frames) <= 48

    def test_speed_shortens_flight(self, hops):
        normal = record_flight(hops, ORIGIN, frame_ms=100)
        fast = record_flight(hops, ORIGIN, speed=2, frame_ms=100)
        assert len(fast) < len(normal)

    def test_no_located_hops(self):
        hops = [Hop(hop_number=1, ip_address="*", is_timeout=True)]
        assert record_flight(hops, ORIGIN) == []

    def test_max_frames_bound(self, hops):
        frames = record_flight(hops, ORIGIN, frame_ms=1, max_frames=10)
        assert len(frames) == 11
        assert not frames[-1].is_complete

    def test_without_origin(self):
        hops = [
            Hop(hop_number=1, ip_address="10.0.0.1", location=GeoLocation(0.0, 0.0)),
            Hop(hop_number=2, ip_address="10.0.0.2", location=GeoLocation(0.0, 5.0)),
        ]
        frames = record_flight(hops, None)

        assert frames[0].packet_position == GeoPoint(0.0, 0.0)
        assert frames[-1].packet_position == GeoPoint(0.0, 5.0)
        assert frames[-1].current_hop_index == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
