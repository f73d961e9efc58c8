#!/usr/bin/env python3
"""
HopGlobe Flight Simulation Script

Usage:
    python scripts/animate.py TRACE_FILE [OPTIONS]

Examples:
    # Dump every frame of the packet flight as JSON
    python scripts/animate.py trace.json --output frames.json

    # Play the flight in real time in the terminal
    python scripts/animate.py trace.json --realtime --speed 4
"""

import sys
import json
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hopglobe.config import Config
from hopglobe.utils import setup_logging
from hopglobe.session import load_trace
from hopglobe.flight import FlightAnimation, RealtimeFrameScheduler, record_flight


def play_realtime(session, speed: float, fps: float) -> None:
    """Fly the packet on the wall clock, printing each hop arrival."""
    scheduler = RealtimeFrameScheduler(fps=fps)
    animation = FlightAnimation(scheduler, session.hops, session.origin)
    animation.set_speed(speed)
    animation.start()

    if not animation.state.is_flying:
        print("⚠️  No located hops, nothing to fly")
        return

    last_hop = None

    def report(_timestamp_ms: float) -> None:
        nonlocal last_hop
        state = animation.state
        if state.current_hop_index != last_hop:
            last_hop = state.current_hop_index
            hop = session.hops[last_hop]
            print(f"✈️  → hop {hop.hop_number:2d} {hop.ip_address}")
        if animation.has_pending_frame:
            scheduler.request_tick(report)

    scheduler.request_tick(report)
    frames = scheduler.run()
    print(f"✅ Flight complete after {frames} frames")


def main():
    """Main entry point for flight simulation."""
    parser = argparse.ArgumentParser(
        description="HopGlobe Flight Simulation - Fly the packet along a recorded trace"
    )
    parser.add_argument("trace", type=str, help="Trace JSON file (events or snapshot)")
    parser.add_argument(
        "--config",
        type=str,
        default="data/config.yaml",
        help="Path to config file (default: data/config.yaml)",
    )
    parser.add_argument("--speed", type=float, default=None, help="Speed multiplier")
    parser.add_argument("--fps", type=float, default=60.0, help="Frame rate (default: 60)")
    parser.add_argument(
        "--realtime", action="store_true", help="Play on the wall clock instead of dumping frames"
    )
    parser.add_argument(
        "--output", type=str, default="frames.json", help="Frame dump file (default: frames.json)"
    )

    args = parser.parse_args()

    config = Config(args.config)
    setup_logging(config)

    try:
        session = load_trace(args.trace)
    except (OSError, ValueError) as e:
        print(f"❌ Could not load trace: {e}")
        sys.exit(1)

    speed = args.speed or config.animation_speed
    if speed <= 0 or args.fps <= 0:
        print("❌ Speed and fps must be positive")
        sys.exit(1)

    try:
        if args.realtime:
            play_realtime(session, speed, args.fps)
            return

        frames = record_flight(session.hops, session.origin, speed=speed, frame_ms=1000.0 / args.fps)
        if not frames:
            print("⚠️  No located hops, nothing to fly")
            sys.exit(1)

        with open(args.output, "w", encoding="utf-8") as f:
            json.dump([frame.to_dict() for frame in frames], f, indent=2)

        print(f"✅ {len(frames)} frames written to: {args.output}")

    except KeyboardInterrupt:
        print("\n👋 Flight stopped by user")


if __name__ == "__main__":
    main()
