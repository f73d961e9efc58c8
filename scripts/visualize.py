#!/usr/bin/env python3
"""
HopGlobe Map Export Script

Usage:
    python scripts/visualize.py TRACE_FILE [OPTIONS]

Examples:
    # Route with hop markers
    python scripts/visualize.py trace.json --output route.html

    # Add the latency heatmap and submarine cables
    python scripts/visualize.py trace.json --heatmap --cables

    # Include the recorded packet flight
    python scripts/visualize.py trace.json --packet-track --speed 2
"""

import sys
import argparse
import webbrowser
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hopglobe.config import Config
from hopglobe.utils import setup_logging
from hopglobe.session import load_trace
from hopglobe.analysis import LatencyHeatmapGenerator
from hopglobe.cables import CableService
from hopglobe.flight import record_flight
from hopglobe.models import GeoPoint
from hopglobe.visualization import TraceMapGenerator


def main():
    """Main entry point for map export."""
    parser = argparse.ArgumentParser(
        description="HopGlobe Map Export - Render a recorded trace to HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Route only:
    python3 scripts/visualize.py trace.json

  Route with heatmap and cables:
    python3 scripts/visualize.py trace.json --heatmap --cables
        """,
    )

    parser.add_argument("trace", type=str, help="Trace JSON file (events or snapshot)")
    parser.add_argument(
        "--config",
        type=str,
        default="data/config.yaml",
        help="Path to config file (default: data/config.yaml)",
    )

    # Layers
    parser.add_argument(
        "--heatmap", action="store_true", help="Add the latency heatmap layer"
    )
    parser.add_argument(
        "--cables", action="store_true", help="Add submarine cables (highlighted for the route)"
    )
    parser.add_argument(
        "--packet-track", action="store_true", help="Add the simulated packet flight"
    )
    parser.add_argument(
        "--speed", type=float, default=None, help="Flight speed multiplier for --packet-track"
    )

    # Output options
    parser.add_argument(
        "--output", type=str, default="route.html", help="Output filename (default: route.html)"
    )
    parser.add_argument(
        "--style",
        type=str,
        choices=["CartoDB.DarkMatter", "CartoDB.Positron", "OpenStreetMap"],
        default="CartoDB.DarkMatter",
        help="Map style (default: CartoDB.DarkMatter)",
    )
    parser.add_argument("--zoom", type=int, default=2, help="Initial zoom level (default: 2)")
    parser.add_argument("--open", action="store_true", help="Open the map in a browser")

    args = parser.parse_args()

    config = Config(args.config)
    setup_logging(config)

    try:
        session = load_trace(args.trace)
    except (OSError, ValueError) as e:
        print(f"❌ Could not load trace: {e}")
        sys.exit(1)

    origin = session.origin
    if origin is not None:
        center = origin
    else:
        center = GeoPoint(config.origin_latitude, config.origin_longitude)

    print(f"🗺️  Rendering trace to {session.target or 'unknown target'} ({len(session.hops)} hops)...")
    map_gen = TraceMapGenerator(center.lat, center.lng, args.zoom, args.style)

    if args.heatmap and config.heatmap_enabled:
        print("🔥 Generating latency heatmap...")
        grid = LatencyHeatmapGenerator(config).generate(center)
        map_gen.add_latency_heatmap(grid)

    if args.cables and config.cables_enabled:
        print("🌊 Loading submarine cables...")
        cables = CableService(config).fetch_cables()
        if not cables:
            print("   ⚠️  No cable data available, skipping layer")
        annotated = session.highlighted_cables(cables)
        highlighted = map_gen.add_cables(annotated)
        print(f"   {len(annotated)} cable segments, {highlighted} on the route")

    arcs = map_gen.add_route(session.hops, origin)
    map_gen.add_hop_markers(session.hops, origin, session.selected_hop_index)
    print(f"   Drew {arcs} route arcs")

    if args.packet_track:
        speed = args.speed or config.animation_speed
        frames = record_flight(session.hops, origin, speed=speed, frame_ms=config.frame_ms)
        if frames:
            map_gen.add_packet_track(frames)
            print(f"✈️  Packet flight: {len(frames)} frames")
        else:
            print("   ⚠️  No located hops, packet flight skipped")

    map_gen.save(args.output)
    print(f"✅ Map saved to: {args.output}")

    if args.open:
        webbrowser.open(Path(args.output).resolve().as_uri())


if __name__ == "__main__":
    main()
