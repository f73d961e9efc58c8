"""
HopGlobe Visualization Component

Presentation helpers for the globe and interactive 2D map exports.

Main Classes:
    - TraceMapGenerator: Folium map with route, heatmap, cables and packet track

Example:
    >>> from hopglobe.visualization import TraceMapGenerator
    >>> gen = TraceMapGenerator(37.77, -122.42)
    >>> gen.add_route(session.hops, session.origin)
    >>> gen.save('route.html')

Map Styles:
    - CartoDB.DarkMatter (default)
    - CartoDB.Positron
    - OpenStreetMap
"""

from .map_generator import TraceMapGenerator, split_antimeridian
from .styling import (
    GlobeArc,
    GlobePoint,
    datacenter_color,
    datacenter_short_name,
    format_rtt,
    generate_arcs,
    generate_points,
    heatmap_color,
    latency_color,
    overview_camera,
)

# Utilities
from . import constants

__all__ = [
    # Main classes
    "TraceMapGenerator",
    "GlobeArc",
    "GlobePoint",
    # Functions
    "split_antimeridian",
    "latency_color",
    "datacenter_color",
    "datacenter_short_name",
    "heatmap_color",
    "format_rtt",
    "generate_arcs",
    "generate_points",
    "overview_camera",
    # Modules
    "constants",
]
