"""
HopGlobe Analysis Component

Standalone geospatial analyses that feed the globe overlays.

Main Classes:
    - LatencyHeatmapGenerator: Distance-based latency grid around the origin
    - SubmarineCableRegionMatcher: Continent/ocean heuristic for cable routes

Example:
    >>> from hopglobe.analysis import LatencyHeatmapGenerator
    >>> grid = LatencyHeatmapGenerator().generate(origin)
"""

from .heatmap import LatencyHeatmapGenerator, estimate_latency, generate_heatmap, latency_weight
from .cable_matcher import SubmarineCableRegionMatcher

# Utilities
from . import regions

__all__ = [
    # Main classes
    "LatencyHeatmapGenerator",
    "SubmarineCableRegionMatcher",
    # Functions
    "estimate_latency",
    "latency_weight",
    "generate_heatmap",
    # Modules
    "regions",
]
