"""
Latency Heatmap
Estimates one-way latency from the trace origin to a global grid.
"""

import logging
from typing import List, Optional

from hopglobe.config import Config, Settings
from hopglobe.models import GeoPoint, HeatmapPoint
from hopglobe.utils import haversine_distance

logger = logging.getLogger(__name__)


def estimate_latency(distance_km: float) -> float:
    """
    Estimate one-way latency for a surface distance.

    Fixed base latency plus light-in-fiber propagation with routing overhead.

    Args:
        distance_km: Great-circle distance in kilometers

    Returns:
        Latency in milliseconds

    Example:
        >>> estimate_latency(1000)
        70.0
    """
    return Settings.BASE_LATENCY_MS + distance_km * Settings.FIBER_MS_PER_KM


def latency_weight(latency_ms: float) -> float:
    """Normalize a latency to [0, 1], saturating at MAX_LATENCY_MS."""
    return min(latency_ms / Settings.MAX_LATENCY_MS, 1.0)


class LatencyHeatmapGenerator:
    """
    Generates a weighted lat/lng grid around the trace origin.

    The grid is recomputed wholesale whenever the origin changes; there is no
    incremental update.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize heatmap generator.

        Args:
            config: HopGlobe configuration (grid step default)
        """
        self.grid_step = config.heatmap_grid_step if config else Settings.HEATMAP_GRID_STEP_DEG

    def generate(
        self, origin: GeoPoint, grid_step: Optional[float] = None
    ) -> List[HeatmapPoint]:
        """
        Build the latency grid for an origin.

        Latitudes run from -80 to 80 (poles excluded) and longitudes from -180
        to 180, both inclusive where the step lands on the bound.

        Args:
            origin: Trace origin
            grid_step: Grid spacing in degrees (defaults to the configured step)

        Returns:
            Grid points with weight 0 (colocated) to 1 (slowest)

        Raises:
            ValueError: If grid_step is not positive
        """
        step = self.grid_step if grid_step is None else grid_step
        if step <= 0:
            raise ValueError(f"Grid step must be positive, got {step}")

        limit = Settings.HEATMAP_LAT_LIMIT
        lat_count = int((2 * limit) / step + 1e-9) + 1
        lng_count = int(360 / step + 1e-9) + 1

        points = []
        for i in range(lat_count):
            lat = -limit + i * step
            for j in range(lng_count):
                lng = -180 + j * step
                distance = haversine_distance(origin.lat, origin.lng, lat, lng)
                weight = latency_weight(estimate_latency(distance))
                points.append(HeatmapPoint(lat=lat, lng=lng, weight=weight))

        logger.info(
            "Latency heatmap: %d points around (%.2f, %.2f)",
            len(points), origin.lat, origin.lng,
        )
        return points


def generate_heatmap(origin: GeoPoint, grid_step: float = Settings.HEATMAP_GRID_STEP_DEG) -> List[HeatmapPoint]:
    """Shortcut for ``LatencyHeatmapGenerator().generate(origin, grid_step)``."""
    return LatencyHeatmapGenerator().generate(origin, grid_step)
