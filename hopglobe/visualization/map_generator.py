"""
Route Map Generator
Renders a trace onto an interactive Folium map.

The 3D globe is the primary consumer of the flight state; this module is a
2D export of the same data: route arcs, hop markers, the latency heatmap,
submarine cables and a recorded packet track.
"""

import logging
from typing import List, Optional, Sequence

import folium
from folium import plugins

from hopglobe.config import Colors, Settings
from hopglobe.flight.interpolation import sample_arc
from hopglobe.models import FlightState, GeoLocation, GeoPoint, HeatmapPoint, Hop, SubmarineCable

from .constants import (
    HEATMAP_BLUR,
    HEATMAP_MIN_OPACITY,
    HEATMAP_RADIUS,
    MAP_ATTRIBUTION,
    MAP_TILE_URLS,
    MARKER_RADIUS_SCALE,
    PACKET_TRACK_DASH,
    PACKET_TRACK_WEIGHT,
)
from .styling import format_rtt, generate_arcs, generate_points

logger = logging.getLogger(__name__)


def split_antimeridian(points: Sequence[GeoPoint]) -> List[List[List[float]]]:
    """
    Split a polyline wherever it jumps across the antimeridian.

    Leaflet draws the jump as a line across the whole map otherwise.

    Returns:
        List of ``[[lat, lng], ...]`` runs
    """
    runs: List[List[List[float]]] = []
    current: List[List[float]] = []

    for point in points:
        if current and abs(point.lng - current[-1][1]) > 180:
            runs.append(current)
            current = []
        current.append([point.lat, point.lng])

    if current:
        runs.append(current)
    return [run for run in runs if len(run) >= 2]


class TraceMapGenerator:
    """
    Generates interactive route maps using Folium.

    Supports visualization of:
    - Route arcs (great circles between located hops)
    - Hop markers colored by latency
    - Latency heatmap overlay
    - Submarine cables, with highlighted cables in the accent color
    - Recorded packet flight track
    """

    def __init__(
        self,
        center_lat: float,
        center_lon: float,
        zoom: int = Settings.DEFAULT_ZOOM,
        style: str = Settings.DEFAULT_MAP_STYLE,
    ):
        """
        Initialize map generator.

        Args:
            center_lat: Center latitude (usually the trace origin)
            center_lon: Center longitude
            zoom: Initial zoom level (default: 2)
            style: Map style/theme (default: CartoDB.DarkMatter)
        """
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom = zoom
        self.style = style

        self.map = self._create_base_map()

    def _create_base_map(self) -> folium.Map:
        """Create base Folium map."""
        tiles = MAP_TILE_URLS.get(self.style, self.style)

        return folium.Map(
            location=[self.center_lat, self.center_lon],
            zoom_start=self.zoom,
            tiles=tiles,
            attr=MAP_ATTRIBUTION,
            world_copy_jump=True,
        )

    def add_route(self, hops: Sequence[Hop], origin: Optional[GeoPoint]) -> int:
        """
        Draw great-circle arcs along the route.

        Args:
            hops: Hop list
            origin: Trace origin

        Returns:
            Number of arcs drawn
        """
        arcs = generate_arcs(hops, origin)

        for arc in arcs:
            hop = hops[arc.hop_index]
            for run in split_antimeridian(sample_arc(arc.start, arc.end)):
                folium.PolyLine(
                    run,
                    color=arc.color,
                    weight=Settings.ARC_WEIGHT,
                    opacity=Settings.ARC_OPACITY,
                    tooltip=f"Hop {hop.hop_number} - {format_rtt(hop.avg_rtt)}",
                ).add_to(self.map)

        return len(arcs)

    def add_hop_markers(
        self,
        hops: Sequence[Hop],
        origin: Optional[GeoLocation],
        selected_index: Optional[int] = None,
    ) -> None:
        """
        Add markers for the origin and every located hop.

        Args:
            hops: Hop list
            origin: Trace origin
            selected_index: Index of the hop to emphasize
        """
        for point in generate_points(hops, origin, selected_index):
            if point.hop_number == 0:
                tooltip = point.label
            else:
                tooltip = f"#{point.hop_number} {point.label}"
            if point.provider:
                tooltip += f" [{point.provider}]"

            folium.CircleMarker(
                location=[point.lat, point.lng],
                radius=point.size * MARKER_RADIUS_SCALE,
                color=point.provider_color or point.color,
                fill=True,
                fill_color=point.color,
                fill_opacity=0.7,
                tooltip=tooltip,
            ).add_to(self.map)

    def add_latency_heatmap(self, points: Sequence[HeatmapPoint]) -> None:
        """
        Add the latency grid as a heatmap layer.

        Args:
            points: Heatmap grid from LatencyHeatmapGenerator
        """
        if not points:
            return

        plugins.HeatMap(
            [[p.lat, p.lng, p.weight] for p in points],
            name="Latency",
            min_opacity=HEATMAP_MIN_OPACITY,
            radius=HEATMAP_RADIUS,
            blur=HEATMAP_BLUR,
            gradient=Colors.HEATMAP_GRADIENT,
        ).add_to(self.map)

    def add_cables(self, cables: Sequence[SubmarineCable]) -> int:
        """
        Draw submarine cables; highlighted cables are drawn last, on top.

        Args:
            cables: Cables annotated by the matcher

        Returns:
            Number of highlighted cables
        """
        ordered = sorted(cables, key=lambda c: c.is_highlighted)
        highlighted = 0

        for cable in ordered:
            if cable.is_highlighted:
                highlighted += 1
                color = Colors.HIGHLIGHTED_CABLE_COLOR
                weight = Settings.HIGHLIGHTED_CABLE_WEIGHT
            else:
                color = cable.color
                weight = Settings.CABLE_WEIGHT

            for run in split_antimeridian(cable.coordinates):
                folium.PolyLine(
                    run, color=color, weight=weight, tooltip=cable.name
                ).add_to(self.map)

        return highlighted

    def add_packet_track(self, frames: Sequence[FlightState]) -> None:
        """
        Draw the path of the packet recorded from a flight animation.

        Args:
            frames: State snapshots from ``record_flight``
        """
        positions = [f.packet_position for f in frames if f.packet_position is not None]
        if not positions:
            return

        for run in split_antimeridian(positions):
            folium.PolyLine(
                run,
                color=Colors.PACKET_COLOR,
                weight=PACKET_TRACK_WEIGHT,
                dash_array=PACKET_TRACK_DASH,
            ).add_to(self.map)

        final = positions[-1]
        folium.Marker(
            [final.lat, final.lng],
            tooltip="Packet",
            icon=folium.Icon(color="orange", icon="paper-plane", prefix="fa"),
        ).add_to(self.map)

    def save(self, filename: str) -> None:
        """
        Save map to HTML file.

        Args:
            filename: Output filename (should end in .html)
        """
        self.map.save(filename)
        logger.info("Map saved to %s", filename)
