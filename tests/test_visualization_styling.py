"""
Tests for globe presentation helpers.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from hopglobe.config import Colors, Settings
from hopglobe.models import CameraPose, DataCenter, GeoLocation, Hop
from hopglobe.visualization.styling import (
    datacenter_color,
    datacenter_short_name,
    format_rtt,
    generate_arcs,
    generate_points,
    heatmap_color,
    latency_color,
    overview_camera,
)

ORIGIN = GeoLocation(37.7749, -122.4194, city="San Francisco")
LOS_ANGELES = GeoLocation(34.05, -118.24, city="Los Angeles")
TOKYO = GeoLocation(35.68, 139.65, city="Tokyo")


@pytest.fixture
def hops():
    return [
        Hop(hop_number=1, ip_address="10.0.0.1", location=LOS_ANGELES, avg_rtt=12.0),
        Hop(hop_number=2, ip_address="*", is_timeout=True),
        Hop(hop_number=3, ip_address="10.0.0.3", location=TOKYO, avg_rtt=120.0, is_destination=True),
    ]


class TestColors:
    """Tests for color helpers."""

    @pytest.mark.parametrize(
        "rtt,expected",
        [
            (0, "#22c55e"),
            (49.9, "#22c55e"),
            (50, "#84cc16"),
            (120, "#eab308"),
            (199, "#f97316"),
            (200, Colors.LATENCY_SLOW),
            (1000, Colors.LATENCY_SLOW),
        ],
    )
    def test_latency_color(self, rtt, expected):
        assert latency_color(rtt) == expected

    def test_heatmap_color_endpoints(self):
        assert heatmap_color(0) == "rgba(34, 197, 94, 0.7)"
        assert heatmap_color(1) == "rgba(239, 68, 68, 0.7)"

    def test_heatmap_color_clamped(self):
        assert heatmap_color(-1) == heatmap_color(0)
        assert heatmap_color(2) == heatmap_color(1)


class TestDatacenter:
    """Tests for cloud provider helpers."""

    def test_known_provider_color(self):
        assert datacenter_color("AWS") == "#FF9900"
        assert datacenter_color("Hetzner") == "#D50C2D"

    def test_unknown_provider_color(self):
        assert datacenter_color("Tiny Hosting") == Colors.DATACENTER_DEFAULT_COLOR

    @pytest.mark.parametrize(
        "provider,expected",
        [("Google Cloud", "GCP"), ("Cloudflare", "CF"), ("DigitalOcean", "DO"), ("AWS", "AWS"), ("Tiny Hosting", "Tiny Hosting")],
    )
    def test_short_name(self, provider, expected):
        assert datacenter_short_name(provider) == expected


class TestFormatRtt:
    """Tests for format_rtt function."""

    def test_sub_millisecond(self):
        assert format_rtt(0.4) == "<1 ms"

    def test_one_decimal(self):
        assert format_rtt(12.345) == "12.3 ms"
        assert format_rtt(1) == "1.0 ms"


class TestGenerateArcs:
    """Tests for generate_arcs function."""

    def test_arcs_skip_unlocated_hops(self, hops):
        arcs = generate_arcs(hops, ORIGIN)

        assert len(arcs) == 2
        assert arcs[0].start == ORIGIN
        assert arcs[0].end == LOS_ANGELES
        assert arcs[0].hop_index == 0
        assert arcs[1].start == LOS_ANGELES
        assert arcs[1].end == TOKYO
        assert arcs[1].hop_index == 2

    def test_arc_colored_by_arriving_hop(self, hops):
        arcs = generate_arcs(hops, ORIGIN)
        assert arcs[0].color == latency_color(12.0)
        assert arcs[1].color == latency_color(120.0)

    def test_without_origin(self, hops):
        assert len(generate_arcs(hops, None)) == 1

    def test_no_located_hops(self):
        assert generate_arcs([Hop(hop_number=1, ip_address="*")], ORIGIN) == []


class TestGeneratePoints:
    """Tests for generate_points function."""

    def test_points(self, hops):
        points = generate_points(hops, ORIGIN)

        assert [p.hop_number for p in points] == [0, 1, 3]
        assert points[0].color == Colors.SOURCE_COLOR
        assert points[0].label == "San Francisco"
        assert points[0].size == 0.8
        assert points[1].size == 0.6
        assert points[2].size == 1.0
        assert points[2].color == Colors.DESTINATION_COLOR

    def test_selected_hop_is_largest(self, hops):
        points = generate_points(hops, ORIGIN, selected_index=0)
        assert points[1].size == 1.2

    def test_datacenter_hop(self):
        hop = Hop(
            hop_number=4,
            ip_address="34.1.2.3",
            location=GeoLocation(45.6, -121.2),
            data_center=DataCenter(provider="Google Cloud"),
        )
        point = generate_points([hop], None)[0]

        assert point.provider == "GCP"
        assert point.provider_color == "#4285F4"

    def test_datacenter_color_from_record(self):
        hop = Hop(
            hop_number=4,
            ip_address="34.1.2.3",
            location=GeoLocation(45.6, -121.2),
            data_center=DataCenter(provider="Google Cloud", color="#123456"),
        )
        assert generate_points([hop], None)[0].provider_color == "#123456"

    def test_no_datacenter(self, hops):
        points = generate_points(hops, ORIGIN)
        assert all(p.provider is None and p.provider_color is None for p in points)

    def test_label_falls_back_to_ip(self):
        hop = Hop(hop_number=1, ip_address="10.0.0.1", location=GeoLocation(1.0, 2.0))
        assert generate_points([hop], None)[0].label == "10.0.0.1"


class TestOverviewCamera:
    """Tests for overview_camera function."""

    def test_follows_newest_hop(self, hops):
        camera = overview_camera(hops, ORIGIN)
        assert camera == CameraPose(TOKYO.lat, TOKYO.lng, Settings.OVERVIEW_CAMERA_ALTITUDE)

    def test_origin_before_hops(self):
        camera = overview_camera([], ORIGIN)
        assert (camera.lat, camera.lng) == (ORIGIN.lat, ORIGIN.lng)

    def test_default_view(self):
        camera = overview_camera([], None)
        assert (camera.lat, camera.lng) == (Settings.OVERVIEW_DEFAULT_LAT, Settings.OVERVIEW_DEFAULT_LNG)

    def test_newest_hop_unlocated(self, hops):
        camera = overview_camera(hops[:2], ORIGIN)
        assert (camera.lat, camera.lng) == (Settings.OVERVIEW_DEFAULT_LAT, Settings.OVERVIEW_DEFAULT_LNG)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
