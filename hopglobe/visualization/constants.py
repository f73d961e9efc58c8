"""
Visualization Constants
"""

# Map configuration
MAP_TILE_URLS = {
    "CartoDB.DarkMatter": "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
    "CartoDB.Positron": "https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png",
    "OpenStreetMap": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
}

MAP_ATTRIBUTION = "HopGlobe Route Visualization"

# Heatmap layer
HEATMAP_MIN_OPACITY = 0.3
HEATMAP_RADIUS = 25
HEATMAP_BLUR = 30

# Marker radius scale (GlobePoint.size -> pixels)
MARKER_RADIUS_SCALE = 8

# Packet track
PACKET_TRACK_WEIGHT = 2
PACKET_TRACK_DASH = "4, 6"
