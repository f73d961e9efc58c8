"""
HopGlobe Configuration Management

This module provides configuration management for the HopGlobe route
visualizer. It includes physical constants, animation and heatmap settings,
color schemes, and runtime configuration loaded from YAML files.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# =============================================================================
# Physical Constants
# =============================================================================


class Constants:
    """Physical constants representing real-world measurements."""

    EARTH_RADIUS_KM: float = 6371.0  # Earth's radius for distance calculations
    KM_PER_DEGREE_LAT: float = 111.32  # Distance per degree latitude at equator


# =============================================================================
# Animation & Analysis Settings
# =============================================================================


class Settings:
    """Tunable settings for the flight animation and geospatial analyses."""

    # --- Flight Animation ---
    BASE_SEGMENT_DURATION_MS: float = 2000.0  # Time to fly one segment at 1x
    HOP_PAUSE_MS: float = 500.0  # Dwell at each router before moving on
    CAMERA_ALTITUDE: float = 0.5  # Chase camera altitude (globe radii)
    CAMERA_TRAIL_DEGREES: float = 15.0  # Camera offset behind the packet
    DEFAULT_SPEED: float = 1.0  # Animation speed multiplier
    DEFAULT_FRAME_MS: float = 1000.0 / 60  # Frame interval for simulated runs

    # --- Geometry Thresholds ---
    MIN_ARC_RADIANS: float = 1e-4  # Below this, endpoints are treated as equal
    MIN_HEADING_NORM: float = 1e-3  # Below this, the camera has no heading

    # --- Latency Heatmap ---
    HEATMAP_GRID_STEP_DEG: float = 8.0  # Grid spacing in degrees
    HEATMAP_LAT_LIMIT: float = 80.0  # Poles excluded beyond this latitude
    BASE_LATENCY_MS: float = 10.0  # Fixed latency regardless of distance
    FIBER_MS_PER_KM: float = 0.06  # Propagation plus routing overhead
    MAX_LATENCY_MS: float = 300.0  # Saturation point (~half the world away)

    # --- Globe View ---
    OVERVIEW_CAMERA_ALTITUDE: float = 2.5  # Camera altitude outside flight mode
    OVERVIEW_DEFAULT_LAT: float = 30.0  # Default view centered on the Pacific
    OVERVIEW_DEFAULT_LNG: float = -150.0

    # --- Submarine Cables ---
    CABLE_API_URL: str = (
        "https://www.submarinecablemap.com/api/v3/cable/cable-geo.json"
    )
    CABLE_API_TIMEOUT: int = 30  # seconds
    CABLE_CACHE_TTL_HOURS: float = 24.0

    # --- Map Export ---
    DEFAULT_MAP_STYLE: str = "CartoDB.DarkMatter"
    DEFAULT_ZOOM: int = 2
    ARC_SAMPLES: int = 32  # Points per great-circle arc on the 2D map
    ARC_WEIGHT: int = 3
    ARC_OPACITY: float = 0.8
    CABLE_WEIGHT: int = 1
    HIGHLIGHTED_CABLE_WEIGHT: int = 3


# =============================================================================
# Color Schemes
# =============================================================================


class Colors:
    """Color definitions for visualizations."""

    # Latency buckets as (upper bound ms, color); anything above is LATENCY_SLOW
    LATENCY_BUCKETS = [
        (50.0, "#22c55e"),  # Green: excellent
        (100.0, "#84cc16"),  # Lime: good
        (150.0, "#eab308"),  # Yellow: moderate
        (200.0, "#f97316"),  # Orange: slow
    ]
    LATENCY_SLOW: str = "#ef4444"  # Red: very slow

    SOURCE_COLOR: str = "#22c55e"  # Green
    DESTINATION_COLOR: str = "#8b5cf6"  # Purple
    PACKET_COLOR: str = "#facc15"  # Amber

    DEFAULT_CABLE_COLOR: str = "rgba(0, 100, 180, 0.3)"
    HIGHLIGHTED_CABLE_COLOR: str = "#00ffff"  # Bright cyan

    # Cloud provider brand colors for hops detected in a datacenter
    DATACENTER_COLORS: Dict[str, str] = {
        "AWS": "#FF9900",
        "Google Cloud": "#4285F4",
        "Azure": "#0078D4",
        "Cloudflare": "#F38020",
        "Akamai": "#0096D6",
        "Fastly": "#FF282D",
        "DigitalOcean": "#0080FF",
        "Linode": "#00A95C",
        "Vultr": "#007BFC",
        "OVH": "#000E9C",
        "Hetzner": "#D50C2D",
    }
    DATACENTER_DEFAULT_COLOR: str = "#6B7280"  # Gray: unknown provider

    # Short provider names for badges and tooltips
    DATACENTER_SHORT_NAMES: Dict[str, str] = {
        "Google Cloud": "GCP",
        "Cloudflare": "CF",
        "DigitalOcean": "DO",
    }

    # Heatmap gradient: 0 = nearby/fast, 1 = far/slow
    HEATMAP_GRADIENT: Dict[float, str] = {
        0.0: "#22c55e",
        0.5: "#eab308",
        1.0: "#ef4444",
    }


# =============================================================================
# Runtime Configuration
# =============================================================================


class Config:
    """
    Runtime configuration manager for HopGlobe.

    Loads settings from YAML files or uses sensible defaults.
    Provides property-based access to common settings.

    Example:
        >>> config = Config('config.yaml')
        >>> print(f"Tracing from {config.origin_name}")
        >>> print(f"Cables from {config.cable_api_url}")
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file. If None or missing,
                        uses default configuration.
        """
        self.config_path = config_path
        self._config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file or return defaults.

        Returns:
            Configuration dictionary
        """
        if self.config_path is None or not os.path.exists(self.config_path):
            return self._get_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load config file %s: %s", self.config_path, e)
            return self._get_default_config()

        if not self._validate_config(config):
            logger.warning("Invalid config structure in %s, using defaults", self.config_path)
            return self._get_default_config()

        # Fill optional sections the file leaves out
        merged = self._get_default_config()
        for section, values in config.items():
            if isinstance(values, dict) and isinstance(merged.get(section), dict):
                merged[section].update(values)
            else:
                merged[section] = values
        return merged

    def _validate_config(self, config: Any) -> bool:
        """
        Validate configuration structure and required fields.

        Args:
            config: Parsed YAML document to validate

        Returns:
            True if valid, False otherwise
        """
        try:
            assert isinstance(config, dict)

            # Required: origin section
            assert "origin" in config
            assert isinstance(config["origin"]["latitude"], (float, int))
            assert isinstance(config["origin"]["longitude"], (float, int))
            assert -90 <= config["origin"]["latitude"] <= 90
            assert -180 <= config["origin"]["longitude"] <= 180

            # Optional sections must at least be mappings
            for section in ("animation", "heatmap", "cables", "logging"):
                if section in config:
                    assert isinstance(config[section], dict)

            if "animation" in config and "speed" in config["animation"]:
                assert isinstance(config["animation"]["speed"], (float, int))
                assert config["animation"]["speed"] > 0

            if "heatmap" in config and "grid_step_deg" in config["heatmap"]:
                assert isinstance(config["heatmap"]["grid_step_deg"], (float, int))
                assert config["heatmap"]["grid_step_deg"] > 0

            return True
        except (AssertionError, KeyError, TypeError):
            return False

    def _get_default_config(self) -> Dict[str, Any]:
        """
        Get default configuration.

        Returns:
            Default configuration dictionary
        """
        return {
            "origin": {
                "latitude": 37.7749,
                "longitude": -122.4194,
                "name": "San Francisco, United States",
            },
            "animation": {
                "speed": Settings.DEFAULT_SPEED,
                "frame_ms": Settings.DEFAULT_FRAME_MS,
            },
            "heatmap": {
                "enabled": True,
                "grid_step_deg": Settings.HEATMAP_GRID_STEP_DEG,
            },
            "cables": {
                "enabled": True,
                "api_url": Settings.CABLE_API_URL,
                "timeout_seconds": Settings.CABLE_API_TIMEOUT,
                "cache_ttl_hours": Settings.CABLE_CACHE_TTL_HOURS,
                "data_path": None,  # Optional local GeoJSON instead of the API
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        }

    def save_config(self) -> None:
        """
        Save current configuration to YAML file.

        Raises:
            ValueError: If config_path is not set
        """
        if self.config_path is None:
            raise ValueError("Cannot save config: no config_path specified")

        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(self._config, f, default_flow_style=False)

    # --- Property Accessors ---

    @property
    def origin_latitude(self) -> float:
        """Get trace origin latitude in degrees."""
        return float(self._config["origin"]["latitude"])

    @property
    def origin_longitude(self) -> float:
        """Get trace origin longitude in degrees."""
        return float(self._config["origin"]["longitude"])

    @property
    def origin_name(self) -> str:
        """Get descriptive origin name."""
        return self._config["origin"].get("name", "Unknown Location")

    @property
    def animation_speed(self) -> float:
        """Get initial animation speed multiplier."""
        return float(self.get("animation.speed", Settings.DEFAULT_SPEED))

    @property
    def frame_ms(self) -> float:
        """Get frame interval used for simulated playback."""
        return float(self.get("animation.frame_ms", Settings.DEFAULT_FRAME_MS))

    @property
    def heatmap_enabled(self) -> bool:
        """Whether the latency heatmap overlay is generated."""
        return bool(self.get("heatmap.enabled", True))

    @property
    def heatmap_grid_step(self) -> float:
        """Get heatmap grid spacing in degrees."""
        return float(self.get("heatmap.grid_step_deg", Settings.HEATMAP_GRID_STEP_DEG))

    @property
    def cables_enabled(self) -> bool:
        """Whether submarine cables are fetched and drawn."""
        return bool(self.get("cables.enabled", True))

    @property
    def cable_api_url(self) -> str:
        """Get submarine cable GeoJSON endpoint."""
        return self.get("cables.api_url", Settings.CABLE_API_URL)

    @property
    def cable_api_timeout(self) -> int:
        """Get cable API timeout in seconds."""
        return int(self.get("cables.timeout_seconds", Settings.CABLE_API_TIMEOUT))

    @property
    def cable_cache_ttl_hours(self) -> float:
        """Get how long fetched cable data stays fresh."""
        return float(self.get("cables.cache_ttl_hours", Settings.CABLE_CACHE_TTL_HOURS))

    @property
    def cable_data_path(self) -> Optional[str]:
        """Get optional local cable GeoJSON path."""
        return self.get("cables.data_path")

    @property
    def log_level(self) -> str:
        """Get logging level name."""
        return str(self.get("logging.level", "INFO")).upper()

    @property
    def log_format(self) -> str:
        """Get logging format string."""
        return self.get(
            "logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # --- Generic Accessors ---

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'origin.latitude')
            default: Default value if key not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get('heatmap.grid_step_deg', 8)
            8
        """
        keys = key.split(".")
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Dot-separated key path (e.g., 'origin.latitude')
            value: Value to set

        Example:
            >>> config.set('animation.speed', 2.0)
        """
        keys = key.split(".")
        config = self._config

        # Navigate to parent of target key
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]

        config[keys[-1]] = value
