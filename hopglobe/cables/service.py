"""
Submarine Cable Service
Fetches and caches the submarine cable dataset.
"""

import json
import logging
import time
from typing import List, Optional

import requests

from hopglobe.config import Config
from hopglobe.models import SubmarineCable

from .parser import parse_cable_geojson

logger = logging.getLogger(__name__)


class CableService:
    """
    Provides submarine cable data with a time-based cache.

    Fetch failures never propagate: they are logged and surface as an empty
    cable list, so the animation and heatmap keep working without cables.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize cable service.

        Args:
            config: HopGlobe configuration object
        """
        config = config or Config()
        self.api_url = config.cable_api_url
        self.api_timeout = config.cable_api_timeout
        self.cache_ttl_seconds = config.cable_cache_ttl_hours * 3600
        self.data_path = config.cable_data_path

        self._cache: List[SubmarineCable] = []
        self._cached = False
        self._last_fetch = 0.0

    def fetch_cables(self, force_refresh: bool = False) -> List[SubmarineCable]:
        """
        Return cable data, using the cache while it is fresh.

        A configured local ``data_path`` takes precedence over the API.

        Args:
            force_refresh: Ignore the cache

        Returns:
            List of cables, or empty list if the data is unavailable
        """
        if (
            not force_refresh
            and self._cached
            and time.time() - self._last_fetch < self.cache_ttl_seconds
        ):
            return self._cache

        if self.data_path:
            cables = self.load_from_file(self.data_path)
        else:
            cables = self._fetch_from_api()

        # Failures are not cached so the next call retries
        if cables:
            self._cache = cables
            self._cached = True
            self._last_fetch = time.time()

        return cables

    def load_from_file(self, path: str) -> List[SubmarineCable]:
        """
        Load cables from a local GeoJSON file.

        Args:
            path: Path to a cable FeatureCollection

        Returns:
            List of cables, or empty list if the file cannot be read
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not load cable data from %s: %s", path, e)
            return []

        cables = parse_cable_geojson(data)
        logger.info("Loaded %d cable segments from %s", len(cables), path)
        return cables

    def _fetch_from_api(self) -> List[SubmarineCable]:
        try:
            response = requests.get(self.api_url, timeout=self.api_timeout)
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.warning("Cable API returned HTTP %s: %s", status, e)
            return []

        except requests.exceptions.Timeout:
            logger.warning("Cable API request timeout after %ss", self.api_timeout)
            return []

        except requests.exceptions.RequestException as e:
            logger.warning("Error fetching cable data: %s", e)
            return []

        except ValueError as e:
            logger.warning("Error parsing cable API response: %s", e)
            return []

        cables = parse_cable_geojson(data)
        logger.info("Fetched %d cable segments", len(cables))
        return cables
