"""
HopGlobe Cables Component

Submarine cable dataset access.

Main Classes:
    - CableService: Cached fetch from the TeleGeography API or a local file

Example:
    >>> from hopglobe.cables import CableService
    >>> cables = CableService(config).fetch_cables()
"""

from .parser import parse_cable_geojson
from .service import CableService

__all__ = [
    "CableService",
    "parse_cable_geojson",
]
