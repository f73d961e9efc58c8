"""
HopGlobe - Traceroute Globe Visualizer

Animates a simulated packet along the great-circle path through the routers
discovered by a traceroute, and computes the overlays drawn around it.

Components:
    - flight: Path construction, spherical interpolation, flight animation
    - analysis: Latency heatmap and submarine cable route matching
    - cables: Submarine cable dataset access
    - visualization: Presentation helpers and interactive map export

Example:
    >>> from hopglobe import Config
    >>> from hopglobe.session import load_trace
    >>> from hopglobe.flight import record_flight
    >>> session = load_trace('trace.json')
    >>> frames = record_flight(session.hops, session.origin)
"""

# Component imports for easy access
from . import flight
from . import analysis
from . import cables
from . import visualization
from . import session
from . import models
from . import utils
from . import config
from .config import Config

HOPGLOBE_VERSION = "v0.1.0"

__version__ = HOPGLOBE_VERSION
__license__ = "MIT"

__all__ = [
    "flight",
    "analysis",
    "cables",
    "visualization",
    "session",
    "models",
    "utils",
    "config",
    "Config",
]
