"""
Landsat Overpass - next-pass prediction and scene lookup for Landsat 8/9.

Predicts when each tracked Landsat satellite will next pass over a ground
location, and finds the most recent Collection 2 surface reflectance scene
covering that location together with its band URLs.

Basic Usage:
    from landsat_overpass import LandsatAnalyzer

    analyzer = LandsatAnalyzer.from_config()
    report = analyzer.analyze("40.0,-105.0", cloud_cover=70)
    print(report.to_json())

    # Overpass prediction only
    from landsat_overpass import GroundPoint, OverpassScheduler, load_elements

    scheduler = OverpassScheduler(load_elements())
    for result in scheduler.predict(GroundPoint(40.0, -105.0)):
        print(result.satellite_name, result.format_time())

CLI Usage:
    landsat-overpass -l "40.0,-105.0" overpass
    landsat-overpass -l Denver analyze --cloud-cover 20
    landsat-overpass --lat 40.0 --lon -105.0 grid
"""

__version__ = "1.0.0"

# Core types
from landsat_overpass.core.bands import BAND_MAPPING
from landsat_overpass.core.errors import (
    CatalogError,
    ConfigurationError,
    InvalidDateRange,
    InvalidLocation,
    LandsatOverpassError,
    PropagationError,
    SearchTimeout,
    SnapshotError,
)
from landsat_overpass.core.location import GroundPoint, resolve_location
from landsat_overpass.core.passes import OverpassResult
from landsat_overpass.core.satellites import OrbitalElements, load_elements

# Orbit
from landsat_overpass.orbit.model import OrbitModel
from landsat_overpass.orbit.scheduler import OverpassScheduler
from landsat_overpass.orbit.search import OverpassSearch

# Catalog
from landsat_overpass.catalog.matcher import SceneMatcher
from landsat_overpass.catalog.models import DateWindow, SceneQuery, SceneRecord
from landsat_overpass.catalog.resolver import BandResolver
from landsat_overpass.catalog.stac import StacCatalogClient

# Area
from landsat_overpass.area.grid import GridExpander, expand_grid

# Analysis
from landsat_overpass.analysis.analyzer import AnalysisReport, LandsatAnalyzer
from landsat_overpass.config import OverpassConfig

__all__ = [
    # Version
    "__version__",
    # Core
    "GroundPoint",
    "resolve_location",
    "OrbitalElements",
    "load_elements",
    "OverpassResult",
    "BAND_MAPPING",
    # Errors
    "LandsatOverpassError",
    "InvalidLocation",
    "InvalidDateRange",
    "PropagationError",
    "SearchTimeout",
    "CatalogError",
    "SnapshotError",
    "ConfigurationError",
    # Orbit
    "OrbitModel",
    "OverpassSearch",
    "OverpassScheduler",
    # Catalog
    "DateWindow",
    "SceneQuery",
    "SceneRecord",
    "StacCatalogClient",
    "SceneMatcher",
    "BandResolver",
    # Area
    "expand_grid",
    "GridExpander",
    # Analysis
    "LandsatAnalyzer",
    "AnalysisReport",
    "OverpassConfig",
]
