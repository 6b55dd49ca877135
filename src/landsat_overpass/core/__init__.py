"""Core data structures for overpass prediction and scene matching."""

from .bands import BAND_MAPPING, ReflectanceResult, describe_band
from .errors import (
    CatalogError,
    ConfigurationError,
    InvalidDateRange,
    InvalidLocation,
    LandsatOverpassError,
    PropagationError,
    SearchTimeout,
    SnapshotError,
)
from .location import GroundPoint, NominatimGeocoder, parse_coordinates, resolve_location
from .passes import OverpassResult
from .satellites import (
    DEFAULT_ELEMENTS,
    SATELLITE_CATALOG,
    OrbitalElements,
    SatelliteSpecs,
    load_elements,
)

__all__ = [
    # Location
    "GroundPoint",
    "NominatimGeocoder",
    "parse_coordinates",
    "resolve_location",
    # Satellites
    "OrbitalElements",
    "SatelliteSpecs",
    "DEFAULT_ELEMENTS",
    "SATELLITE_CATALOG",
    "load_elements",
    # Passes
    "OverpassResult",
    # Bands
    "BAND_MAPPING",
    "ReflectanceResult",
    "describe_band",
    # Errors
    "LandsatOverpassError",
    "InvalidLocation",
    "InvalidDateRange",
    "PropagationError",
    "SearchTimeout",
    "CatalogError",
    "SnapshotError",
    "ConfigurationError",
]
