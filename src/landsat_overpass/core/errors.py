"""Exception types raised by landsat-overpass.

Only genuine failures are exceptions. "No overpass found", "no scene found"
and "no reflectance data" are ordinary results and are reported as values.
"""


class LandsatOverpassError(Exception):
    """Base class for all landsat-overpass errors."""


class InvalidLocation(LandsatOverpassError, ValueError):
    """Location text could not be parsed, geocoded, or is out of range."""


class InvalidDateRange(LandsatOverpassError, ValueError):
    """Date range text is neither "latest" nor "YYYY-MM-DD to YYYY-MM-DD"."""


class PropagationError(LandsatOverpassError):
    """The orbit propagator broke down (decayed orbit, bad elements, NaN state)."""


class SearchTimeout(LandsatOverpassError):
    """An overpass scan exceeded its wall-clock budget or was cancelled."""


class CatalogError(LandsatOverpassError):
    """The scene catalog service failed or returned an unusable response."""


class SnapshotError(LandsatOverpassError):
    """The imagery snapshot service failed to return an image URL."""


class ConfigurationError(LandsatOverpassError, ValueError):
    """An environment setting has an unusable value."""
