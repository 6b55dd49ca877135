"""Runtime configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .area.grid import DEFAULT_MAX_WORKERS, DEFAULT_PIXEL_FOOTPRINT_DEG
from .catalog.stac import LANDSATLOOK_STAC_URL, SURFACE_REFLECTANCE_COLLECTION
from .core.errors import ConfigurationError
from .core.satellites import OrbitalElements, load_elements

DEFAULT_CLOUD_COVER = 70

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _parse_timeout(text: str) -> float | None:
    if not text:
        return None
    try:
        seconds = float(text)
    except ValueError as e:
        raise ConfigurationError(
            f"OVERPASS_SEARCH_TIMEOUT must be a number of seconds, got '{text}'"
        ) from e
    if not seconds > 0:
        raise ConfigurationError(f"OVERPASS_SEARCH_TIMEOUT must be positive, got {text}")
    return seconds


@dataclass
class OverpassConfig:
    """Configuration for overpass prediction and scene analysis.

    Attributes:
        satellites: Tracked element sets, in reporting order
        stac_url: STAC API root of the scene catalog
        collection: Catalog collection to search
        auth_token: Token sent with asset accessibility checks
        verify_assets: Whether to HEAD-check band URLs before reporting them
        nasa_api_key: Key for the NASA Earth imagery API (snapshot mode)
        search_timeout: Wall-clock budget per overpass scan in seconds,
            None for unlimited
        default_cloud_cover: Cloud cover limit used when a request gives none
        grid_footprint_deg: Pixel footprint for area analysis
        grid_max_workers: Concurrent upstream calls in area analysis
    """
    satellites: list[OrbitalElements] = field(default_factory=load_elements)
    stac_url: str = LANDSATLOOK_STAC_URL
    collection: str = SURFACE_REFLECTANCE_COLLECTION
    auth_token: str = ""
    verify_assets: bool = False
    nasa_api_key: str = "DEMO_KEY"
    search_timeout: float | None = None
    default_cloud_cover: float = DEFAULT_CLOUD_COVER
    grid_footprint_deg: float = DEFAULT_PIXEL_FOOTPRINT_DEG
    grid_max_workers: int = DEFAULT_MAX_WORKERS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **kwargs) -> OverpassConfig:
        """Create config from environment variables.

        Environment variables:
            LANDSAT_STAC_URL: STAC API root
            LANDSAT_COLLECTION: Collection id
            LANDSAT_AUTH_TOKEN: Asset access token
            LANDSAT_VERIFY_ASSETS: "1"/"true" to HEAD-check band URLs
            NASA_API_KEY: NASA API key
            OVERPASS_SEARCH_TIMEOUT: Seconds per overpass scan
            LANDSAT8_TLE_LINE1 / LANDSAT8_TLE_LINE2: Landsat 8 elements
            LANDSAT9_TLE_LINE1 / LANDSAT9_TLE_LINE2: Landsat 9 elements

        Keyword arguments override the environment.

        Raises:
            ConfigurationError: If OVERPASS_SEARCH_TIMEOUT is not a positive number
        """
        environ = os.environ if environ is None else environ
        timeout = environ.get("OVERPASS_SEARCH_TIMEOUT", "").strip()
        values = {
            "satellites": load_elements(environ),
            "stac_url": environ.get("LANDSAT_STAC_URL", LANDSATLOOK_STAC_URL),
            "collection": environ.get("LANDSAT_COLLECTION", SURFACE_REFLECTANCE_COLLECTION),
            "auth_token": environ.get("LANDSAT_AUTH_TOKEN", ""),
            "verify_assets": (
                environ.get("LANDSAT_VERIFY_ASSETS", "").strip().lower() in _TRUE_VALUES
            ),
            "nasa_api_key": environ.get("NASA_API_KEY", "DEMO_KEY"),
            "search_timeout": _parse_timeout(timeout),
        }
        values.update(kwargs)
        return cls(**values)
