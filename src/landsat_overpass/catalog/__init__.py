"""Scene catalog search and surface reflectance band resolution."""

from .assets import AssetAccessChecker
from .matcher import SceneMatcher
from .models import DateWindow, SceneQuery, SceneRecord
from .resolver import BandResolver
from .stac import LANDSATLOOK_STAC_URL, SURFACE_REFLECTANCE_COLLECTION, StacCatalogClient

__all__ = [
    "DateWindow",
    "SceneQuery",
    "SceneRecord",
    "StacCatalogClient",
    "LANDSATLOOK_STAC_URL",
    "SURFACE_REFLECTANCE_COLLECTION",
    "AssetAccessChecker",
    "SceneMatcher",
    "BandResolver",
]
