"""Landsat Collection 2 surface reflectance band table."""

from types import MappingProxyType

# Canonical band code -> STAC asset key in landsat-c2l2-sr items
BAND_MAPPING = MappingProxyType({
    "SR_B1": "coastal",
    "SR_B2": "blue",
    "SR_B3": "green",
    "SR_B4": "red",
    "SR_B5": "nir08",
    "SR_B6": "swir16",
    "SR_B7": "swir22",
})

BAND_DESCRIPTIONS = MappingProxyType({
    "SR_B1": "Coastal/Aerosol (0.43-0.45 um)",
    "SR_B2": "Blue (0.45-0.51 um)",
    "SR_B3": "Green (0.53-0.59 um)",
    "SR_B4": "Red (0.64-0.67 um)",
    "SR_B5": "Near Infrared (0.85-0.88 um)",
    "SR_B6": "SWIR 1 (1.57-1.65 um)",
    "SR_B7": "SWIR 2 (2.11-2.29 um)",
})

# Canonical band code -> accessible asset URL
ReflectanceResult = dict[str, str]


def describe_band(code: str) -> str:
    """Human-readable description of a canonical band code."""
    return BAND_DESCRIPTIONS.get(code, code)
