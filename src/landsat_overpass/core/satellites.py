"""Tracked satellites and their orbital element sets."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class OrbitalElements:
    """Two-line element set for one satellite.

    Attributes:
        name: Human-readable satellite name
        line1: First fixed-format element line (epoch, drag terms)
        line2: Second fixed-format element line (inclination, eccentricity,
            mean motion, ...)
    """
    name: str
    line1: str
    line2: str

    @property
    def catalog_number(self) -> str:
        """Satellite catalog number from columns 3-7 of line 1."""
        return self.line1[2:7].strip()


@dataclass(frozen=True)
class SatelliteSpecs:
    """Imaging characteristics of a tracked satellite.

    Attributes:
        name: Satellite name, matching OrbitalElements.name
        resolution_m: Multispectral ground sample distance in meters
        revisit_time_days: Repeat cycle of the ground track in days
        swath_width_km: Image swath width in kilometers
        env_prefix: Prefix of the environment variables that override
            the built-in element lines
    """
    name: str
    resolution_m: float
    revisit_time_days: float
    swath_width_km: float
    env_prefix: str


LANDSAT_8 = OrbitalElements(
    name="Landsat 8",
    line1="1 43013U 17073A   20334.91667824  .00000023  00000-0  00000+0 0  9994",
    line2="2 43013  97.7421  34.8470 0001432  91.5763 268.5523 14.57178936188308",
)

LANDSAT_9 = OrbitalElements(
    name="Landsat 9",
    line1="1 49577U 21093A   21267.58993056  .00000023  00000-0  00000+0 0  9998",
    line2="2 49577  97.7016  55.7332 0001991  95.1893 265.0077 14.57178936188328",
)

DEFAULT_ELEMENTS: tuple[OrbitalElements, ...] = (LANDSAT_8, LANDSAT_9)

SATELLITE_CATALOG: dict[str, SatelliteSpecs] = {
    "Landsat 8": SatelliteSpecs(
        name="Landsat 8",
        resolution_m=30.0,
        revisit_time_days=16.0,
        swath_width_km=185.0,
        env_prefix="LANDSAT8_TLE",
    ),
    "Landsat 9": SatelliteSpecs(
        name="Landsat 9",
        resolution_m=30.0,
        revisit_time_days=16.0,
        swath_width_km=185.0,
        env_prefix="LANDSAT9_TLE",
    ),
}


def load_elements(environ: Mapping[str, str] | None = None) -> list[OrbitalElements]:
    """Build the tracked element sets, applying environment overrides.

    A satellite's built-in lines are replaced only when both
    ``<PREFIX>_LINE1`` and ``<PREFIX>_LINE2`` are set, e.g.
    ``LANDSAT8_TLE_LINE1`` / ``LANDSAT8_TLE_LINE2``.

    Args:
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        Element sets in tracking order (Landsat 8, Landsat 9)
    """
    environ = os.environ if environ is None else environ
    elements = []
    for default in DEFAULT_ELEMENTS:
        prefix = SATELLITE_CATALOG[default.name].env_prefix
        line1 = environ.get(f"{prefix}_LINE1", "").strip()
        line2 = environ.get(f"{prefix}_LINE2", "").strip()
        if line1 and line2:
            elements.append(OrbitalElements(name=default.name, line1=line1, line2=line2))
        else:
            elements.append(default)
    return elements
