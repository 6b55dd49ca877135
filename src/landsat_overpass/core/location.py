"""Ground point handling and location resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import requests

from .errors import InvalidLocation

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
USER_AGENT = "landsat-overpass/1.0 (https://github.com/landsat-overpass)"


@dataclass(frozen=True)
class GroundPoint:
    """Geodetic point on the Earth's surface.

    Attributes:
        latitude: Latitude in decimal degrees (-90 to 90)
        longitude: Longitude in decimal degrees (-180 to 180)
        name: Optional human-readable name, not part of equality
    """
    latitude: float
    longitude: float
    name: str | None = field(default=None, compare=False)

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise InvalidLocation(f"Latitude must be between -90 and 90, got {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise InvalidLocation(f"Longitude must be between -180 and 180, got {self.longitude}")

    @property
    def label(self) -> str:
        """Display label, falling back to the coordinates."""
        return self.name or f"{self.latitude}, {self.longitude}"

    def to_geojson(self) -> dict:
        """GeoJSON Point geometry (longitude first)."""
        return {"type": "Point", "coordinates": [self.longitude, self.latitude]}


class Geocoder(Protocol):
    """Anything that turns free text into a GroundPoint."""

    def geocode(self, text: str) -> GroundPoint | None:
        ...


class NominatimGeocoder:
    """Geocode place names using OpenStreetMap Nominatim."""

    def __init__(self, url: str = NOMINATIM_URL, timeout: float = 5,
                 session: requests.Session | None = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def geocode(self, text: str) -> GroundPoint | None:
        """Geocode a place name.

        Args:
            text: Name of the place to geocode

        Returns:
            GroundPoint if found, None otherwise
        """
        try:
            response = self.session.get(
                self.url,
                params={
                    "q": text,
                    "format": "json",
                    "limit": 1,
                },
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )

            if response.status_code != 200:
                logger.warning(f"Nominatim returned status {response.status_code}")
                return None

            results = response.json()
            if not results:
                logger.warning(f"No results found for '{text}'")
                return None

            result = results[0]
            return GroundPoint(
                latitude=float(result["lat"]),
                longitude=float(result["lon"]),
                name=result.get("display_name", text).split(",")[0],
            )

        except requests.RequestException as e:
            logger.warning(f"Nominatim request failed: {e}")
            return None
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to parse Nominatim response: {e}")
            return None


def parse_coordinates(text: str) -> GroundPoint:
    """Parse a "lat,lon" string into a validated GroundPoint.

    Raises:
        InvalidLocation: If the text is not two numbers or is out of range
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise InvalidLocation(f"Expected 'latitude,longitude', got '{text}'")
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError as e:
        raise InvalidLocation(f"Invalid location format: '{text}'") from e
    return GroundPoint(latitude=latitude, longitude=longitude)


def resolve_location(text: str, geocoder: Geocoder | None = None) -> GroundPoint:
    """Resolve location input to a GroundPoint.

    Text containing a comma is read as "latitude,longitude"; anything else is
    handed to the geocoder.

    Args:
        text: Coordinates ("40.0,-105.0") or a place name ("Denver")
        geocoder: Geocoding collaborator. Defaults to Nominatim.

    Returns:
        Validated GroundPoint

    Raises:
        InvalidLocation: If the input is malformed or cannot be geocoded

    Example:
        >>> resolve_location("40.0,-105.0")
        GroundPoint(latitude=40.0, longitude=-105.0, name=None)
    """
    if not text or not text.strip():
        raise InvalidLocation("Location must not be empty")

    if "," in text:
        return parse_coordinates(text)

    geocoder = geocoder or NominatimGeocoder()
    logger.info(f"Geocoding '{text}'...")
    point = geocoder.geocode(text.strip())
    if point is None:
        raise InvalidLocation(f"Could not find location '{text}'")
    return point
