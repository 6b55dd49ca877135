"""Imagery snapshot lookups via the NASA Earth imagery API."""

from __future__ import annotations

import logging
from datetime import date

import requests

from ..core.errors import SnapshotError
from ..core.location import GroundPoint

logger = logging.getLogger(__name__)

NASA_EARTH_ASSETS_URL = "https://api.nasa.gov/planetary/earth/assets"
DEFAULT_DIM_DEG = 0.025


class ImagerySnapshotClient:
    """Look up the Landsat image snapshot covering a point on a date."""

    def __init__(self, api_key: str = "DEMO_KEY", url: str = NASA_EARTH_ASSETS_URL,
                 timeout: float = 15, session: requests.Session | None = None):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_snapshot(self, point: GroundPoint, day: date,
                       dim: float = DEFAULT_DIM_DEG) -> str:
        """Get the URL of the image closest to day at point.

        Args:
            point: Center of the image
            day: Requested acquisition date
            dim: Width and height of the image in degrees

        Returns:
            Image URL

        Raises:
            SnapshotError: If the service fails or returns no image
        """
        try:
            response = self.session.get(
                self.url,
                params={
                    "lat": point.latitude,
                    "lon": point.longitude,
                    "date": day.isoformat(),
                    "dim": dim,
                    "api_key": self.api_key,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SnapshotError(f"Snapshot request failed: {e}") from e

        if response.status_code != 200:
            raise SnapshotError(f"Snapshot service returned status {response.status_code}")

        try:
            url = response.json()["url"]
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"No image in snapshot response: {e}") from e

        logger.debug(f"Snapshot for ({point.latitude}, {point.longitude}) on {day}: {url}")
        return url
