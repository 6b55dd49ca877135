"""Landsat scene catalog client for the USGS LandsatLook STAC server."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import requests

from ..core.errors import CatalogError
from .models import SceneQuery, SceneRecord

logger = logging.getLogger(__name__)

LANDSATLOOK_STAC_URL = "https://landsatlook.usgs.gov/stac-server"
SURFACE_REFLECTANCE_COLLECTION = "landsat-c2l2-sr"


class SceneCatalog(Protocol):
    """Anything that answers scene queries with candidates in relevance order."""

    def search(self, query: SceneQuery) -> list[SceneRecord]:
        ...


class StacCatalogClient:
    """Search a STAC API for scenes intersecting a point.

    Candidates are returned in the server's order; no local ranking is
    applied. Failures are raised as CatalogError and never retried.
    """

    def __init__(
        self,
        url: str = LANDSATLOOK_STAC_URL,
        collection: str = SURFACE_REFLECTANCE_COLLECTION,
        timeout: float = 30,
        session: requests.Session | None = None,
    ):
        """Initialize the client.

        Args:
            url: STAC API root (the "/search" endpoint is appended)
            collection: Collection to search
            timeout: Request timeout in seconds
            session: HTTP session to reuse
        """
        self.url = url.rstrip("/")
        self.collection = collection
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_search_body(self, query: SceneQuery) -> dict[str, Any]:
        """STAC item-search body for a scene query."""
        return {
            "intersects": query.point.to_geojson(),
            "datetime": query.window.to_stac(),
            "collections": [self.collection],
            "query": {"eo:cloud_cover": {"lt": query.max_cloud_cover}},
        }

    def search(self, query: SceneQuery) -> list[SceneRecord]:
        """Run a scene search.

        Args:
            query: Point, window and cloud cover limit

        Returns:
            Matching scenes in catalog order (possibly empty)

        Raises:
            CatalogError: If the request fails or the response is unusable
        """
        body = self.build_search_body(query)
        logger.info(
            f"Searching {self.collection} at ({query.point.latitude}, "
            f"{query.point.longitude}) for {body['datetime']}, "
            f"cloud cover < {query.max_cloud_cover}%"
        )

        try:
            response = self.session.post(
                f"{self.url}/search", json=body, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Catalog request failed: {e}")
            raise CatalogError(f"Catalog request failed: {e}") from e

        if response.status_code != 200:
            logger.error(f"Catalog returned status {response.status_code}")
            raise CatalogError(f"Catalog returned status {response.status_code}")

        try:
            features = response.json()["features"]
            if not isinstance(features, list):
                raise TypeError(f"'features' is {type(features).__name__}, not a list")
            scenes = [SceneRecord.from_feature(feature) for feature in features]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Unusable catalog response: {e}")
            raise CatalogError(f"Failed to parse catalog response: {e}") from e

        logger.info(f"Catalog returned {len(scenes)} candidate scenes")
        return scenes
