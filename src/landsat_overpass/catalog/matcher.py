"""Selection of the best catalog scene for a query."""

from __future__ import annotations

import logging

from .models import SceneQuery, SceneRecord
from .stac import SceneCatalog

logger = logging.getLogger(__name__)


class SceneMatcher:
    """Resolves a scene query to a single scene.

    The catalog performs the spatial, temporal and cloud cover filtering and
    its ordering is trusted: the first candidate is the match.
    """

    def __init__(self, catalog: SceneCatalog):
        self.catalog = catalog

    def find_scene(self, query: SceneQuery) -> SceneRecord | None:
        """Find the best scene for a query.

        Returns:
            The first catalog candidate, or None when there are none

        Raises:
            CatalogError: If the catalog call fails
        """
        candidates = self.catalog.search(query)
        if not candidates:
            logger.warning("No scenes found matching the criteria")
            return None

        scene = candidates[0]
        logger.info(
            f"Selected scene {scene.scene_id} ({scene.acquisition_date}, "
            f"cloud cover {scene.cloud_cover}%) from {len(candidates)} candidates"
        )
        return scene
