"""Mapping of scene assets to surface reflectance band URLs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Protocol

from ..core.bands import BAND_MAPPING, ReflectanceResult
from .models import SceneRecord

logger = logging.getLogger(__name__)


class AccessChecker(Protocol):

    def is_reachable(self, url: str) -> bool:
        ...


class BandResolver:
    """Turns a scene into a band code -> URL mapping.

    Bands missing from the scene or failing the accessibility check are left
    out; they are never reported as errors. An empty result means the scene
    has no usable reflectance data.
    """

    def __init__(self, checker: AccessChecker | None = None,
                 band_mapping: Mapping[str, str] = BAND_MAPPING):
        """Initialize the resolver.

        Args:
            checker: Accessibility check applied to each URL. None skips
                the check.
            band_mapping: Canonical band code -> logical asset key
        """
        self.checker = checker
        self.band_mapping = band_mapping

    def resolve_bands(self, scene: SceneRecord) -> ReflectanceResult:
        bands: ReflectanceResult = {}
        for code, asset_key in self.band_mapping.items():
            href = scene.assets.get(asset_key)
            if not href:
                logger.debug(f"{scene.scene_id}: no '{asset_key}' asset for {code}")
                continue
            if self.checker is not None and not self.checker.is_reachable(href):
                logger.debug(f"{scene.scene_id}: {code} asset unreachable, omitting")
                continue
            bands[code] = href

        logger.info(f"{scene.scene_id}: resolved {len(bands)}/{len(self.band_mapping)} bands")
        return bands
