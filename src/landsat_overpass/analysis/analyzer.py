"""End-to-end Landsat analysis for a location."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Literal

from ..area.grid import (
    DEFAULT_PIXEL_FOOTPRINT_DEG,
    GridExpander,
    GridReport,
    reflectance_cell_handler,
    snapshot_cell_handler,
)
from ..area.snapshot import ImagerySnapshotClient
from ..catalog.assets import AssetAccessChecker
from ..catalog.matcher import SceneMatcher
from ..catalog.models import DateWindow, SceneQuery
from ..catalog.resolver import BandResolver
from ..catalog.stac import StacCatalogClient
from ..config import OverpassConfig
from ..core.bands import ReflectanceResult
from ..core.location import Geocoder, GroundPoint, NominatimGeocoder, resolve_location
from ..core.passes import OverpassResult
from ..orbit.scheduler import OverpassScheduler
from ..orbit.search import OverpassSearch

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_NO_SCENES = "no_scenes"
STATUS_NO_REFLECTANCE = "no_reflectance_data"

STATUS_MESSAGES = {
    STATUS_OK: "Scene and surface reflectance data found",
    STATUS_NO_SCENES: "No Landsat scenes found matching the criteria",
    STATUS_NO_REFLECTANCE: "No surface reflectance data available for this scene",
}


@dataclass
class AnalysisReport:
    """Overpass predictions and the matched scene for one location.

    Attributes:
        point: Resolved ground point
        overpasses: Next overpass per tracked satellite
        window: Scene search window
        max_cloud_cover: Scene cloud cover limit
        scene: Metadata of the selected scene, None if none matched
        reflectance: Band code -> URL for the selected scene
        status: One of "ok", "no_scenes", "no_reflectance_data"
    """
    point: GroundPoint
    overpasses: list[OverpassResult]
    window: DateWindow
    max_cloud_cover: float
    scene: dict[str, Any] | None = None
    reflectance: ReflectanceResult = field(default_factory=dict)
    status: str = STATUS_NO_SCENES

    @property
    def message(self) -> str:
        return STATUS_MESSAGES[self.status]

    def to_dict(self) -> dict:
        return {
            "location": f"{self.point.latitude}, {self.point.longitude}",
            "overpass_times": [o.to_dict() for o in self.overpasses],
            "date_range": {
                "start": self.window.start.isoformat(),
                "end": self.window.end.isoformat(),
            },
            "cloud_cover": self.max_cloud_cover,
            "status": self.status,
            "message": self.message,
            "scene_metadata": self.scene,
            "reflectance_data": self.reflectance,
        }

    def to_json(self) -> str:
        """Report as indented JSON for automation."""
        return json.dumps(self.to_dict(), indent=2, default=str)


class LandsatAnalyzer:
    """Predicts overpasses and matches catalog scenes for a location.

    All collaborators are injected; :meth:`from_config` wires up the network
    clients.
    """

    def __init__(
        self,
        scheduler: OverpassScheduler,
        matcher: SceneMatcher,
        resolver: BandResolver,
        geocoder: Geocoder | None = None,
        snapshot_client: ImagerySnapshotClient | None = None,
        default_cloud_cover: float = 70,
        grid_max_workers: int = 4,
        grid_footprint: float = DEFAULT_PIXEL_FOOTPRINT_DEG,
    ):
        self.scheduler = scheduler
        self.matcher = matcher
        self.resolver = resolver
        self.geocoder = geocoder
        self.snapshot_client = snapshot_client
        self.default_cloud_cover = default_cloud_cover
        self.grid_max_workers = grid_max_workers
        self.grid_footprint = grid_footprint

    @classmethod
    def from_config(cls, config: OverpassConfig | None = None) -> LandsatAnalyzer:
        """Build an analyzer talking to the configured services."""
        config = config or OverpassConfig.from_env()
        checker = AssetAccessChecker(config.auth_token) if config.verify_assets else None
        return cls(
            scheduler=OverpassScheduler(
                config.satellites,
                search=OverpassSearch(timeout=config.search_timeout),
            ),
            matcher=SceneMatcher(StacCatalogClient(config.stac_url, config.collection)),
            resolver=BandResolver(checker),
            geocoder=NominatimGeocoder(),
            snapshot_client=ImagerySnapshotClient(config.nasa_api_key),
            default_cloud_cover=config.default_cloud_cover,
            grid_max_workers=config.grid_max_workers,
            grid_footprint=config.grid_footprint_deg,
        )

    def resolve(self, location: str | GroundPoint) -> GroundPoint:
        if isinstance(location, GroundPoint):
            return location
        return resolve_location(location, self.geocoder)

    def predict_overpasses(self, location: str | GroundPoint, start: datetime | None = None,
                           refine: bool = False) -> tuple[GroundPoint, list[OverpassResult]]:
        """Next overpass of every tracked satellite over a location.

        Raises:
            InvalidLocation: If the location cannot be resolved
        """
        point = self.resolve(location)
        return point, self.scheduler.predict(point, start=start, refine=refine)

    def analyze(
        self,
        location: str | GroundPoint,
        cloud_cover: float | None = None,
        date_range: str | None = "latest",
        now: datetime | None = None,
    ) -> AnalysisReport:
        """Predict overpasses and find the best recent scene for a location.

        Args:
            location: "lat,lon" text, a place name, or a GroundPoint
            cloud_cover: Maximum scene cloud cover percentage
            date_range: "latest" (trailing 30 days) or "YYYY-MM-DD to YYYY-MM-DD"
            now: Reference time for the overpass scan and "latest" window

        Returns:
            AnalysisReport; overpasses are filled in even when no scene is found

        Raises:
            InvalidLocation: If the location cannot be resolved
            InvalidDateRange: If date_range is malformed
            CatalogError: If the scene catalog is unavailable
        """
        now = now or datetime.now(timezone.utc)
        point = self.resolve(location)
        window = DateWindow.from_request(date_range, now=now)
        max_cloud = self.default_cloud_cover if cloud_cover is None else cloud_cover
        query = SceneQuery(point=point, window=window, max_cloud_cover=max_cloud)

        overpasses = self.scheduler.predict(point, start=now)
        report = AnalysisReport(
            point=point,
            overpasses=overpasses,
            window=window,
            max_cloud_cover=max_cloud,
        )

        scene = self.matcher.find_scene(query)
        if scene is None:
            report.status = STATUS_NO_SCENES
            return report

        report.scene = scene.metadata()
        report.reflectance = self.resolver.resolve_bands(scene)
        report.status = STATUS_OK if report.reflectance else STATUS_NO_REFLECTANCE
        logger.info(f"Analysis for {point.label}: {report.message}")
        return report

    def analyze_area(
        self,
        location: str | GroundPoint,
        mode: Literal["reflectance", "snapshot"] = "reflectance",
        footprint: float | None = None,
        cloud_cover: float | None = None,
        date_range: str | None = "latest",
        day: date | None = None,
        now: datetime | None = None,
    ) -> GridReport:
        """Run scene matching or snapshot lookups over a 3x3 pixel grid.

        Args:
            location: Center of the grid
            mode: "reflectance" for scene + bands per cell, "snapshot" for an
                imagery snapshot URL per cell
            footprint: Pixel size in degrees, defaults to the configured footprint
            cloud_cover: Maximum scene cloud cover (reflectance mode)
            date_range: Scene window (reflectance mode)
            day: Snapshot date (snapshot mode), defaults to today
            now: Reference time for the "latest" window

        Raises:
            InvalidLocation: If the location cannot be resolved
            InvalidDateRange: If date_range is malformed
        """
        now = now or datetime.now(timezone.utc)
        center = self.resolve(location)

        if mode == "snapshot":
            if self.snapshot_client is None:
                raise ValueError("Snapshot mode requires an imagery snapshot client")
            handler = snapshot_cell_handler(self.snapshot_client, day or now.date())
        elif mode == "reflectance":
            window = DateWindow.from_request(date_range, now=now)
            max_cloud = self.default_cloud_cover if cloud_cover is None else cloud_cover
            handler = reflectance_cell_handler(self.matcher, self.resolver, window, max_cloud)
        else:
            raise ValueError(f"Unknown grid mode '{mode}'")

        expander = GridExpander(handler, max_workers=self.grid_max_workers)
        return expander.run(center, footprint or self.grid_footprint)
