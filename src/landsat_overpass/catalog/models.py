"""Scene search queries, time windows and catalog records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from types import MappingProxyType
from typing import Any

from ..core.errors import InvalidDateRange
from ..core.location import GroundPoint

LATEST = "latest"
LATEST_WINDOW_DAYS = 30
STAC_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
END_OF_DAY = time(23, 59, 59)


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def _end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY, tzinfo=timezone.utc)


@dataclass(frozen=True)
class DateWindow:
    """Inclusive UTC time window for a scene search.

    Attributes:
        start: First instant of the window
        end: Last instant of the window
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise InvalidDateRange(
                f"Window start {self.start.isoformat()} is after end {self.end.isoformat()}"
            )

    @classmethod
    def latest(cls, now: datetime | None = None, days: int = LATEST_WINDOW_DAYS) -> DateWindow:
        """Trailing window of whole UTC days ending today."""
        now = now or datetime.now(timezone.utc)
        today = now.astimezone(timezone.utc).date()
        return cls(
            start=_start_of_day(today - timedelta(days=days)),
            end=_end_of_day(today),
        )

    @classmethod
    def parse(cls, text: str) -> DateWindow:
        """Parse "YYYY-MM-DD to YYYY-MM-DD" into a whole-day window.

        Raises:
            InvalidDateRange: If the text is malformed
        """
        parts = [p.strip() for p in text.split("to")]
        if len(parts) != 2:
            raise InvalidDateRange(f"Expected 'YYYY-MM-DD to YYYY-MM-DD', got '{text}'")
        try:
            first = date.fromisoformat(parts[0])
            last = date.fromisoformat(parts[1])
        except ValueError as e:
            raise InvalidDateRange(f"Invalid date range format: '{text}'") from e
        return cls(start=_start_of_day(first), end=_end_of_day(last))

    @classmethod
    def from_request(cls, value: str | None, now: datetime | None = None) -> DateWindow:
        """Build a window from request input: "latest" (the default) or explicit."""
        if value is None or value.strip().lower() == LATEST:
            return cls.latest(now)
        return cls.parse(value)

    def to_stac(self) -> str:
        """STAC datetime interval, e.g. "2024-01-01T00:00:00Z/2024-01-31T23:59:59Z"."""
        return f"{self.start.strftime(STAC_TIME_FORMAT)}/{self.end.strftime(STAC_TIME_FORMAT)}"


@dataclass(frozen=True)
class SceneQuery:
    """One located, time-bounded, cloud-limited scene search.

    Attributes:
        point: Ground point the scene must intersect
        window: Acquisition time window
        max_cloud_cover: Scenes must have cloud cover strictly below this
            percentage
    """
    point: GroundPoint
    window: DateWindow
    max_cloud_cover: float

    def __post_init__(self):
        if not 0 <= self.max_cloud_cover <= 100:
            raise ValueError(
                f"max_cloud_cover must be between 0 and 100, got {self.max_cloud_cover}"
            )

    @property
    def start(self) -> datetime:
        return self.window.start

    @property
    def end(self) -> datetime:
        return self.window.end


@dataclass(frozen=True)
class SceneRecord:
    """Read-only view of one catalog scene.

    Attributes:
        scene_id: Catalog identifier of the scene
        acquisition_date: Acquisition timestamp as reported by the catalog
        cloud_cover: Scene cloud cover percentage
        platform: Satellite platform name (e.g. "LANDSAT_9")
        path: WRS-2 path
        row: WRS-2 row
        quality: Catalog quality flag, if reported
        assets: Logical asset key -> href
    """
    scene_id: str
    acquisition_date: str | None
    cloud_cover: float | None
    platform: str | None
    path: str | None
    row: str | None
    quality: Any = None
    assets: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))

    @classmethod
    def from_feature(cls, feature: Mapping[str, Any]) -> SceneRecord:
        """Build a record from a STAC item (GeoJSON Feature)."""
        properties = feature.get("properties") or {}
        assets = {
            key: asset["href"]
            for key, asset in (feature.get("assets") or {}).items()
            if isinstance(asset, Mapping) and asset.get("href")
        }
        return cls(
            scene_id=str(feature.get("id", "")),
            acquisition_date=properties.get("datetime"),
            cloud_cover=properties.get("eo:cloud_cover"),
            platform=properties.get("platform"),
            path=properties.get("landsat:wrs_path"),
            row=properties.get("landsat:wrs_row"),
            quality=properties.get("landsat:quality"),
            assets=assets,
        )

    def metadata(self) -> dict[str, Any]:
        """Scene metadata summary for reports."""
        return {
            "scene_id": self.scene_id,
            "acquisition_date": self.acquisition_date,
            "cloud_cover": self.cloud_cover,
            "satellite": self.platform,
            "path": self.path,
            "row": self.row,
            "quality": self.quality,
        }
