"""Shared fixtures and fakes for the test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from landsat_overpass.catalog.models import SceneQuery, SceneRecord
from landsat_overpass.core.bands import BAND_MAPPING
from landsat_overpass.core.errors import PropagationError
from landsat_overpass.core.location import GroundPoint

START = datetime(2024, 5, 20, 15, 0, 0, tzinfo=timezone.utc)
STEP = timedelta(minutes=1)

# Far from any target used in the tests
NOWHERE = GroundPoint(latitude=-60.0, longitude=170.0)


class FakeModel:
    """Orbit model whose sub-point is a function of the step index."""

    def __init__(self, name: str, track: Callable[[int], GroundPoint | None],
                 start: datetime = START, step: timedelta = STEP):
        self.name = name
        self.track = track
        self.start = start
        self.step = step
        self.calls = 0

    def sub_point_at(self, instant: datetime) -> GroundPoint:
        self.calls += 1
        k = round((instant - self.start) / self.step)
        point = self.track(k)
        if point is None:
            raise PropagationError(f"breakdown at step {k}")
        return point


class BrokenModel:
    """Orbit model that fails to propagate at every instant."""

    def __init__(self, name: str):
        self.name = name

    def sub_point_at(self, instant: datetime) -> GroundPoint:
        raise PropagationError("decayed")


class FakeCatalog:
    """Scene catalog returning canned candidates and recording queries."""

    def __init__(self, scenes: list[SceneRecord] | None = None, error: Exception | None = None):
        self.scenes = scenes or []
        self.error = error
        self.queries: list[SceneQuery] = []

    def search(self, query: SceneQuery) -> list[SceneRecord]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.scenes)


class FakeChecker:
    """Accessibility check that rejects a fixed set of URLs."""

    def __init__(self, unreachable: set[str] | None = None):
        self.unreachable = unreachable or set()
        self.checked: list[str] = []

    def is_reachable(self, url: str) -> bool:
        self.checked.append(url)
        return url not in self.unreachable


def asset_url(scene_id: str, asset_key: str) -> str:
    return f"https://landsatlook.usgs.gov/data/{scene_id}/{scene_id}_{asset_key}.TIF"


def make_feature(scene_id: str = "LC09_L2SP_033032_20240512_20240513_02_T1",
                 cloud_cover: float = 12, asset_keys=None, extra_assets=None) -> dict:
    """A landsat-c2l2-sr STAC item."""
    asset_keys = list(BAND_MAPPING.values()) if asset_keys is None else asset_keys
    assets = {key: {"href": asset_url(scene_id, key)} for key in asset_keys}
    for key in extra_assets or []:
        assets[key] = {"href": asset_url(scene_id, key)}
    return {
        "type": "Feature",
        "id": scene_id,
        "properties": {
            "datetime": "2024-05-12T17:40:12.123456Z",
            "eo:cloud_cover": cloud_cover,
            "platform": "LANDSAT_9",
            "landsat:wrs_path": "033",
            "landsat:wrs_row": "032",
        },
        "assets": assets,
    }


def make_scene(**kwargs) -> SceneRecord:
    return SceneRecord.from_feature(make_feature(**kwargs))


def mock_response(status_code: int = 200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


@pytest.fixture
def denver() -> GroundPoint:
    return GroundPoint(latitude=40.0, longitude=-105.0)
