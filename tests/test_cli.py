"""Tests for the command-line interface."""

import json
from datetime import timedelta

import pytest
from click.testing import CliRunner

from landsat_overpass.analysis.analyzer import LandsatAnalyzer
from landsat_overpass.catalog.matcher import SceneMatcher
from landsat_overpass.catalog.models import SceneRecord
from landsat_overpass.catalog.resolver import BandResolver
from landsat_overpass.cli.main import cli
from landsat_overpass.config import OverpassConfig
from landsat_overpass.core.errors import CatalogError
from landsat_overpass.core.location import GroundPoint
from landsat_overpass.core.passes import OverpassResult

from conftest import START, FakeCatalog, make_feature, make_scene

PASS_TIME = START + timedelta(hours=3)


class StubScheduler:
    """Scheduler returning fixed predictions."""

    def __init__(self):
        self.calls = []

    def predict(self, target, start=None, cancel=None, refine=False):
        self.calls.append({"target": target, "refine": refine})
        return [
            OverpassResult("Landsat 8", PASS_TIME),
            OverpassResult("Landsat 9", None, error="decayed"),
        ]


class StubGeocoder:

    def geocode(self, text):
        if text == "Denver":
            return GroundPoint(39.74, -104.99, name="Denver, Colorado")
        return None


@pytest.fixture
def scheduler():
    return StubScheduler()


def run(args, catalog=None, scheduler=None):
    analyzer = LandsatAnalyzer(
        scheduler=scheduler or StubScheduler(),
        matcher=SceneMatcher(catalog or FakeCatalog([make_scene()])),
        resolver=BandResolver(),
        geocoder=StubGeocoder(),
    )
    obj = {"analyzer": analyzer, "config": OverpassConfig.from_env({})}
    return CliRunner().invoke(cli, args, obj=obj)


class TestOverpassCommand:

    def test_json(self, scheduler):
        result = run(["-l", "40.0,-105.0", "overpass", "--json"], scheduler=scheduler)
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["location"] == "40.0, -105.0"
        assert data["overpass_times"] == [
            {"satellite": "Landsat 8", "next_overpass": PASS_TIME.isoformat(), "error": None},
            {"satellite": "Landsat 9", "next_overpass": None, "error": "decayed"},
        ]
        assert scheduler.calls[0]["refine"] is False

    def test_lat_lon_options(self, scheduler):
        result = run(["--lat", "40.0", "--lon", "-105.0", "overpass", "--refine", "--json"],
                     scheduler=scheduler)
        assert result.exit_code == 0, result.output
        assert scheduler.calls[0]["target"] == GroundPoint(40.0, -105.0)
        assert scheduler.calls[0]["refine"] is True

    def test_geocoded_table(self):
        result = run(["-l", "Denver", "overpass"])
        assert result.exit_code == 0, result.output
        assert "Landsat 8" in result.output
        assert "Unable to predict" in result.output

    def test_unknown_place(self):
        result = run(["-l", "Atlantis", "overpass"])
        assert result.exit_code == 1
        assert "Could not find location" in result.output

    def test_out_of_range_coordinates(self):
        result = run(["-l", "95.0,0.0", "overpass"])
        assert result.exit_code == 1

    def test_location_required(self):
        result = run(["overpass"])
        assert result.exit_code == 2


class TestAnalyzeCommand:

    def test_json(self):
        result = run(["-l", "40.0,-105.0", "analyze", "--cloud-cover", "20", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["status"] == "ok"
        assert data["cloud_cover"] == 20
        assert data["scene_metadata"]["scene_id"] == "LC09_L2SP_033032_20240512_20240513_02_T1"
        assert sorted(data["reflectance_data"]) == [
            "SR_B1", "SR_B2", "SR_B3", "SR_B4", "SR_B5", "SR_B6", "SR_B7",
        ]

    def test_no_scenes(self):
        result = run(["-l", "40.0,-105.0", "analyze", "--json"], catalog=FakeCatalog([]))
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["status"] == "no_scenes"
        assert data["scene_metadata"] is None
        assert len(data["overpass_times"]) == 2

    def test_bad_date_range(self):
        result = run(["-l", "40.0,-105.0", "analyze", "--date-range", "yesterday"])
        assert result.exit_code == 2

    def test_cloud_cover_out_of_range(self):
        result = run(["-l", "40.0,-105.0", "analyze", "--cloud-cover", "150"])
        assert result.exit_code == 2

    def test_catalog_unavailable(self):
        result = run(["-l", "40.0,-105.0", "analyze"],
                     catalog=FakeCatalog(error=CatalogError("503 from catalog")))
        assert result.exit_code == 3
        assert "Scene catalog unavailable" in result.output


class TestGridCommand:

    def test_json(self):
        result = run(["-l", "40.0,-105.0", "grid", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert len(data["cells"]) == 9

    def test_table(self):
        result = run(["-l", "40.0,-105.0", "grid"])
        assert result.exit_code == 0, result.output
        assert "7 bands" in result.output


class TestAnalyzeText:

    def test_acquisition_time_formatted(self):
        result = run(["-l", "40.0,-105.0", "analyze"])
        assert result.exit_code == 0, result.output
        assert "Acquired: 2024-05-12 17:40:12 UTC" in result.output

    def test_unparseable_acquisition_time_shown_raw(self):
        feature = make_feature()
        feature["properties"]["datetime"] = "sometime"
        result = run(["-l", "40.0,-105.0", "analyze"],
                     catalog=FakeCatalog([SceneRecord.from_feature(feature)]))
        assert result.exit_code == 0, result.output
        assert "Acquired: sometime" in result.output


class TestSatellitesCommand:

    def test_lists_configured_elements(self):
        result = CliRunner().invoke(cli, ["satellites"], obj={"config": OverpassConfig.from_env({})})
        assert result.exit_code == 0, result.output
        assert "Landsat 8" in result.output
        assert "Landsat 9" in result.output
        assert "43013" in result.output
        assert "49577" in result.output


def test_invalid_environment_reported():
    result = CliRunner().invoke(cli, ["satellites"], obj={},
                                env={"OVERPASS_SEARCH_TIMEOUT": "soon"})
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert "Traceback" not in result.output
