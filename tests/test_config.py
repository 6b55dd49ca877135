"""Tests for environment configuration and element overrides."""

import pytest

from landsat_overpass.catalog.stac import LANDSATLOOK_STAC_URL, SURFACE_REFLECTANCE_COLLECTION
from landsat_overpass.config import OverpassConfig
from landsat_overpass.core.errors import ConfigurationError
from landsat_overpass.core.satellites import LANDSAT_8, LANDSAT_9, load_elements

L8_LINE1 = "1 39084U 13008A   24140.50000000  .00000300  00000-0  76000-4 0  9991"
L8_LINE2 = "2 39084  98.2000 210.0000 0001200  90.0000 270.1000 14.57100000600000"


class TestLoadElements:

    def test_defaults(self):
        assert load_elements({}) == [LANDSAT_8, LANDSAT_9]

    def test_override_requires_both_lines(self):
        assert load_elements({"LANDSAT8_TLE_LINE1": L8_LINE1}) == [LANDSAT_8, LANDSAT_9]

    def test_override(self):
        elements = load_elements({"LANDSAT8_TLE_LINE1": L8_LINE1, "LANDSAT8_TLE_LINE2": L8_LINE2})
        assert elements[0].name == "Landsat 8"
        assert elements[0].line1 == L8_LINE1
        assert elements[0].catalog_number == "39084"
        assert elements[1] == LANDSAT_9


class TestOverpassConfig:

    def test_defaults(self):
        config = OverpassConfig.from_env({})
        assert config.stac_url == LANDSATLOOK_STAC_URL
        assert config.collection == SURFACE_REFLECTANCE_COLLECTION
        assert config.auth_token == ""
        assert config.verify_assets is False
        assert config.nasa_api_key == "DEMO_KEY"
        assert config.search_timeout is None
        assert config.default_cloud_cover == 70
        assert config.grid_max_workers == 4

    def test_environment(self):
        config = OverpassConfig.from_env({
            "LANDSAT_STAC_URL": "https://stac.example.com",
            "LANDSAT_COLLECTION": "landsat-c2l1",
            "LANDSAT_AUTH_TOKEN": "secret",
            "LANDSAT_VERIFY_ASSETS": "Yes",
            "NASA_API_KEY": "abc",
            "OVERPASS_SEARCH_TIMEOUT": "2.5",
        })
        assert config.stac_url == "https://stac.example.com"
        assert config.collection == "landsat-c2l1"
        assert config.auth_token == "secret"
        assert config.verify_assets is True
        assert config.nasa_api_key == "abc"
        assert config.search_timeout == 2.5

    def test_keyword_overrides_environment(self):
        config = OverpassConfig.from_env({"NASA_API_KEY": "abc"}, nasa_api_key="xyz", grid_max_workers=9)
        assert config.nasa_api_key == "xyz"
        assert config.grid_max_workers == 9

    @pytest.mark.parametrize("value", ["soon", "0", "-5"])
    def test_bad_search_timeout(self, value):
        with pytest.raises(ConfigurationError, match="OVERPASS_SEARCH_TIMEOUT"):
            OverpassConfig.from_env({"OVERPASS_SEARCH_TIMEOUT": value})
