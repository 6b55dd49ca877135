"""Tests for surface reflectance band resolution."""

from unittest.mock import MagicMock

import requests

from landsat_overpass.catalog.assets import AssetAccessChecker
from landsat_overpass.catalog.resolver import BandResolver
from landsat_overpass.core.bands import BAND_MAPPING

from conftest import FakeChecker, asset_url, make_scene, mock_response

SCENE_ID = "LC09_L2SP_033032_20240512_20240513_02_T1"


class TestBandMapping:

    def test_seven_fixed_codes(self):
        assert list(BAND_MAPPING) == [f"SR_B{i}" for i in range(1, 8)]
        assert BAND_MAPPING["SR_B1"] == "coastal"
        assert BAND_MAPPING["SR_B5"] == "nir08"
        assert BAND_MAPPING["SR_B7"] == "swir22"


class TestBandResolver:

    def test_all_bands(self):
        bands = BandResolver().resolve_bands(make_scene())
        assert list(bands) == list(BAND_MAPPING)
        assert bands["SR_B4"] == asset_url(SCENE_ID, "red")

    def test_only_mapped_codes_reported(self):
        scene = make_scene(extra_assets=["qa_pixel", "thumbnail", "lwir11"])
        bands = BandResolver().resolve_bands(scene)
        assert set(bands) <= set(BAND_MAPPING)
        assert len(bands) == 7

    def test_missing_assets_omitted(self):
        scene = make_scene(asset_keys=["red", "nir08"])
        assert BandResolver().resolve_bands(scene) == {
            "SR_B4": asset_url(SCENE_ID, "red"),
            "SR_B5": asset_url(SCENE_ID, "nir08"),
        }

    def test_no_matching_assets_is_empty_not_error(self):
        scene = make_scene(asset_keys=[], extra_assets=["thumbnail"])
        assert BandResolver().resolve_bands(scene) == {}

    def test_unreachable_assets_omitted(self):
        checker = FakeChecker({asset_url(SCENE_ID, "blue"), asset_url(SCENE_ID, "swir16")})
        bands = BandResolver(checker).resolve_bands(make_scene())
        assert set(bands) == {"SR_B1", "SR_B3", "SR_B4", "SR_B5", "SR_B7"}
        assert len(checker.checked) == 7

    def test_all_unreachable_is_empty(self):
        scene = make_scene()
        checker = FakeChecker(set(scene.assets.values()))
        assert BandResolver(checker).resolve_bands(scene) == {}


class TestAssetAccessChecker:

    def _checker(self, token="", response=None, error=None):
        session = MagicMock()
        if error is not None:
            session.head.side_effect = error
        else:
            session.head.return_value = response
        return AssetAccessChecker(token, session=session), session

    def test_reachable(self):
        checker, session = self._checker(response=mock_response(200))
        assert checker.is_reachable("https://example.com/a.TIF")
        assert session.head.call_args.kwargs["headers"] == {}

    def test_token_sent(self):
        checker, session = self._checker("secret", response=mock_response(200))
        checker.is_reachable("https://example.com/a.TIF")
        assert session.head.call_args.kwargs["headers"] == {"X-Auth-Token": "secret"}

    def test_error_status(self):
        checker, _ = self._checker(response=mock_response(403))
        assert not checker.is_reachable("https://example.com/a.TIF")

    def test_network_failure(self):
        checker, _ = self._checker(error=requests.Timeout("slow"))
        assert not checker.is_reachable("https://example.com/a.TIF")
