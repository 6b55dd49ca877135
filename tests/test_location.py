"""Tests for ground points and location resolution."""

from unittest.mock import MagicMock

import pytest
import requests

from landsat_overpass.core.errors import InvalidLocation
from landsat_overpass.core.location import (
    GroundPoint,
    NominatimGeocoder,
    parse_coordinates,
    resolve_location,
)

from conftest import mock_response


class TestGroundPoint:

    def test_valid_point(self):
        point = GroundPoint(latitude=40.0, longitude=-105.0)
        assert point.latitude == 40.0
        assert point.longitude == -105.0

    def test_bounds_are_inclusive(self):
        GroundPoint(latitude=90, longitude=180)
        GroundPoint(latitude=-90, longitude=-180)

    @pytest.mark.parametrize("lat, lon", [(90.1, 0), (-91, 0), (0, 180.5), (0, -181)])
    def test_out_of_range_rejected(self, lat, lon):
        with pytest.raises(InvalidLocation):
            GroundPoint(latitude=lat, longitude=lon)

    def test_invalid_location_is_value_error(self):
        with pytest.raises(ValueError):
            GroundPoint(latitude=100, longitude=0)

    def test_frozen(self):
        point = GroundPoint(1.0, 2.0)
        with pytest.raises(AttributeError):
            point.latitude = 3.0

    def test_name_not_part_of_equality(self):
        assert GroundPoint(1.0, 2.0, name="a") == GroundPoint(1.0, 2.0, name="b")

    def test_geojson_is_lon_lat(self):
        assert GroundPoint(40.0, -105.0).to_geojson() == {
            "type": "Point", "coordinates": [-105.0, 40.0],
        }


class TestParseCoordinates:

    def test_parses_with_whitespace(self):
        assert parse_coordinates(" 40.0 , -105.0 ") == GroundPoint(40.0, -105.0)

    @pytest.mark.parametrize("text", ["40.0", "40,-105,3", "north,west", "40.0,"])
    def test_malformed(self, text):
        with pytest.raises(InvalidLocation):
            parse_coordinates(text)

    def test_out_of_range(self):
        with pytest.raises(InvalidLocation):
            parse_coordinates("95,10")


class FakeGeocoder:

    def __init__(self, point=None):
        self.point = point
        self.queries = []

    def geocode(self, text):
        self.queries.append(text)
        return self.point


class TestResolveLocation:

    def test_coordinates_skip_geocoder(self):
        geocoder = FakeGeocoder()
        assert resolve_location("40.0,-105.0", geocoder) == GroundPoint(40.0, -105.0)
        assert geocoder.queries == []

    def test_place_name_uses_geocoder(self):
        geocoder = FakeGeocoder(GroundPoint(39.7392, -104.9903, name="Denver"))
        point = resolve_location("Denver", geocoder)
        assert point.name == "Denver"
        assert geocoder.queries == ["Denver"]

    def test_ungeocodable_rejected(self):
        with pytest.raises(InvalidLocation):
            resolve_location("Atlantis", FakeGeocoder(None))

    def test_empty_rejected(self):
        with pytest.raises(InvalidLocation):
            resolve_location("  ", FakeGeocoder())


class TestNominatimGeocoder:

    def _geocoder(self, response=None, error=None):
        session = MagicMock()
        if error is not None:
            session.get.side_effect = error
        else:
            session.get.return_value = response
        return NominatimGeocoder(session=session), session

    def test_first_result(self):
        geocoder, session = self._geocoder(mock_response(200, [
            {"lat": "39.7392", "lon": "-104.9903", "display_name": "Denver, Colorado, USA"},
        ]))
        point = geocoder.geocode("Denver")
        assert point == GroundPoint(39.7392, -104.9903)
        assert point.name == "Denver"
        assert session.get.call_args.kwargs["params"]["q"] == "Denver"

    def test_no_results(self):
        geocoder, _ = self._geocoder(mock_response(200, []))
        assert geocoder.geocode("Atlantis") is None

    def test_http_error_status(self):
        geocoder, _ = self._geocoder(mock_response(503, None))
        assert geocoder.geocode("Denver") is None

    def test_network_failure(self):
        geocoder, _ = self._geocoder(error=requests.ConnectionError("down"))
        assert geocoder.geocode("Denver") is None

    def test_malformed_payload(self):
        geocoder, _ = self._geocoder(mock_response(200, [{"lat": "x"}]))
        assert geocoder.geocode("Denver") is None
