from unittest import mock

import pytest
import requests

from apps.listings.geocoding import MapboxGeocoder, get_geocoder
from shared.domain.errors import GeocodingFailed
from shared.domain.value_objects import Coordinates


def _response(payload=None, status_code=200, json_error=None):
    response = mock.Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code}")
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def geocoder():
    return MapboxGeocoder(token="secret", base_url="https://geo.example.com/places/", timeout=3)


def test_geocode_returns_first_feature(geocoder):
    payload = {"features": [{"geometry": {"type": "Point", "coordinates": [2.35, 48.85]}}]}
    with mock.patch("apps.listings.geocoding.requests.get", return_value=_response(payload)) as get:
        result = geocoder.geocode("Paris, France")

    assert result == Coordinates(longitude=2.35, latitude=48.85)
    get.assert_called_once_with(
        "https://geo.example.com/places/Paris%2C%20France.json",
        params={"access_token": "secret", "limit": 1},
        timeout=3,
    )


def test_geocode_without_features_fails(geocoder):
    with mock.patch("apps.listings.geocoding.requests.get", return_value=_response({"features": []})):
        with pytest.raises(GeocodingFailed):
            geocoder.geocode("Nowhere at all")


@pytest.mark.parametrize(
    "side_effect",
    [requests.exceptions.Timeout("slow"), requests.exceptions.ConnectionError("down")],
)
def test_geocode_transport_errors_fail(geocoder, side_effect):
    with mock.patch("apps.listings.geocoding.requests.get", side_effect=side_effect):
        with pytest.raises(GeocodingFailed):
            geocoder.geocode("Paris")


def test_geocode_http_error_fails(geocoder):
    with mock.patch("apps.listings.geocoding.requests.get", return_value=_response(status_code=401)):
        with pytest.raises(GeocodingFailed):
            geocoder.geocode("Paris")


def test_geocode_invalid_json_fails(geocoder):
    response = _response(json_error=ValueError("not json"))
    with mock.patch("apps.listings.geocoding.requests.get", return_value=response):
        with pytest.raises(GeocodingFailed):
            geocoder.geocode("Paris")


def test_geocode_out_of_range_feature_fails(geocoder):
    payload = {"features": [{"geometry": {"coordinates": [500, 10]}}]}
    with mock.patch("apps.listings.geocoding.requests.get", return_value=_response(payload)):
        with pytest.raises(GeocodingFailed):
            geocoder.geocode("Paris")


def test_blank_location_never_calls_provider(geocoder):
    with mock.patch("apps.listings.geocoding.requests.get") as get:
        with pytest.raises(GeocodingFailed):
            geocoder.geocode("   ")
    get.assert_not_called()


def test_failure_message_hides_provider_details(geocoder):
    with mock.patch(
        "apps.listings.geocoding.requests.get",
        side_effect=requests.exceptions.ConnectionError("secret-token leaked"),
    ):
        with pytest.raises(GeocodingFailed) as excinfo:
            geocoder.geocode("Paris")
    assert "secret" not in excinfo.value.message


def test_get_geocoder_uses_configured_backend(settings):
    settings.GEOCODER_BACKEND = "apps.listings.geocoding.MapboxGeocoder"
    settings.MAPBOX_TOKEN = "configured"
    backend = get_geocoder()
    assert isinstance(backend, MapboxGeocoder)
    assert backend.token == "configured"
