"""Geocoding adapter: free-text location to coordinates."""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

import requests
from django.conf import settings  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

from shared.domain.errors import GeocodingFailed
from shared.domain.value_objects import Coordinates

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    def geocode(self, text: str) -> Coordinates:
        ...


class MapboxGeocoder:
    """Forward geocoding through the Mapbox Places API."""

    def __init__(self, token: str | None = None, base_url: str | None = None, timeout: float | None = None):
        self.token = token if token is not None else settings.MAPBOX_TOKEN
        self.base_url = (base_url or settings.MAPBOX_GEOCODING_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.GEOCODING_TIMEOUT

    def geocode(self, text: str) -> Coordinates:
        query = (text or "").strip()
        if not query:
            raise GeocodingFailed("A location is required.")

        url = f"{self.base_url}/{quote(query, safe='')}.json"
        try:
            response = requests.get(
                url,
                params={"access_token": self.token, "limit": 1},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.Timeout as e:
            logger.warning(f"Geocoding timed out after {self.timeout}s for {query!r}")
            raise GeocodingFailed() from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Geocoding request failed for {query!r}: {e}")
            raise GeocodingFailed() from e
        except ValueError as e:
            logger.error(f"Geocoding returned invalid JSON for {query!r}: {e}")
            raise GeocodingFailed() from e

        features = payload.get("features") or []
        if not features:
            logger.info(f"No geocoding result for {query!r}")
            raise GeocodingFailed()

        try:
            longitude, latitude = features[0]["geometry"]["coordinates"][:2]
            return Coordinates(longitude=float(longitude), latitude=float(latitude))
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unusable geocoding feature for {query!r}: {e}")
            raise GeocodingFailed() from e


def get_geocoder() -> Geocoder:
    return import_string(settings.GEOCODER_BACKEND)()
