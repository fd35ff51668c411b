"""
Geocoding Service

Forward geocoding of free-text place names through the OpenCage API.
"""

import logging

import requests
from flask import current_app

from nephranet.errors import GeocodingError

logger = logging.getLogger(__name__)

GEOCODER_EXTENSION_KEY = 'nephranet.geocoder'


class OpenCageGeocoder:
    """Turn a location name into (latitude, longitude), one country only."""

    def __init__(self, api_key, base_url='https://api.opencagedata.com/geocode/v1/json',
                 country_code='np', timeout=5, session=None):
        self.api_key = api_key
        self.base_url = base_url
        self.country_code = country_code
        self.timeout = timeout
        self._session = session or requests.Session()

    def geocode(self, place):
        """Return the coordinates of the best match for `place`.

        Raises:
            GeocodingError: key missing, service unreachable or no match
        """
        if not self.api_key:
            raise GeocodingError('OpenCage API key not configured')

        params = {
            'q': place,
            'key': self.api_key,
            'countrycode': self.country_code,
            'limit': 1
        }
        try:
            resp = self._session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning('Geocoding request failed for %r: %s', place, e)
            raise GeocodingError('Geocoding service unavailable') from e

        if resp.status_code != 200:
            logger.warning('Geocoding error %s for %r', resp.status_code, place)
            raise GeocodingError('Geocoding service unavailable')

        try:
            data = resp.json()
        except ValueError as e:
            raise GeocodingError('Geocoding service unavailable') from e
        if not isinstance(data, dict):
            logger.warning('Unexpected geocoding payload for %r: %s', place, type(data).__name__)
            raise GeocodingError('Geocoding service unavailable')

        results = data.get('results') or []
        if not isinstance(results, list) or not results:
            raise GeocodingError('Location not found')

        try:
            geometry = results[0]['geometry']
            lat = float(geometry['lat'])
            lng = float(geometry['lng'])
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError('Location not found') from e

        logger.debug('Geocoded %r to (%s, %s)', place, lat, lng)
        return lat, lng


def build_geocoder(config):
    return OpenCageGeocoder(
        config.get('OPENCAGE_API_KEY'),
        base_url=config.get('OPENCAGE_URL', 'https://api.opencagedata.com/geocode/v1/json'),
        country_code=config.get('GEOCODER_COUNTRY_CODE', 'np'),
        timeout=config.get('GEOCODER_TIMEOUT', 5)
    )


def get_geocoder():
    """Geocoder attached to the current app."""
    return current_app.extensions[GEOCODER_EXTENSION_KEY]
