"""
Reading Store Services

The reading store is created by the application factory and handed to
every service function that needs it.
"""

import logging

import requests
from flask import current_app

from nephranet.errors import StoreError
from nephranet.extensions import db
from nephranet.models import WaterQualityReading, ReadingRecord

logger = logging.getLogger(__name__)

STORE_EXTENSION_KEY = 'nephranet.store'


class SqlReadingStore:
    """Readings kept in the application database via Flask-SQLAlchemy."""

    def list_readings(self):
        try:
            rows = WaterQualityReading.query\
                .order_by(WaterQualityReading.created_at.desc(), WaterQualityReading.id.desc()).all()
        except Exception as e:
            logger.exception('Could not load readings: %s', e)
            raise StoreError('Failed to fetch readings') from e
        return [row.to_record() for row in rows]

    def add_reading(self, user_id, username, location, ph, turbidity, latitude, longitude):
        reading = WaterQualityReading(
            user_id=str(user_id),
            username=username,
            location=location,
            ph=ph,
            turbidity=turbidity,
            latitude=latitude,
            longitude=longitude
        )
        try:
            db.session.add(reading)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.exception('Could not save reading: %s', e)
            raise StoreError('Failed to upload data') from e
        return reading.to_record()


class RestReadingStore:
    """Readings kept in a hosted PostgREST table (e.g. Supabase)."""

    def __init__(self, base_url, api_key, table='wqi_uploads', timeout=6, session=None):
        if not base_url or not api_key:
            raise StoreError('Missing data store URL or key')
        self.url = f"{base_url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            'apikey': api_key,
            'Authorization': f'Bearer {api_key}',
            'Accept': 'application/json',
        })

    def list_readings(self):
        params = {'select': '*', 'order': 'created_at.desc'}
        rows = self._request('GET', params=params)
        if not isinstance(rows, list):
            raise StoreError('Data store returned an invalid response')
        try:
            return [ReadingRecord.from_row(row) for row in rows]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise StoreError('Data store returned an invalid response') from e

    def add_reading(self, user_id, username, location, ph, turbidity, latitude, longitude):
        payload = {
            'user_id': str(user_id),
            'username': username,
            'location': location,
            'ph': ph,
            'turbidity': turbidity,
            'latitude': latitude,
            'longitude': longitude
        }
        rows = self._request('POST', json=payload, headers={'Prefer': 'return=representation'})
        if not isinstance(rows, list) or not rows:
            raise StoreError('Data store did not return the saved reading')
        try:
            return ReadingRecord.from_row(rows[0])
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise StoreError('Data store returned an invalid response') from e

    def _request(self, method, **kwargs):
        kwargs.setdefault('timeout', self.timeout)
        try:
            resp = self._session.request(method, self.url, **kwargs)
        except requests.exceptions.Timeout as e:
            logger.warning('Data store request timed out: %s %s', method, self.url)
            raise StoreError('Data store request timed out') from e
        except requests.exceptions.RequestException as e:
            logger.warning('Data store unreachable: %s', e)
            raise StoreError('Data store unavailable') from e

        if not 200 <= resp.status_code < 300:
            logger.warning('Data store error %s: %s', resp.status_code, resp.text[:200])
            raise StoreError(f'Data store error {resp.status_code}', status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise StoreError('Data store returned an invalid response') from e


def build_store(config):
    """Create the reading store selected by READING_STORE."""
    kind = (config.get('READING_STORE') or 'sql').lower()
    if kind == 'sql':
        return SqlReadingStore()
    if kind == 'rest':
        return RestReadingStore(
            config.get('SUPABASE_URL'),
            config.get('SUPABASE_KEY'),
            table=config.get('SUPABASE_TABLE', 'wqi_uploads'),
            timeout=config.get('STORE_TIMEOUT', 6)
        )
    raise ValueError(f'Unknown READING_STORE: {kind}')


def get_store():
    """Reading store attached to the current app."""
    return current_app.extensions[STORE_EXTENSION_KEY]
