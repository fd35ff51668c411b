"""Shared pytest fixtures for the Nephranet tests."""

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from werkzeug.security import generate_password_hash

from nephranet import create_app
from nephranet.config import TestConfig
from nephranet.errors import GeocodingError, StoreError
from nephranet.extensions import db
from nephranet.models import User, WaterQualityReading, ReadingRecord


KNOWN_PLACES = {
    'Kathmandu': (27.7172, 85.324),
    'Pokhara': (28.2096, 83.9856),
    'Chitwan': (27.5291, 84.3542),
}


class FakeGeocoder:
    """Geocoder that knows a handful of places and records every lookup."""

    def __init__(self, places=None):
        self.places = dict(KNOWN_PLACES if places is None else places)
        self.calls = []

    def geocode(self, place):
        self.calls.append(place)
        if place not in self.places:
            raise GeocodingError('Location not found')
        return self.places[place]


class MemoryStore:
    """In-process reading store for service tests."""

    def __init__(self, records=None):
        self.records = list(records or [])

    def list_readings(self):
        return sorted(self.records, key=lambda r: r.created_at, reverse=True)

    def add_reading(self, user_id, username, location, ph, turbidity, latitude, longitude):
        record = ReadingRecord(
            id=len(self.records) + 1,
            user_id=str(user_id),
            location=location,
            username=username,
            ph=ph,
            turbidity=turbidity,
            latitude=latitude,
            longitude=longitude,
            created_at=datetime(2024, 6, 1) + timedelta(minutes=len(self.records)),
        )
        self.records.append(record)
        return record


class FailingStore:
    def list_readings(self):
        raise StoreError('Failed to fetch readings')

    def add_reading(self, **kwargs):
        raise StoreError('Failed to upload data')


def make_record(id, location='Kathmandu', username='asha', ph=7.0, turbidity=0.5,
                latitude=27.7172, longitude=85.324, created_at=None):
    return ReadingRecord(
        id=id,
        user_id='1',
        location=location,
        username=username,
        ph=ph,
        turbidity=turbidity,
        latitude=latitude,
        longitude=longitude,
        created_at=created_at or datetime(2024, 1, 1) + timedelta(days=id),
    )


@pytest.fixture()
def geocoder():
    return FakeGeocoder()


@pytest.fixture()
def app(geocoder):
    app = create_app(TestConfig, geocoder=geocoder)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def failing_app(geocoder):
    app = create_app(TestConfig, store=FailingStore(), geocoder=geocoder)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def user(app):
    """A registered contributor (returned as plain values, not an ORM object)."""
    with app.app_context():
        u = User(email='asha@example.com', name='Asha', password_hash=generate_password_hash('secret1'))
        db.session.add(u)
        db.session.commit()
        return SimpleNamespace(id=u.id, email=u.email, password='secret1', display_name='Asha')


@pytest.fixture()
def auth_client(client, user):
    r = client.post('/login', data={'email': user.email, 'password': user.password})
    assert r.status_code == 302
    return client


@pytest.fixture()
def seeded_readings(app):
    """Three stored readings, one without coordinates."""
    rows = [
        WaterQualityReading(user_id='1', username='asha', location='Kathmandu', ph=7.0, turbidity=0.5,
                            latitude=27.7172, longitude=85.324, created_at=datetime(2024, 3, 1, 9, 0)),
        WaterQualityReading(user_id='2', username='bikash', location='Pokhara', ph=6.2, turbidity=3.0,
                            latitude=28.2096, longitude=83.9856, created_at=datetime(2024, 3, 2, 9, 0)),
        WaterQualityReading(user_id='2', username='bikash', location='Birgunj', ph=9.8, turbidity=30.0,
                            latitude=None, longitude=None, created_at=datetime(2024, 3, 3, 9, 0)),
    ]
    with app.app_context():
        db.session.add_all(rows)
        db.session.commit()
    return rows
