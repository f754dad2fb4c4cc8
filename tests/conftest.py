"""
Pytest configuration and fixtures for testing the reviews dashboard API.
"""

import itertools
from datetime import timedelta, timezone

import pytest
from faker import Faker

from reviewboard import create_app
from reviewboard.config import Settings
from reviewboard.models import Review, ReviewCategory
from reviewboard.models.review import format_timestamp
from reviewboard.services.google_places import GooglePlacesClient

fake = Faker()

CHANNELS = ['Airbnb', 'Booking.com', 'Google', 'Direct']


@pytest.fixture
def settings():
    """Settings that do not depend on the environment."""
    return Settings(google_places_api_key='', http_timeout=1.0, log_level='WARNING')


@pytest.fixture
def app(settings):
    """Create application for testing with the bundled mock data set."""
    return create_app('testing', settings=settings)


@pytest.fixture
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture
def configured_places_app(settings):
    """App whose Google Places client has an API key."""
    places_client = GooglePlacesClient('test-places-key', timeout=1.0)
    return create_app('testing', settings=settings, places_client=places_client)


@pytest.fixture
def configured_places_client(configured_places_app):
    return configured_places_app.test_client()


_ids = itertools.count(1)


def make_review(**overrides):
    """Helper to create a review with sensible random defaults."""
    rating = overrides.pop('rating', fake.random_int(min=1, max=10))
    submitted = fake.date_time_between(start_date='-1y', end_date='now', tzinfo=timezone.utc)
    data = {
        'id': next(_ids),
        'type': 'guest-to-host',
        'status': 'published',
        'rating': rating,
        'public_review': fake.sentence(nb_words=10),
        'review_category': (
            ReviewCategory('cleanliness', rating),
            ReviewCategory('communication', fake.random_int(min=1, max=10)),
        ),
        'submitted_at': format_timestamp(submitted),
        'guest_name': fake.name(),
        'listing_name': 'Listing 1',
        'listing_id': 1,
        'channel': fake.random_element(CHANNELS),
        'approved': fake.pybool(),
    }
    data.update(overrides)
    return Review(**data)


def make_reviews(count, start=None, **overrides):
    """Create reviews with strictly decreasing submission times."""
    start = start or fake.date_time_between(start_date='-30d', end_date='now', tzinfo=timezone.utc)
    return [
        make_review(submitted_at=format_timestamp(start - timedelta(hours=i)), **overrides)
        for i in range(count)
    ]


@pytest.fixture
def review_factory():
    return make_review


@pytest.fixture
def example_reviews():
    """The three-review example: ratings 8, 9, 10."""
    return [
        make_review(id=1, rating=8, approved=True, channel='Airbnb',
                    submitted_at='2024-01-01T10:00:00.000Z'),
        make_review(id=2, rating=9, approved=False, channel='Google',
                    submitted_at='2024-03-01T10:00:00.000Z'),
        make_review(id=3, rating=10, approved=True, channel='Airbnb',
                    submitted_at='2024-02-01T10:00:00.000Z'),
    ]


class StubProvider:
    """Review provider returning a fixed list, or raising."""

    name = 'stub'

    def __init__(self, reviews=None, error=None):
        self.reviews = reviews or []
        self.error = error
        self.calls = 0

    def fetch_reviews(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.reviews)


@pytest.fixture
def stub_provider_app(settings):
    """Factory: app backed by a StubProvider."""
    def _make(reviews=None, error=None):
        provider = StubProvider(reviews, error)
        return create_app('testing', settings=settings, review_provider=provider), provider
    return _make


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200, json_error=None):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    def raise_for_status(self):
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error')
