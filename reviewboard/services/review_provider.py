"""Review providers: the bundled mock data set and the Hostaway API.

Swap providers with the REVIEW_PROVIDER setting ('mock' or 'hostaway').
"""

import json
import logging

import requests

from reviewboard.config import PROVIDER_HOSTAWAY, PROVIDER_MOCK
from reviewboard.errors import ReviewProviderError, ServiceNotConfiguredError
from reviewboard.models import Review

logger = logging.getLogger(__name__)


class ReviewProvider:
    """Supplies the full list of review records for one request."""

    name = 'base'

    def fetch_reviews(self) -> list[Review]:
        raise NotImplementedError


def _parse_reviews(items, source):
    if not isinstance(items, list):
        raise ReviewProviderError(f'{source} returned a non-list review payload')
    try:
        return [Review.from_dict(item) for item in items]
    except (KeyError, TypeError, ValueError) as e:
        raise ReviewProviderError(f'{source} returned a malformed review: {e}')


class MockReviewProvider(ReviewProvider):
    """Reads reviews from a JSON file (the sandbox account has no reviews)."""

    name = PROVIDER_MOCK

    def __init__(self, path):
        self.path = path

    def fetch_reviews(self):
        try:
            with open(self.path, encoding='utf-8') as fh:
                items = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f'Could not read mock reviews from {self.path}: {e}')
            raise ReviewProviderError('Failed to fetch reviews')
        return _parse_reviews(items, 'Mock data set')


class HostawayReviewProvider(ReviewProvider):
    """Fetches reviews from the Hostaway API."""

    name = PROVIDER_HOSTAWAY

    def __init__(self, base_url, account_id, api_key, timeout=5.0):
        if not account_id or not api_key:
            raise ServiceNotConfiguredError('Hostaway API credentials are not configured')
        self.base_url = base_url.rstrip('/')
        self.account_id = account_id
        self.api_key = api_key
        self.timeout = timeout

    def fetch_reviews(self):
        url = f'{self.base_url}/reviews'
        headers = {'Authorization': f'Bearer {self.api_key}'}
        params = {'accountId': self.account_id}

        try:
            response = requests.get(url, headers=headers, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout:
            logger.warning('Hostaway timeout')
            raise ReviewProviderError('Failed to fetch reviews')
        except (requests.RequestException, ValueError) as e:
            logger.warning(f'Hostaway error: {e}')
            raise ReviewProviderError('Failed to fetch reviews')

        if not isinstance(payload, dict) or payload.get('status') != 'success':
            logger.warning('Hostaway unexpected response format')
            raise ReviewProviderError('Failed to fetch reviews')

        return _parse_reviews(payload.get('result') or [], 'Hostaway')


def build_review_provider(settings) -> ReviewProvider:
    """Create the provider selected by settings."""
    if settings.review_provider == PROVIDER_HOSTAWAY:
        return HostawayReviewProvider(
            settings.hostaway_api_url,
            settings.hostaway_account_id,
            settings.hostaway_api_key,
            timeout=settings.http_timeout,
        )
    return MockReviewProvider(settings.mock_reviews_path)
