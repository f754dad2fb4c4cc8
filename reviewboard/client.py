"""HTTP client for the reviews API, as used by dashboard front ends.

Every fetch issues a sequence number first; a response is kept only if it
belongs to the most recently issued fetch.
"""

import logging

import requests

from reviewboard.errors import ReviewboardError, UpstreamUnavailableError
from reviewboard.services.sequencing import RequestSequencer

logger = logging.getLogger(__name__)

_PARAM_NAMES = {
    'property_id': 'propertyId',
    'channel': 'channel',
    'approved': 'approved',
    'min_rating': 'minRating',
    'max_rating': 'maxRating',
    'search': 'search',
    'include_stats': 'includeStats',
}


def build_query_params(**filters) -> dict:
    """Translate keyword filters into query parameters, skipping unset ones."""
    params = {}
    for key, value in filters.items():
        if key not in _PARAM_NAMES:
            raise TypeError(f'Unknown review filter: {key}')
        if value is None or value == '':
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        params[_PARAM_NAMES[key]] = str(value)
    return params


class ReviewsApiClient:
    """Fetches review listings and keeps the latest-issued result."""

    def __init__(self, base_url, session=None, timeout=5.0):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout
        self.sequencer = RequestSequencer()
        self.latest_result = None

    def _store(self, payload):
        self.latest_result = payload

    def _superseded(self, sequence):
        if self.sequencer.is_latest(sequence):
            return False
        logger.debug(f'Discarding superseded reviews response #{sequence}')
        return True

    def fetch_reviews(self, **filters):
        """Fetch /api/reviews/hostaway with the given filters.

        Returns the response payload, or None when a newer fetch was issued
        while this one was in flight.
        """
        sequence = self.sequencer.issue()
        params = build_query_params(**filters)

        try:
            response = self.session.get(
                f'{self.base_url}/api/reviews/hostaway', params=params, timeout=self.timeout
            )
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            if self._superseded(sequence):
                return None
            logger.warning(f'Reviews API error: {e}')
            raise UpstreamUnavailableError('Reviews API is unavailable')

        if not isinstance(payload, dict):
            if self._superseded(sequence):
                return None
            raise UpstreamUnavailableError('Reviews API is unavailable')
        if response.status_code != 200 or payload.get('status') != 'success':
            if self._superseded(sequence):
                return None
            raise ReviewboardError(
                payload.get('message', 'Failed to fetch reviews'), status_code=response.status_code
            )

        if not self.sequencer.apply(sequence, self._store, payload):
            logger.debug(f'Discarding superseded reviews response #{sequence}')
            return None
        return payload

    def set_approval(self, review_id: int, approved: bool) -> dict:
        response = self.session.patch(
            f'{self.base_url}/api/reviews/hostaway',
            json={'reviewId': review_id, 'approved': approved},
            timeout=self.timeout,
        )
        payload = response.json()
        if response.status_code != 200:
            raise ReviewboardError(payload.get('message', 'Request failed'), status_code=response.status_code)
        return payload
