"""Google Places integration.

Fetches place details and reviews from the Places API and normalizes them
into the internal review shape.

Findings that shape this integration:
- The Places API returns at most 5 reviews, chosen by Google
- Reviews cannot be approved or rejected; all are public
- Each property needs a Google place_id
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

import requests

from reviewboard.errors import (
    NotFoundError,
    ServiceNotConfiguredError,
    UpstreamUnavailableError,
)
from reviewboard.models import Review, ReviewCategory
from reviewboard.models.review import format_timestamp

logger = logging.getLogger(__name__)

PLACE_DETAILS_URL = 'https://maps.googleapis.com/maps/api/place/details/json'
FIND_PLACE_URL = 'https://maps.googleapis.com/maps/api/place/findplacefromtext/json'

GOOGLE_CHANNEL = 'Google'
GOOGLE_SOURCE = 'google_places'
OVERALL_CATEGORY = 'overall'
# Google rates 1-5, reviews here are on a 1-10 scale
RATING_SCALE_FACTOR = 2


@dataclass(frozen=True)
class GoogleReview:
    author_name: str
    rating: int
    text: str
    time: int
    language: str = ''
    profile_photo_url: str = ''
    relative_time_description: str = ''
    author_url: str | None = None

    @classmethod
    def from_dict(cls, data):
        return cls(
            author_name=data['author_name'],
            rating=data['rating'],
            text=data.get('text', ''),
            time=data['time'],
            language=data.get('language', ''),
            profile_photo_url=data.get('profile_photo_url', ''),
            relative_time_description=data.get('relative_time_description', ''),
            author_url=data.get('author_url'),
        )

    def to_dict(self):
        result = {
            'author_name': self.author_name,
            'language': self.language,
            'profile_photo_url': self.profile_photo_url,
            'rating': self.rating,
            'relative_time_description': self.relative_time_description,
            'text': self.text,
            'time': self.time,
        }
        if self.author_url is not None:
            result['author_url'] = self.author_url
        return result


@dataclass(frozen=True)
class GooglePlace:
    place_id: str
    name: str
    rating: float | None = None
    user_ratings_total: int | None = None
    reviews: tuple = field(default_factory=tuple)

    @classmethod
    def from_api_result(cls, place_id, result):
        return cls(
            place_id=place_id,
            name=result['name'],
            rating=result.get('rating'),
            user_ratings_total=result.get('user_ratings_total'),
            reviews=tuple(GoogleReview.from_dict(r) for r in result.get('reviews') or []),
        )

    def to_dict(self):
        return {
            'place_id': self.place_id,
            'name': self.name,
            'rating': self.rating,
            'user_ratings_total': self.user_ratings_total,
            'reviews': [r.to_dict() for r in self.reviews],
        }


def normalize_google_reviews(place: GooglePlace) -> list[Review]:
    """Map a place's Google reviews onto the internal review shape.

    Ids are only unique within one call: ``google_<place_id>_<index>``.
    listingId is 0 because there is no place_id -> listing mapping yet.
    """
    normalized = []
    for index, google_review in enumerate(place.reviews):
        rating = google_review.rating * RATING_SCALE_FACTOR
        submitted = datetime.fromtimestamp(google_review.time, tz=timezone.utc)
        normalized.append(Review(
            id=f'google_{place.place_id}_{index}',
            type='guest-to-host',
            status='published',
            rating=rating,
            public_review=google_review.text,
            review_category=(ReviewCategory(OVERALL_CATEGORY, rating),),
            submitted_at=format_timestamp(submitted),
            guest_name=google_review.author_name,
            listing_name=place.name,
            listing_id=0,
            channel=GOOGLE_CHANNEL,
            approved=True,
            source=GOOGLE_SOURCE,
            google_data={
                'author_url': google_review.author_url,
                'profile_photo_url': google_review.profile_photo_url,
                'language': google_review.language,
                'relative_time_description': google_review.relative_time_description,
            },
        ))
    return normalized


DEMO_PLACE = GooglePlace(
    place_id='ChIJExample123',
    name='2B N1 A - 29 Shoreditch Heights',
    rating=4.6,
    user_ratings_total=127,
    reviews=(
        GoogleReview(
            author_name='John Smith',
            language='en',
            profile_photo_url='https://lh3.googleusercontent.com/example',
            rating=5,
            relative_time_description='2 weeks ago',
            text='Excellent location and beautiful apartment. Everything was clean and modern. Highly recommend!',
            time=1704067200,
        ),
        GoogleReview(
            author_name='Maria Garcia',
            language='en',
            profile_photo_url='https://lh3.googleusercontent.com/example2',
            rating=4,
            relative_time_description='1 month ago',
            text='Great stay overall. The apartment was comfortable and well-equipped. Minor issues with parking.',
            time=1701388800,
        ),
    ),
)

INTEGRATION_NOTES = {
    'feasibility': 'Technically feasible with limitations',
    'limitations': [
        'Limited to 5 most helpful reviews',
        'Cannot control which reviews are shown',
        'No approval workflow (all reviews are public)',
        'Rate limited (1000 requests/day free tier)',
        'Requires Google Place ID for each property',
        'Reviews may not represent all guest feedback',
    ],
    'recommendations': [
        'Use as supplementary data alongside Hostaway reviews',
        'Consider Google My Business API for more control',
        'Implement caching to respect rate limits',
        'Map internal property IDs to Google Place IDs',
        'Monitor API usage and implement fallbacks',
    ],
}


class GooglePlacesClient:
    """Thin client for the Place Details and Find Place endpoints."""

    def __init__(self, api_key: str = '', timeout: float = 5.0):
        self.api_key = api_key
        self.timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def demo_place(self) -> GooglePlace:
        return DEMO_PLACE

    def _get(self, url, params):
        if not self.is_configured:
            raise ServiceNotConfiguredError('Google Places API not configured')

        try:
            response = requests.get(url, params={**params, 'key': self.api_key}, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.Timeout:
            logger.warning('Google Places timeout')
            raise UpstreamUnavailableError('Google Places API is unavailable')
        except (requests.RequestException, ValueError) as e:
            logger.warning(f'Google Places error: {e}')
            raise UpstreamUnavailableError('Google Places API is unavailable')

        if not isinstance(data, dict):
            logger.warning('Google Places unexpected response format')
            raise UpstreamUnavailableError('Google Places API is unavailable')
        return data

    def fetch_place(self, place_id: str) -> GooglePlace:
        """Fetch name, rating and reviews for a place."""
        data = self._get(PLACE_DETAILS_URL, {
            'place_id': place_id,
            'fields': 'name,rating,user_ratings_total,reviews',
        })

        if data.get('status') != 'OK' or not data.get('result'):
            logger.info(f"Google place {place_id} lookup returned {data.get('status')}")
            raise NotFoundError('Failed to fetch Google reviews')

        try:
            return GooglePlace.from_api_result(place_id, data['result'])
        except (KeyError, TypeError) as e:
            logger.warning(f'Google Places malformed place result: {e}')
            raise UpstreamUnavailableError('Google Places API is unavailable')

    def find_place(self, name: str, address: str) -> list[dict]:
        """Search for candidate places to obtain a place_id."""
        query = ' '.join(part for part in (name, address) if part)
        data = self._get(FIND_PLACE_URL, {
            'input': query,
            'inputtype': 'textquery',
            'fields': 'place_id,name,formatted_address',
        })

        candidates = data.get('candidates') or []
        if data.get('status') != 'OK' or not candidates:
            raise NotFoundError('No places found matching the query')
        return candidates
