"""Review record model and derived statistics types."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 (or Hostaway 'YYYY-MM-DD HH:MM:SS') timestamp.

    Naive timestamps are taken as UTC so that every parsed value is comparable.
    """
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(moment: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f'{moment.microsecond // 1000:03d}Z'


def require_rating(value):
    """Reject non-numeric ratings; booleans and numeric strings included."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f'rating must be a number, got {value!r}')
    return value


def require_timestamp(value):
    """Return value unchanged once it is known to parse as a timestamp."""
    if not isinstance(value, str):
        raise TypeError(f'submittedAt must be a string, got {value!r}')
    parse_timestamp(value)
    return value


@dataclass(frozen=True)
class ReviewCategory:
    """A sub-score such as 'cleanliness', on the review's 1-10 scale."""

    category: str
    rating: float

    @classmethod
    def from_dict(cls, data):
        return cls(category=data['category'], rating=require_rating(data['rating']))

    def to_dict(self):
        return {'category': self.category, 'rating': self.rating}


@dataclass(frozen=True)
class Review:
    """Canonical guest review record."""

    id: int | str
    type: str
    status: str
    rating: float
    public_review: str
    review_category: tuple = ()
    submitted_at: str = ''
    guest_name: str = ''
    listing_name: str = ''
    listing_id: int = 0
    channel: str = ''
    approved: bool = False
    # Source-specific extras; not used by aggregation or filtering.
    source: str | None = None
    google_data: dict | None = field(default=None, compare=False)

    @property
    def submitted_datetime(self) -> datetime:
        return parse_timestamp(self.submitted_at)

    @classmethod
    def from_dict(cls, data):
        """Build a review from the camelCase wire shape.

        Raises KeyError, TypeError or ValueError for malformed records.
        """
        approved = data.get('approved', False)
        if not isinstance(approved, bool):
            raise TypeError(f'approved must be a boolean, got {approved!r}')

        return cls(
            id=data['id'],
            type=data.get('type', ''),
            status=data.get('status', ''),
            rating=require_rating(data['rating']),
            public_review=data.get('publicReview') or '',
            review_category=tuple(
                ReviewCategory.from_dict(c) for c in data.get('reviewCategory') or []
            ),
            submitted_at=require_timestamp(data['submittedAt']),
            guest_name=data.get('guestName') or '',
            listing_name=data.get('listingName') or '',
            listing_id=int(data.get('listingId') or 0),
            channel=data.get('channel') or '',
            approved=approved,
            source=data.get('source'),
            google_data=data.get('googleData'),
        )

    def to_dict(self):
        """Convert review to the camelCase wire shape."""
        result = {
            'id': self.id,
            'type': self.type,
            'status': self.status,
            'rating': self.rating,
            'publicReview': self.public_review,
            'reviewCategory': [c.to_dict() for c in self.review_category],
            'submittedAt': self.submitted_at,
            'guestName': self.guest_name,
            'listingName': self.listing_name,
            'listingId': self.listing_id,
            'channel': self.channel,
            'approved': self.approved,
        }
        if self.source is not None:
            result['source'] = self.source
        if self.google_data is not None:
            result['googleData'] = dict(self.google_data)
        return result

    def __repr__(self):
        return f'<Review {self.id}: {self.rating}/10 {self.channel}>'


@dataclass(frozen=True)
class ReviewStats:
    """Rollup over a set of reviews."""

    total_reviews: int
    average_rating: float
    approved_reviews: int
    pending_reviews: int
    channel_distribution: dict
    category_averages: dict

    def to_dict(self):
        return {
            'totalReviews': self.total_reviews,
            'averageRating': self.average_rating,
            'approvedReviews': self.approved_reviews,
            'pendingReviews': self.pending_reviews,
            'channelDistribution': dict(self.channel_distribution),
            'categoryAverages': dict(self.category_averages),
        }


@dataclass(frozen=True)
class PropertyStats:
    """Rollup for a single listing."""

    listing_id: int
    listing_name: str
    total_reviews: int
    average_rating: float
    approved_reviews: int
    pending_reviews: int
    recent_reviews: tuple = ()

    def to_dict(self):
        return {
            'listingId': self.listing_id,
            'listingName': self.listing_name,
            'totalReviews': self.total_reviews,
            'averageRating': self.average_rating,
            'approvedReviews': self.approved_reviews,
            'pendingReviews': self.pending_reviews,
            'recentReviews': [r.to_dict() for r in self.recent_reviews],
        }
