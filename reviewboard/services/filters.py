"""Query/filter engine for review listings."""

from dataclasses import dataclass

from reviewboard.errors import ValidationError
from reviewboard.services.statistics import sort_by_submitted_desc

MIN_RATING = 1
MAX_RATING = 10

_TRUE_VALUES = {'true', '1'}
_FALSE_VALUES = {'false', '0'}


def parse_bool(value, name):
    """Parse a 'true'/'false' query value. Returns None when absent."""
    if value is None or value == '':
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValidationError(f"'{name}' must be 'true' or 'false'")


def parse_int(value, name, minimum=None, maximum=None):
    """Parse an integer query value. Returns None when absent."""
    if value is None or value == '':
        return None
    try:
        number = int(value.strip())
    except ValueError:
        raise ValidationError(f"'{name}' must be an integer")
    if minimum is not None and maximum is not None and not (minimum <= number <= maximum):
        raise ValidationError(f"'{name}' must be between {minimum} and {maximum}")
    return number


@dataclass(frozen=True)
class ReviewFilter:
    """Optional, AND-combined review predicates. None means no constraint."""

    listing_id: int | None = None
    channel: str | None = None
    approved: bool | None = None
    min_rating: int | None = None
    max_rating: int | None = None
    search: str | None = None

    @classmethod
    def from_query_args(cls, args):
        """Build a filter from request query parameters.

        Query params:
        - propertyId: listing id (integer)
        - channel: channel name, case-insensitive
        - approved: 'true' or 'false'
        - minRating / maxRating: integers 1-10, inclusive
        - search: free text over review text, guest name and listing name
        """
        channel = (args.get('channel') or '').strip()
        search = (args.get('search') or '').strip()
        return cls(
            listing_id=parse_int(args.get('propertyId'), 'propertyId'),
            channel=channel or None,
            approved=parse_bool(args.get('approved'), 'approved'),
            min_rating=parse_int(args.get('minRating'), 'minRating', MIN_RATING, MAX_RATING),
            max_rating=parse_int(args.get('maxRating'), 'maxRating', MIN_RATING, MAX_RATING),
            search=search or None,
        )

    def matches(self, review) -> bool:
        if self.listing_id is not None and review.listing_id != self.listing_id:
            return False
        if self.channel is not None and review.channel.lower() != self.channel.lower():
            return False
        if self.approved is not None and review.approved != self.approved:
            return False
        if self.min_rating is not None and review.rating < self.min_rating:
            return False
        if self.max_rating is not None and review.rating > self.max_rating:
            return False
        if self.search is not None:
            term = self.search.lower()
            fields = (review.public_review, review.guest_name, review.listing_name)
            if not any(term in (value or '').lower() for value in fields):
                return False
        return True


def apply_filters(reviews, review_filter=None):
    """Return the matching reviews, newest first."""
    if review_filter is None:
        review_filter = ReviewFilter()
    return sort_by_submitted_desc(r for r in reviews if review_filter.matches(r))
