"""Statistics aggregation over review records.

Both entry points are pure: output depends only on the input sequence.
"""

import logging
import math

from reviewboard.models import PropertyStats, ReviewStats

logger = logging.getLogger(__name__)

RECENT_REVIEWS_LIMIT = 3


def round_rating(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def average_rating(reviews) -> float:
    """Unrounded mean rating, 0 for an empty set."""
    if not reviews:
        return 0
    return sum(r.rating for r in reviews) / len(reviews)


def sort_by_submitted_desc(reviews):
    """Newest first. Python's sort is stable, so ties keep input order."""
    return sorted(reviews, key=lambda r: r.submitted_datetime, reverse=True)


def calculate_review_stats(reviews) -> ReviewStats:
    """Compute the global rollup for a list of reviews."""
    reviews = list(reviews)
    total = len(reviews)
    approved = sum(1 for r in reviews if r.approved)

    channel_distribution = {}
    for review in reviews:
        channel_distribution[review.channel] = channel_distribution.get(review.channel, 0) + 1

    category_totals = {}
    for review in reviews:
        for entry in review.review_category:
            running = category_totals.setdefault(entry.category, [0, 0])
            running[0] += entry.rating
            running[1] += 1

    category_averages = {
        name: rating_sum / count for name, (rating_sum, count) in category_totals.items()
    }

    return ReviewStats(
        total_reviews=total,
        average_rating=round_rating(average_rating(reviews)),
        approved_reviews=approved,
        pending_reviews=total - approved,
        channel_distribution=channel_distribution,
        category_averages=category_averages,
    )


def calculate_property_stats(reviews) -> list[PropertyStats]:
    """Compute one rollup per listing, ordered by listing id."""
    by_listing = {}
    for review in reviews:
        by_listing.setdefault(review.listing_id, []).append(review)

    results = []
    for listing_id in sorted(by_listing):
        listing_reviews = by_listing[listing_id]
        listing_name = listing_reviews[0].listing_name

        names = {r.listing_name for r in listing_reviews}
        if len(names) > 1:
            logger.warning(
                f"Listing {listing_id} has reviews with differing names {sorted(names)}; "
                f"using {listing_name!r}"
            )

        total = len(listing_reviews)
        approved = sum(1 for r in listing_reviews if r.approved)
        results.append(PropertyStats(
            listing_id=listing_id,
            listing_name=listing_name,
            total_reviews=total,
            average_rating=round_rating(average_rating(listing_reviews)),
            approved_reviews=approved,
            pending_reviews=total - approved,
            recent_reviews=tuple(sort_by_submitted_desc(listing_reviews)[:RECENT_REVIEWS_LIMIT]),
        ))

    return results
