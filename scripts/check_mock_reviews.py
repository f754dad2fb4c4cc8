#!/usr/bin/env python3
"""
Mock Reviews Check

Loads reviewboard/data/mock_reviews.json through MockReviewProvider and
verifies the data contract the dashboard relies on:
- review ids are unique
- ratings (overall and per category) are on the 1-10 scale
- every review of a listing carries the same listingName
- submittedAt parses as a timestamp

Run this after editing the mock data set.
"""

import os
import sys


def load_reviews():
    """Load reviews through the provider the app uses."""
    # Add project root to path so we can import reviewboard modules
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    sys.path.insert(0, project_root)

    from reviewboard.config import Settings
    from reviewboard.services.review_provider import MockReviewProvider

    return MockReviewProvider(Settings.from_env().mock_reviews_path).fetch_reviews()


def find_problems(reviews):
    problems = []

    seen_ids = set()
    for review in reviews:
        if review.id in seen_ids:
            problems.append(f'duplicate id {review.id}')
        seen_ids.add(review.id)

    for review in reviews:
        if not 1 <= review.rating <= 10:
            problems.append(f'review {review.id}: rating {review.rating} outside 1-10')
        for entry in review.review_category:
            if not 1 <= entry.rating <= 10:
                problems.append(
                    f'review {review.id}: {entry.category} rating {entry.rating} outside 1-10'
                )
        try:
            review.submitted_datetime
        except ValueError:
            problems.append(f'review {review.id}: bad submittedAt {review.submitted_at!r}')

    names = {}
    for review in reviews:
        names.setdefault(review.listing_id, set()).add(review.listing_name)
    for listing_id, listing_names in sorted(names.items()):
        if len(listing_names) > 1:
            problems.append(f'listing {listing_id}: differing names {sorted(listing_names)}')

    return problems


def main():
    print('\n\U0001f50d Mock Reviews Check\n')

    try:
        reviews = load_reviews()
    except Exception as e:
        print(f'❌ Failed to load mock reviews: {e}')
        sys.exit(1)

    listings = {r.listing_id for r in reviews}
    print(f'  Reviews:  {len(reviews)}')
    print(f'  Listings: {len(listings)}')

    problems = find_problems(reviews)
    if problems:
        print(f'\n❌ {len(problems)} problem(s) found:')
        for problem in problems:
            print(f'    - {problem}')
        sys.exit(1)

    print('\n✅ Mock reviews are consistent.\n')


if __name__ == '__main__':
    main()
