"""Services: review providers, aggregation, filtering and integrations."""

from reviewboard.services.filters import ReviewFilter, apply_filters
from reviewboard.services.statistics import calculate_property_stats, calculate_review_stats

__all__ = [
    'ReviewFilter',
    'apply_filters',
    'calculate_review_stats',
    'calculate_property_stats',
]
