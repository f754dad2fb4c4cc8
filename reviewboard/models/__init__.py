"""Data models for the reviews dashboard."""

from .review import Review, ReviewCategory, ReviewStats, PropertyStats

__all__ = ['Review', 'ReviewCategory', 'ReviewStats', 'PropertyStats']
