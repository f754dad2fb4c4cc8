"""Application errors.

Each error carries the HTTP status it is reported with at the route boundary.
"""


class ReviewboardError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'status': 'error', 'message': self.message}


class ValidationError(ReviewboardError):
    """Malformed filter, moderation or lookup input."""

    status_code = 400


class NotFoundError(ReviewboardError):
    """Lookup succeeded but matched nothing."""

    status_code = 404


class ReviewProviderError(ReviewboardError):
    """The base review set could not be obtained."""

    status_code = 500


class UpstreamUnavailableError(ReviewboardError):
    """An external review source failed (network, status or body)."""

    status_code = 503


class ServiceNotConfiguredError(ReviewboardError):
    """An integration was called without its credentials."""

    status_code = 503
