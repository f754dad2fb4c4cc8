"""Configuration for the reviews dashboard backend.

Settings are read from the environment once, when the app is created, and
handed to the services that need them.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

PACKAGE_ROOT = Path(__file__).parent
DEFAULT_MOCK_REVIEWS_PATH = PACKAGE_ROOT / 'data' / 'mock_reviews.json'

HOSTAWAY_API_URL = 'https://api.hostaway.com/v1'

PROVIDER_MOCK = 'mock'
PROVIDER_HOSTAWAY = 'hostaway'
VALID_PROVIDERS = {PROVIDER_MOCK, PROVIDER_HOSTAWAY}


def _env_float(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f'{name} must be a number, got {value!r}')


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read-only after startup."""

    review_provider: str = PROVIDER_MOCK
    mock_reviews_path: Path = DEFAULT_MOCK_REVIEWS_PATH
    hostaway_api_url: str = HOSTAWAY_API_URL
    hostaway_account_id: str = ''
    hostaway_api_key: str = ''
    google_places_api_key: str = ''
    http_timeout: float = 5.0
    log_level: str = 'INFO'
    cors_origins: tuple = field(default_factory=lambda: ('*',))

    @classmethod
    def from_env(cls):
        """Build settings from environment variables (after .env is loaded)."""
        provider = os.getenv('REVIEW_PROVIDER', PROVIDER_MOCK).strip().lower()
        if provider not in VALID_PROVIDERS:
            raise ValueError(
                f'REVIEW_PROVIDER must be one of {sorted(VALID_PROVIDERS)}, got {provider!r}'
            )

        origins = os.getenv('CORS_ORIGINS', '*')

        return cls(
            review_provider=provider,
            mock_reviews_path=Path(os.getenv('MOCK_REVIEWS_PATH') or DEFAULT_MOCK_REVIEWS_PATH),
            hostaway_api_url=os.getenv('HOSTAWAY_API_URL', HOSTAWAY_API_URL).rstrip('/'),
            hostaway_account_id=os.getenv('HOSTAWAY_ACCOUNT_ID', '').strip(),
            hostaway_api_key=os.getenv('HOSTAWAY_API_KEY', '').strip(),
            google_places_api_key=os.getenv('GOOGLE_PLACES_API_KEY', '').strip(),
            http_timeout=_env_float('HTTP_TIMEOUT_SECONDS', 5.0),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            cors_origins=tuple(o.strip() for o in origins.split(',') if o.strip()),
        )

    @property
    def google_places_configured(self):
        return bool(self.google_places_api_key)
