"""Runtime configuration loaded from environment variables.

Recognized keys and their fallback behavior:

- JWT_ACCESS_SECRET: required. Missing or blank is fatal (ConfigError).
- JWT_ACCESS_EXPIRES_IN: duration string, default "1h". Malformed is fatal.
- JWT_REFRESH_EXPIRES_IN: duration string, default "7d". Malformed falls back
  to the default with a warning.
- MONGO_URL: MongoDB connection string. Missing means every request that needs
  the store gets a 503.
- MONGODB_DATABASE: database name, default "authcore".
- APP_ENV: "development" (default) or "production". Production enables TLS
  on the MongoDB connection.

Duration strings have the form ``<integer><s|m|h|d>``, e.g. ``10s``, ``5m``,
``1h``, ``7d``.
"""

import logging
import os
import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping

from domain.model.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_EXPIRES_IN = '1h'
DEFAULT_REFRESH_EXPIRES_IN = '7d'
DEFAULT_DATABASE_NAME = 'authcore'

_DURATION_PATTERN = re.compile(r'^(\d+)([smhd])$')
_DURATION_UNITS = {
    's': 'seconds',
    'm': 'minutes',
    'h': 'hours',
    'd': 'days',
}


def parse_duration(value: str) -> timedelta | None:
    """Parse a ``<integer><unit>`` duration string.

    Returns None when the value does not match the pattern.
    """
    match = _DURATION_PATTERN.fullmatch(value or '')
    if not match:
        return None
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


@dataclass(frozen=True)
class Config:
    """Immutable process-wide configuration, built once at startup."""
    jwt_access_secret: str
    access_token_ttl: timedelta
    refresh_token_ttl: timedelta
    mongo_url: str | None = None
    database_name: str = DEFAULT_DATABASE_NAME
    environment: str = 'development'

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Config':
        """Build configuration from the environment.

        Raises:
            ConfigError: signing secret is missing, or the access token
                expiry is malformed.
        """
        env = os.environ if environ is None else environ

        secret = (env.get('JWT_ACCESS_SECRET') or '').strip()
        if not secret:
            raise ConfigError(
                "JWT_ACCESS_SECRET environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        access_raw = env.get('JWT_ACCESS_EXPIRES_IN') or DEFAULT_ACCESS_EXPIRES_IN
        access_ttl = parse_duration(access_raw)
        if access_ttl is None:
            raise ConfigError(
                "JWT_ACCESS_EXPIRES_IN must be in format: 10s | 5m | 1h | 7d"
            )

        refresh_raw = env.get('JWT_REFRESH_EXPIRES_IN') or DEFAULT_REFRESH_EXPIRES_IN
        refresh_ttl = parse_duration(refresh_raw)
        if refresh_ttl is None:
            logger.warning(
                "Invalid JWT_REFRESH_EXPIRES_IN, using default",
                extra={"value": refresh_raw, "default": DEFAULT_REFRESH_EXPIRES_IN},
            )
            refresh_ttl = parse_duration(DEFAULT_REFRESH_EXPIRES_IN)

        return cls(
            jwt_access_secret=secret,
            access_token_ttl=access_ttl,
            refresh_token_ttl=refresh_ttl,
            mongo_url=env.get('MONGO_URL') or None,
            database_name=env.get('MONGODB_DATABASE') or DEFAULT_DATABASE_NAME,
            environment=(env.get('APP_ENV') or 'development').strip().lower(),
        )
