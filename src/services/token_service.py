"""Access and refresh token issuance.

Access tokens are HS256 JWTs carrying the user's identity claims and a
``type: "access"`` discriminator. Refresh tokens are opaque random strings
with no embedded payload; they are only meaningful via the token store.
"""

import logging
import secrets
from datetime import datetime, timezone
from typing import Callable

from jose import JWTError, jwt

from domain.model.user import AccessTokenPayload
from utils.config import Config

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_BYTES = 64


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Creates and verifies tokens using the process-wide signing secret.

    Args:
        config: Startup configuration (secret and token lifetimes).
        clock: Zero-argument callable returning the current aware UTC time.
    """

    def __init__(self, config: Config, clock: Callable[[], datetime] | None = None):
        self.config = config
        self.clock = clock or _utcnow

    def issue_access_token(self, user_id: str, email: str, role: str) -> str:
        """Create a signed access token for the user."""
        now = self.clock()
        expire = now + self.config.access_token_ttl
        payload = {
            "userId": user_id,
            "email": email,
            "role": role,
            "type": ACCESS_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, self.config.jwt_access_secret, algorithm=JWT_ALGORITHM)

    def verify_access_token(self, token: str) -> AccessTokenPayload | None:
        """Verify an access token and return its claims.

        Returns None for a bad signature, a malformed or expired token, or a
        token whose ``type`` is not ``access``. Never raises.
        """
        if not isinstance(token, str) or not token:
            return None

        try:
            # Expiry is checked below against self.clock
            claims = jwt.decode(
                token,
                self.config.jwt_access_secret,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": False},
            )
        except (JWTError, ValueError, TypeError, AttributeError) as e:
            logger.debug(f"JWT verification failed: {e}")
            return None

        if claims.get("type") != ACCESS_TOKEN_TYPE:
            return None

        exp = claims.get("exp")
        if not isinstance(exp, int) or exp <= self.clock().timestamp():
            return None

        user_id = claims.get("userId")
        email = claims.get("email")
        role = claims.get("role")
        if not all(isinstance(v, str) for v in (user_id, email, role)):
            return None

        return AccessTokenPayload(
            user_id=user_id,
            email=email,
            role=role,
            type=ACCESS_TOKEN_TYPE,
            iat=claims.get("iat", 0),
            exp=exp,
        )

    def issue_refresh_token(self) -> str:
        """Generate a refresh token (128 hex characters)."""
        return secrets.token_hex(REFRESH_TOKEN_BYTES)

    def refresh_token_expiration(self, now: datetime | None = None) -> datetime:
        """Calculate the refresh token expiration time."""
        return (now or self.clock()) + self.config.refresh_token_ttl
