"""Password hashing and verification.

Passwords are trimmed before hashing and before verification. Verification
always performs a full bcrypt comparison, even when the stored hash is missing
or malformed, so response latency does not reveal whether a hash exists.
"""

import logging
import re

import bcrypt

from domain.model.errors import ValidationError

logger = logging.getLogger(__name__)

# bcrypt configuration
# 10 rounds (2^10 = 1024 iterations)
BCRYPT_ROUNDS = 10

# bcrypt only reads the first 72 bytes of input; longer passwords are rejected
BCRYPT_MAX_BYTES = 72

# Cost factor must be within bcrypt's accepted range (04-31)
_BCRYPT_HASH_PATTERN = re.compile(r'^\$2[aby]\$(0[4-9]|[12]\d|3[01])\$[./A-Za-z0-9]{53}$')


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password (trimmed before hashing)

    Returns:
        Bcrypt hash string ($2b$<rounds>$<salt><digest>)

    Raises:
        ValidationError: password is not a string, is blank, or exceeds
            BCRYPT_MAX_BYTES once UTF-8 encoded
    """
    if not isinstance(password, str):
        raise ValidationError("Password must be a string")
    normalized = password.strip()
    if not normalized:
        raise ValidationError("Password cannot be empty")

    encoded = normalized.encode('utf-8')
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValidationError(f"Password must not exceed {BCRYPT_MAX_BYTES} bytes")

    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(encoded, salt).decode('utf-8')


# Compared against whenever the stored hash is unusable
DUMMY_HASH = bcrypt.hashpw(b'dummy', bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode('utf-8')


def verify_password(password: str, password_hash: str | None) -> bool:
    """Verify password against hash. Never raises.

    Args:
        password: Plain text password
        password_hash: Stored bcrypt hash, possibly missing or malformed

    Returns:
        True only if the stored hash is well-formed and matches
    """
    normalized = password.strip() if isinstance(password, str) else ''
    encoded = normalized.encode('utf-8')

    # No stored hash can come from an over-long password
    use_dummy = len(encoded) > BCRYPT_MAX_BYTES or not (
        isinstance(password_hash, str) and _BCRYPT_HASH_PATTERN.match(password_hash)
    )
    hash_to_compare = DUMMY_HASH if use_dummy else password_hash

    try:
        matched = bcrypt.checkpw(encoded[:BCRYPT_MAX_BYTES], hash_to_compare.encode('utf-8'))
    except (ValueError, TypeError) as e:
        logger.debug("Password verification error", extra={"error": str(e)})
        if not use_dummy:
            # bcrypt rejected the stored hash early; spend the dummy comparison time
            return verify_password(password, None)
        return False

    if use_dummy:
        return False
    return matched
