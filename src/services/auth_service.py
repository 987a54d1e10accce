"""Auth service — registration and login business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
Unexpected store or crypto failures are logged here and re-raised as
InternalError so no internals reach the caller.
"""

import logging
from typing import Any

from domain.model.auth import LoginRequest, RegisterRequest, parse_payload
from domain.model.errors import (
    DomainError,
    DuplicateError,
    InternalError,
    PermissionDeniedError,
    UnauthorizedError,
)
from domain.model.user import DEFAULT_ROLE, LoginResult, PublicUser
from port.refresh_token_repository import RefreshTokenRepository
from port.user_repository import UserRepository
from services.password_service import hash_password, verify_password
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
ACCOUNT_DEACTIVATED = "Account is deactivated. Please contact administrator."
EMAIL_TAKEN = "User with this email already exists"


def register(payload: Any, user_repo: UserRepository) -> PublicUser:
    """Register a new user from a raw request payload.

    The stored role is always DEFAULT_ROLE; a client-supplied role is
    rejected during validation.

    Raises:
        ValidationError: payload fails validation (per-field messages)
        DuplicateError: normalized email already registered
        InternalError: unexpected store or hashing failure
    """
    request = parse_payload(RegisterRequest, payload)

    try:
        if user_repo.find_by_email(request.email):
            raise DuplicateError(EMAIL_TAKEN)

        password_hash = hash_password(request.password)
        user = user_repo.create(
            name=request.name,
            email=request.email,
            password_hash=password_hash,
            role=DEFAULT_ROLE,
        )
    except DuplicateError:
        logger.info("Registration rejected: email already registered", extra={"email": request.email})
        raise DuplicateError(EMAIL_TAKEN) from None
    except DomainError:
        raise
    except Exception as e:
        logger.exception("Registration error", extra={"error": str(e)})
        raise InternalError("An error occurred during registration") from e

    logger.info("User registered", extra={"userId": user.id, "email": user.email})
    return PublicUser.from_user(user)


def login(
    payload: Any,
    user_repo: UserRepository,
    refresh_token_repo: RefreshTokenRepository,
    token_issuer: TokenIssuer,
) -> LoginResult:
    """Authenticate by email and password and issue tokens.

    Unknown email and wrong password produce the same error, and both
    pass through a full bcrypt comparison.

    Raises:
        ValidationError: payload fails validation
        UnauthorizedError: invalid credentials (deliberately vague)
        PermissionDeniedError: account is deactivated
        InternalError: unexpected store, hashing or signing failure
    """
    request = parse_payload(LoginRequest, payload)

    try:
        user = user_repo.find_by_email(request.email)

        if not user:
            verify_password(request.password, None)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.is_active:
            logger.info("Login rejected: account deactivated", extra={"userId": user.id})
            raise PermissionDeniedError(ACCOUNT_DEACTIVATED)

        if not verify_password(request.password, user.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        access_token = token_issuer.issue_access_token(user.id, user.email, user.role.value)
        refresh_token = token_issuer.issue_refresh_token()
        refresh_token_repo.create(
            token=refresh_token,
            user_id=user.id,
            expires_at=token_issuer.refresh_token_expiration(),
        )
    except DomainError:
        raise
    except Exception as e:
        logger.exception("Login error", extra={"error": str(e)})
        raise InternalError("An error occurred during login") from e

    logger.info("User logged in", extra={"userId": user.id})
    return LoginResult(
        access_token=access_token,
        refresh_token=refresh_token,
        user=PublicUser.from_user(user),
    )
