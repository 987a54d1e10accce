"""Authentication routes (register, login, me)."""

import logging

from fastapi import APIRouter, Depends, Request, status
from starlette.concurrency import run_in_threadpool

from api.dependencies import get_refresh_token_repo, get_token_issuer, get_user_repo
from api.responses import domain_error_response, success_response
from api.security import get_current_claims
from domain.model.errors import DomainError
from domain.model.user import AccessTokenPayload
from port.refresh_token_repository import RefreshTokenRepository
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def _read_json(request: Request):
    """Decode the request body, returning None when it is not valid JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


@router.post("/register")
async def register(request: Request, repo: UserRepository = Depends(get_user_repo)):
    """Register a new user.

    Returns:
        201 with the public user profile

    Errors:
        400 validation failed, 409 email already registered, 500 internal error
    """
    payload = await _read_json(request)
    try:
        # bcrypt is CPU-bound; keep it off the event loop
        user = await run_in_threadpool(auth_service.register, payload, repo)
    except DomainError as e:
        return domain_error_response(e)

    return success_response(user.to_dict(), "User registered successfully", status.HTTP_201_CREATED)


@router.post("/login")
async def login(
    request: Request,
    user_repo: UserRepository = Depends(get_user_repo),
    refresh_token_repo: RefreshTokenRepository = Depends(get_refresh_token_repo),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Login with email and password.

    Returns:
        Access token, refresh token and public user profile

    Errors:
        400 validation failed, 401 invalid credentials, 403 account
        deactivated, 500 internal error
    """
    payload = await _read_json(request)
    try:
        result = await run_in_threadpool(
            auth_service.login, payload, user_repo, refresh_token_repo, token_issuer
        )
    except DomainError as e:
        return domain_error_response(e)

    return success_response(result.to_dict(), "Login successful")


@router.get("/me")
async def get_me(claims: AccessTokenPayload = Depends(get_current_claims)):
    """Return the identity claims of the current access token."""
    return success_response({
        "userId": claims.user_id,
        "email": claims.email,
        "role": claims.role,
        "exp": claims.exp,
    })
