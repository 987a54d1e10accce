from fastapi import HTTPException, Request

from adapter.mongodb.refresh_token_repository import MongoRefreshTokenRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.refresh_token_repository import RefreshTokenRepository
from port.user_repository import UserRepository
from services.token_service import TokenIssuer


def _get_db(request: Request):
    """Get MongoDB database from the app-wide client, raising 503 if unavailable."""
    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[request.app.state.config.database_name]


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))


def get_refresh_token_repo(request: Request) -> RefreshTokenRepository:
    return MongoRefreshTokenRepository(_get_db(request))


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer
