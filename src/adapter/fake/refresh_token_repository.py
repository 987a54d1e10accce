"""In-memory implementation of RefreshTokenRepository for testing."""

from datetime import datetime

from domain.model.user import RefreshToken


class FakeRefreshTokenRepository:
    def __init__(self):
        self.store: dict[str, RefreshToken] = {}

    def create(self, token: str, user_id: str, expires_at: datetime) -> None:
        self.store[token] = RefreshToken(token=token, user_id=user_id, expires_at=expires_at)

    def find_by_user(self, user_id: str) -> list[RefreshToken]:
        return [t for t in self.store.values() if t.user_id == user_id]
