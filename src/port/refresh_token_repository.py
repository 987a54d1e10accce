"""Port definition for RefreshTokenRepository."""

from datetime import datetime
from typing import Protocol


class RefreshTokenRepository(Protocol):
    def create(self, token: str, user_id: str, expires_at: datetime) -> None: ...
