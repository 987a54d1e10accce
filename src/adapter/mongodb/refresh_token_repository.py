"""MongoDB implementation of RefreshTokenRepository."""

from datetime import datetime, timezone
from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import REFRESH_TOKENS_COLLECTION_NAME

logger = getLogger(__name__)


class MongoRefreshTokenRepository:
    def __init__(self, db: Database):
        self.collection = db[REFRESH_TOKENS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for refresh token collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('token', 1)], 'idx_auth_tokens_token', unique=True)
            create_index_safe(self.collection, [('user_id', 1)], 'idx_auth_tokens_user_id')
            return True
        except Exception as e:
            logger.error("Failed to create auth_tokens indexes", extra={"error": str(e)})
            return False

    def create(self, token: str, user_id: str, expires_at: datetime) -> None:
        """Persist a refresh token record."""
        try:
            self.collection.insert_one({
                'token': token,
                'user_id': user_id,
                'expires_at': expires_at,
                'created_at': datetime.now(timezone.utc),
            })
        except PyMongoError as e:
            logger.error("Failed to store refresh token", extra={"userId": user_id, "error": str(e)})
            raise
