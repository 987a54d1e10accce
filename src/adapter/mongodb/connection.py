import logging

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from utils.config import Config

logger = logging.getLogger(__name__)

# Set pymongo logger to WARNING to reduce noise from driver-level logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

USERS_COLLECTION_NAME = 'users'
REFRESH_TOKENS_COLLECTION_NAME = 'auth_tokens'


def create_mongodb_client(config: Config) -> MongoClient | None:
    """Create the process-wide MongoDB client.

    Called once from the application lifespan; the client (and its
    connection pool) is reused across requests until shutdown.

    Returns:
        MongoDB client or None if not configured or the server is unreachable
    """
    if not config.mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    try:
        client = MongoClient(
            config.mongo_url,
            serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
            connectTimeoutMS=5000,  # 5s timeout for initial connection
            socketTimeoutMS=30000,  # 30s timeout for operations
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,  # Close idle connections after 30s
            waitQueueTimeoutMS=10000,  # Wait up to 10s for available connection
            retryWrites=True,
            retryReads=True,
            tls=config.is_production,
        )
        client.admin.command('ping')  # Verify connection works
        logger.info(f"[MONGODB] Connected successfully to {config.database_name}")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
        return None
