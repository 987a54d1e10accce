"""MongoDB index management.

Index creation shared by the Mongo repositories, run once at app startup.
"""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing a conflicting one if present.

    A conflict is an existing index with the same name but different keys,
    or the same keys under a different name (e.g. after a rename).
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise

    wanted = dict(keys)
    for existing_name, info in collection.index_information().items():
        if existing_name == '_id_':
            continue
        existing_keys = dict(info.get('key', []))
        if (existing_name == name) != (existing_keys == wanted):
            logger.warning("Dropping conflicting index", extra={"index": existing_name})
            collection.drop_index(existing_name)
            collection.create_index(keys, name=name, **kwargs)
            logger.info("Recreated index", extra={"index": name})
            return True

    logger.error("Failed to resolve index conflict", extra={"index": name})
    return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository
    from adapter.mongodb.refresh_token_repository import MongoRefreshTokenRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoRefreshTokenRepository(db).ensure_indexes(),
    ]
    return all(results)
