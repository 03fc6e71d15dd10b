"""MongoDB index management utilities.

Index creation with conflict resolution, used by MongoUserRepository.
"""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create index, replacing an existing index that clashes with it.

    Handles two conflict scenarios:
    - Same name but different key spec or options (e.g. an index that was not unique)
    - Same key spec but different name (rename)
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _resolve_conflict(collection, keys, name, **kwargs)


def _resolve_conflict(collection, keys: list, name: str, **kwargs) -> bool:
    """Drop the conflicting index and recreate it with the desired spec."""
    keys_dict = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == keys_dict
        if not (same_name or same_keys):
            continue

        logger.warning("Dropping conflicting index", extra={"index": idx_name})
        collection.drop_index(idx_name)
        collection.create_index(keys, name=name, **kwargs)
        logger.info("Recreated index", extra={"index": name})
        return True

    logger.error("Failed to resolve index conflict", extra={"index": name})
    return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
