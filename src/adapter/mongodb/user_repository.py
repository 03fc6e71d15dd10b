"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from logging import getLogger
from typing import Any

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import ConflictError, NotFoundError, StoreError
from domain.model.user import SignupMethod, User

logger = getLogger(__name__)

# Default reads never pull the hash off the wire
_WITHOUT_SECRET = {'password_hash': 0}


def _now() -> datetime:
    """Current UTC time at the millisecond precision BSON dates keep."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('username', 1)], 'idx_users_username', unique=True)
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            username=doc['username'],
            email=doc['email'],
            first_name=doc.get('first_name', ''),
            last_name=doc.get('last_name', ''),
            signup_method=SignupMethod(doc['signup_method']),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            email_verified=doc.get('email_verified', False),
            password_hash=doc.get('password_hash'),
        )

    # ── write operations ─────────────────────────────────────

    def insert(
        self,
        *,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
        password_hash: str,
        signup_method: SignupMethod,
        email_verified: bool = False,
    ) -> User:
        """Insert a new user document and return the User object."""
        user_id = uuid.uuid4().hex
        now = _now()
        user_doc = {
            '_id': user_id,
            'username': username,
            'email': email,
            'first_name': first_name,
            'last_name': last_name,
            'email_verified': email_verified,
            'password_hash': password_hash,
            'signup_method': SignupMethod(signup_method).value,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: username or email already exists",
                           extra={"username": username, "email": email})
            raise ConflictError("Username or email already exists")
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise StoreError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        """Apply a $set of the given fields plus updated_at in a single update_one."""
        changes = {k: (v.value if isinstance(v, Enum) else v) for k, v in fields.items()}
        changes['updated_at'] = _now()
        try:
            result = self.collection.update_one({'_id': user_id}, {'$set': changes})
        except DuplicateKeyError:
            logger.warning("User update failed: username or email already exists", extra={"userId": user_id})
            raise ConflictError("Username or email already exists")
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to update user") from e

        if result.matched_count == 0:
            raise NotFoundError(f"User {user_id} not found")
        logger.debug("User updated", extra={"userId": user_id, "fields": sorted(k for k in fields if k != 'password_hash')})

    def delete(self, user_id: str) -> None:
        """Delete a user document; a missing document is not an error."""
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StoreError("Failed to delete user") from e

        if result.deleted_count:
            logger.info("User deleted", extra={"userId": user_id})

    # ── read operations ──────────────────────────────────────

    def _find_one(self, query: dict, projection: dict | None, action: str) -> User | None:
        try:
            doc = self.collection.find_one(query, projection)
        except PyMongoError as e:
            logger.error(f"Failed to {action}", extra={"error": str(e)})
            raise StoreError(f"Failed to {action}") from e
        return self._to_domain(doc) if doc else None

    def find_by_id(self, user_id: str) -> User | None:
        """Find a user by ID, hash included. Return None if not found."""
        return self._find_one({'_id': user_id}, None, "get user by ID")

    def find_by_email(self, email: str, include_secret: bool = False) -> User | None:
        """Find a user by email. Return None if not found."""
        projection = None if include_secret else _WITHOUT_SECRET
        return self._find_one({'email': email}, projection, "get user by email")

    def find_by_email_or_username(self, email: str, username: str) -> User | None:
        """Find any user that already holds the email or the username."""
        query = {'$or': [{'email': email}, {'username': username}]}
        return self._find_one(query, _WITHOUT_SECRET, "look up user by email or username")

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[User]:
        """Return users newest first, skipping offset and capped at limit when given."""
        try:
            cursor = self.collection.find({}, _WITHOUT_SECRET).sort('created_at', -1).skip(offset)
            if limit is not None:
                cursor = cursor.limit(limit)
            docs = list(cursor)
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise StoreError("Failed to list users") from e
        return [self._to_domain(doc) for doc in docs]

    def count(self) -> int:
        """Return the total number of users."""
        try:
            return self.collection.count_documents({})
        except PyMongoError as e:
            logger.error("Failed to count users", extra={"error": str(e)})
            raise StoreError("Failed to count users") from e
