"""User directory service — CRUD over user records.

Owns the password-hashing policy for create/update and the partial-merge
semantics of update. Every value it returns is a PublicUser.
"""

import logging

from domain.model.errors import NotFoundError
from domain.model.user import NewUser, PublicUser, UserChanges, to_public
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """UserDirectory backed by a UserRepository and a PasswordHasher."""

    def __init__(self, repo: UserRepository, hasher: PasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def find_all(self, limit: int | None = None, offset: int = 0) -> list[PublicUser]:
        """Return users newest first; all of them unless limit is given."""
        return [to_public(user) for user in self.repo.list_all(limit, offset)]

    def count(self) -> int:
        return self.repo.count()

    def find_one(self, user_id: str) -> PublicUser | None:
        """Return the user, or None when it does not exist."""
        user = self.repo.find_by_id(user_id)
        return to_public(user) if user else None

    def create(self, new_user: NewUser) -> PublicUser:
        """Hash the password and persist the user in a single insert.

        Raises:
            ConflictError: username or email already taken
        """
        password_hash = self.hasher.hash(new_user.password)
        user = self.repo.insert(
            username=new_user.username,
            email=new_user.email,
            first_name=new_user.first_name,
            last_name=new_user.last_name,
            password_hash=password_hash,
            signup_method=new_user.signup_method,
            email_verified=new_user.email_verified,
        )
        return to_public(user)

    def update(self, user_id: str, changes: UserChanges) -> PublicUser | None:
        """Merge the supplied fields into the user.

        A supplied password is re-hashed; an absent one leaves the stored hash
        untouched. Returns None when the user does not exist, both when the
        store rejects the update and when the record vanished before re-read.

        Raises:
            ConflictError: new username or email already taken
        """
        fields = changes.supplied()
        password = fields.pop('password', None)
        if password is not None:
            fields['password_hash'] = self.hasher.hash(password)

        try:
            self.repo.update_fields(user_id, fields)
        except NotFoundError:
            logger.info("Update skipped: user not found", extra={"userId": user_id})
            return None

        logger.info("User updated", extra={
            "userId": user_id,
            "passwordChanged": password is not None,
        })
        return self.find_one(user_id)

    def remove(self, user_id: str) -> None:
        self.repo.delete(user_id)

    def exists_by_email_or_username(self, email: str, username: str) -> bool:
        return self.repo.find_by_email_or_username(email, username) is not None
