from typing import Any, Protocol

from domain.model.user import SignupMethod, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations enforce uniqueness of ``username`` and ``email`` themselves
    and raise domain errors (ConflictError, NotFoundError, StoreError) instead
    of driver exceptions.
    """

    def find_by_id(self, user_id: str) -> User | None:
        """Find a user by ID, including the password hash. Return None if not found."""
        ...

    def find_by_email(self, email: str, include_secret: bool = False) -> User | None:
        """Find a user by email. The hash is only loaded when include_secret is True."""
        ...

    def find_by_email_or_username(self, email: str, username: str) -> User | None:
        """Find any user holding either the email or the username."""
        ...

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[User]:
        """Return users newest first, without password hashes.

        Skips the first offset users; returns at most limit users when limit is
        given, every remaining user otherwise.
        """
        ...

    def count(self) -> int:
        """Return the total number of users."""
        ...

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
        """Create a user. Raise ConflictError if username or email is taken."""
        ...

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        """Merge the given fields into a user and refresh updated_at.

        Raise NotFoundError if the user does not exist, ConflictError if the
        merge would duplicate another user's username or email.
        """
        ...

    def delete(self, user_id: str) -> None:
        """Delete a user. Deleting a missing user is not an error."""
        ...
