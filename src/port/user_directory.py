from typing import Protocol

from domain.model.user import NewUser, PublicUser, UserChanges


class UserDirectory(Protocol):
    """CRUD over user records. Every returned value is a PublicUser."""

    def find_all(self, limit: int | None = None, offset: int = 0) -> list[PublicUser]:
        ...

    def count(self) -> int:
        ...

    def find_one(self, user_id: str) -> PublicUser | None:
        ...

    def create(self, new_user: NewUser) -> PublicUser:
        ...

    def update(self, user_id: str, changes: UserChanges) -> PublicUser | None:
        ...

    def remove(self, user_id: str) -> None:
        ...

    def exists_by_email_or_username(self, email: str, username: str) -> bool:
        ...
