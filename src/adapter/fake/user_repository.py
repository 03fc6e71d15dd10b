"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable

from domain.model.errors import ConflictError, NotFoundError
from domain.model.user import SignupMethod, User

_UNIQUE_FIELDS = ('username', 'email')


class FakeUserRepository:
    def __init__(self, clock: Callable[[], datetime] | None = None):
        self.store: dict[str, User] = {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _conflicts(self, values: dict[str, Any], exclude_id: str | None = None) -> bool:
        for user in self.store.values():
            if user.id == exclude_id:
                continue
            for key in _UNIQUE_FIELDS:
                if key in values and getattr(user, key) == values[key]:
                    return True
        return False

    @staticmethod
    def _public_copy(user: User) -> User:
        return replace(user, password_hash=None)

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
        if self._conflicts({'username': username, 'email': email}):
            raise ConflictError("Username or email already exists")

        user_id = uuid.uuid4().hex
        now = self._clock()

        user = User(
            id=user_id,
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
            signup_method=signup_method,
            created_at=now,
            updated_at=now,
            email_verified=email_verified,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return replace(user)

    def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        user = self.store.get(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        if self._conflicts(fields, exclude_id=user_id):
            raise ConflictError("Username or email already exists")

        self.store[user_id] = replace(user, **fields, updated_at=self._clock())

    def delete(self, user_id: str) -> None:
        self.store.pop(user_id, None)

    # ── read operations ──────────────────────────────────────

    def find_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    def find_by_email(self, email: str, include_secret: bool = False) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user) if include_secret else self._public_copy(user)
        return None

    def find_by_email_or_username(self, email: str, username: str) -> User | None:
        for user in self.store.values():
            if user.email == email or user.username == username:
                return self._public_copy(user)
        return None

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[User]:
        users = sorted(self.store.values(), key=lambda u: u.created_at, reverse=True)[offset:]
        if limit is not None:
            users = users[:limit]
        return [self._public_copy(u) for u in users]

    def count(self) -> int:
        return len(self.store)
