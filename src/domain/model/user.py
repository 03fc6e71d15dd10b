# domain/model/user.py

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any


class SignupMethod(str, Enum):
    """How the account was originally created."""
    LOCAL = 'local'
    GOOGLE = 'google'


# ── Persisted entity ─────────────────────────────────────


@dataclass
class User:
    """Domain model representing a stored user record.

    ``password_hash`` is only populated when the read asked for the secret.
    Never hand this object to a caller outside the services layer; use
    ``to_public()`` instead.
    """
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    signup_method: SignupMethod
    created_at: datetime
    updated_at: datetime
    email_verified: bool = False
    password_hash: str | None = None

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username} email={self.email}>"


# ── Outward projection ───────────────────────────────────


@dataclass(frozen=True)
class PublicUser:
    """Externally safe view of a user. Has no slot for the password hash."""
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    email_verified: bool
    signup_method: SignupMethod
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['signup_method'] = self.signup_method.value
        return data


_PUBLIC_FIELDS = tuple(f.name for f in fields(PublicUser))


def to_public(user: User) -> PublicUser:
    """Project a stored User onto its public representation."""
    return PublicUser(**{name: getattr(user, name) for name in _PUBLIC_FIELDS})


# ── Service inputs ───────────────────────────────────────


@dataclass(frozen=True)
class NewUser:
    """Already validated input for creating a user."""
    username: str
    email: str
    password: str
    signup_method: SignupMethod
    first_name: str = ''
    last_name: str = ''
    email_verified: bool = False


@dataclass(frozen=True)
class UserChanges:
    """Partial update. ``None`` means the field was not supplied."""
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email_verified: bool | None = None
    password: str | None = None
    signup_method: SignupMethod | None = None

    def supplied(self) -> dict[str, Any]:
        """Return only the supplied fields, keyed by attribute name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
